from datetime import datetime, timezone
from typing import Any, Dict, Optional


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def success_response(data: Any = None, message: str = "Operation successful") -> Dict[str, Any]:
    """
    Standard success envelope. `data` is omitted when there is nothing to return
    (e.g. after a delete).
    """
    payload: Dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        payload["data"] = data
    payload["timestamp"] = _timestamp()
    return payload


def error_response(message: str, error: Optional[Any] = None) -> Dict[str, Any]:
    """
    Standard error envelope. `error` carries optional structured details
    such as the offending product IDs.
    """
    payload: Dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        payload["error"] = error
    payload["timestamp"] = _timestamp()
    return payload
