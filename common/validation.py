from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from common.exceptions import ValidationError


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of a request check.
    - kind: short machine-readable category ("length", "duplicate", ...); empty when valid
    - message: human-readable reason; empty when valid
    - offending: values that caused the failure (e.g. product IDs)
    """
    is_valid: bool
    kind: str = ""
    message: str = ""
    offending: List[int] = field(default_factory=list)

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def error(cls, kind: str, message: str, offending: Optional[List[int]] = None) -> "ValidationResult":
        return cls(is_valid=False, kind=kind, message=message, offending=list(offending or []))

    def as_error(self) -> ValidationError:
        """
        Build the ValidationError for a failed check. Offending IDs travel as error details.
        """
        details = {"kind": self.kind}
        if self.offending:
            details["productIds"] = self.offending
        return ValidationError(self.message, details)

    def raise_for_error(self) -> None:
        if not self.is_valid:
            raise self.as_error()


def validate_text_length(value: Optional[str], label: str, min_length: int, max_length: int) -> ValidationResult:
    """
    Check a required free-text value, measured after trimming surrounding whitespace.
    """
    if value is None or not value.strip():
        return ValidationResult.error("required", f"{label} is required.")
    length = len(value.strip())
    if length < min_length:
        return ValidationResult.error("length", f"{label} must be at least {min_length} characters long.")
    if length > max_length:
        return ValidationResult.error("length", f"{label} cannot exceed {max_length} characters.")
    return ValidationResult.ok()


def validate_decimal_range(value: Optional[Decimal], label: str, minimum: Decimal, maximum: Decimal) -> ValidationResult:
    """
    Check minimum <= value <= maximum. `minimum` is the smallest accepted value.
    """
    if value is None:
        return ValidationResult.error("required", f"{label} is required.")
    if not value.is_finite():
        return ValidationResult.error("range", f"{label} must be a finite number.")
    if value < minimum:
        return ValidationResult.error("range", f"{label} must be at least {minimum:,}.")
    if value > maximum:
        return ValidationResult.error("range", f"{label} cannot exceed {maximum:,}.")
    return ValidationResult.ok()


def first_error(*results: ValidationResult) -> ValidationResult:
    """
    Return the first failed result, or a passing one when all checks pass.
    """
    for result in results:
        if not result.is_valid:
            return result
    return ValidationResult.ok()
