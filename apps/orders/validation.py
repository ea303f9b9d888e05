from collections import Counter
from typing import AbstractSet, List, Sequence

from common.validation import ValidationResult, validate_text_length
from constants.limits import MAX_LINES_PER_ORDER, MIN_LINES_PER_ORDER, NAME_MAX_LENGTH, NAME_MIN_LENGTH


def find_duplicates(product_ids: Sequence[int]) -> List[int]:
    """
    IDs that appear more than once, in order of first appearance.
    """
    counts = Counter(product_ids)
    seen = set()
    duplicates: List[int] = []
    for pid in product_ids:
        if counts[pid] > 1 and pid not in seen:
            duplicates.append(pid)
            seen.add(pid)
    return duplicates


def validate_customer_name(name: str) -> ValidationResult:
    return validate_text_length(name, "Customer name", NAME_MIN_LENGTH, NAME_MAX_LENGTH)


def validate_line_request(product_ids: Sequence[int]) -> ValidationResult:
    """
    Shape checks on a requested line set, done before touching the database:
    at least one product, at most MAX_LINES_PER_ORDER, no product twice.
    """
    if len(product_ids) < MIN_LINES_PER_ORDER:
        return ValidationResult.error("empty", "The order must include at least one product.")
    if len(product_ids) > MAX_LINES_PER_ORDER:
        return ValidationResult.error(
            "too_many", f"An order cannot include more than {MAX_LINES_PER_ORDER} products."
        )
    duplicates = find_duplicates(product_ids)
    if duplicates:
        listed = ", ".join(str(pid) for pid in duplicates)
        return ValidationResult.error(
            "duplicate", f"The following products are duplicated in the order: {listed}", duplicates
        )
    return ValidationResult.ok()


def validate_products_exist(product_ids: Sequence[int], existing_ids: AbstractSet[int]) -> ValidationResult:
    """
    Every requested ID must be in `existing_ids` (the IDs found in the catalog).
    """
    missing = [pid for pid in product_ids if pid not in existing_ids]
    if missing:
        listed = ", ".join(str(pid) for pid in missing)
        return ValidationResult.error("missing", f"The following products do not exist: {listed}", missing)
    return ValidationResult.ok()
