from decimal import Decimal

from budgetapp.errors import ValidationError


CENT = Decimal("0.01")

# Numeric(12, 2) leaves room for ten digits before the point
MAX_AMOUNT = Decimal("9999999999.99")


def validate_money(amount: Decimal | None, label: str) -> Decimal:
    """Reject values the Numeric(12, 2) columns would round or overflow."""
    if amount is None or not amount.is_finite():
        raise ValidationError(f"{label} must be a number")

    if abs(amount) > MAX_AMOUNT:
        raise ValidationError(f"{label} must not exceed {MAX_AMOUNT}")

    if amount != amount.quantize(CENT):
        raise ValidationError(f"{label} must have at most two decimal places")

    return amount
