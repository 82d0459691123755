"""Argument checks shared by the ledger services."""

from pointsman.exceptions import InvalidArgumentError


def require_id(value, field: str) -> int:
    """Return `value` if it is a positive integer, else raise InvalidArgumentError."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgumentError(
            message=f"{field} must be a positive integer",
            field=field,
            value=value,
        )
    return value


def require_ids(**values) -> None:
    for field, value in values.items():
        require_id(value, field)
