"""Pointsman exceptions."""


class BaseError(Exception):
    """
    Structured exception with a machine-readable code and free-form data.

    Subclasses provide `_default_messages` (code -> message) and may pin a
    `default_code` so they can be raised without arguments.
    """

    default_code = "ERROR"
    _default_messages: dict[str, str] = {}

    def __init__(self, code: str | None = None, message: str | None = None, **data):
        self.code = code or self.default_code
        self.message = message or self._default_messages.get(self.code, self.code)
        self.data = data
        super().__init__(self.message)

    def __repr__(self):
        return f"{type(self).__name__}({self.code!r}, {self.message!r})"

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": dict(self.data)}


class PointsmanError(BaseError):
    """
    Structured exception for ledger operations.

    Usage:
        try:
            LoyaltyService.redeem(store_id, customer_id, prize_id)
        except PointsmanError as e:
            if e.code == "INSUFFICIENT_POINTS":
                handle_not_enough_points()
    """

    _default_messages = {
        "INVALID_ARGUMENT": "Invalid argument",
        "NOT_FOUND": "Not found",
        "BALANCE_NOT_FOUND": "Customer has no balance at this store",
        "PRIZE_NOT_FOUND": "Prize not found",
        "CUSTOMER_NOT_FOUND": "Customer not found",
        "STORE_NOT_FOUND": "Store not found",
        "BALANCE_EXISTS": "Balance already exists for this store and customer",
        "IDEMPOTENCY_KEY_REUSED": "Idempotency key already used for another redemption",
        "INSUFFICIENT_POINTS": "Not enough points",
        "INSUFFICIENT_BALANCE": "Not enough points",
        "POINTS_LIMIT_EXCEEDED": "Points exceed the balance limit",
        "REDEMPTION_FAILED": "Redemption failed",
        "HISTORY_IMMUTABLE": "History records cannot be changed",
    }


class InvalidArgumentError(PointsmanError):
    """Malformed or missing identifiers or income."""

    default_code = "INVALID_ARGUMENT"


class NotFoundError(PointsmanError):
    """Referenced store, customer, prize or balance does not exist."""

    default_code = "NOT_FOUND"


class ConflictError(PointsmanError):
    default_code = "BALANCE_EXISTS"


class InsufficientPointsError(PointsmanError):
    """Balance below the prize cost."""

    default_code = "INSUFFICIENT_POINTS"


class InsufficientBalanceError(InsufficientPointsError):
    """A write would drive the balance negative."""

    default_code = "INSUFFICIENT_BALANCE"


class RedemptionFailedError(PointsmanError):
    """Infrastructure failure inside the redemption transaction."""

    default_code = "REDEMPTION_FAILED"
