"""
Django Pointsman - Store loyalty points ledger.

Usage:
    from pointsman import LoyaltyService

    balance = LoyaltyService.award_points(store_id=1, customer_id=7, income=5)
    prize = LoyaltyService.redeem(store_id=1, customer_id=7, prize_id=9)
    code = LoyaltyService.current_code(store_id=1)
"""


def __getattr__(name):
    if name == "LoyaltyService":
        from pointsman.service import LoyaltyService

        return LoyaltyService
    if name == "PointsmanError":
        from pointsman.exceptions import PointsmanError

        return PointsmanError
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["LoyaltyService", "PointsmanError"]
__version__ = "0.1.0"
