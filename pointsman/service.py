"""
Pointsman public API.

CORE (ledger):
    LoyaltyService.award_points(...)  - Credit a purchase
    LoyaltyService.redeem(...)        - Exchange points for a prize
    LoyaltyService.current_code(...)  - Store's active promotional code

CONVENIENCE (reads):
    LoyaltyService.get_balance(...), stores_for_customer(...),
    customers_for_store(...), prizes(...), history(...)
"""

from pointsman.models import HistoryRecord, Prize, StoreCustomerBalance
from pointsman.services import accrual, balance, catalog, history, promo_codes, redemption


class LoyaltyService:
    """
    Pointsman public API.

    Uses @classmethod for extensibility. Mutations delegate to the
    services package, where every multi-row write runs in transaction.atomic().
    """

    # ======================================================================
    # CORE API
    # ======================================================================

    @classmethod
    def award_points(
        cls,
        store_id: int,
        customer_id: int,
        income,
        code=None,
        date=None,
    ) -> StoreCustomerBalance:
        """
        Credit a purchase.

        Args:
            store_id: Store where the purchase happened
            customer_id: Purchasing customer
            income: Purchase amount
            code: Promotional code presented, if any
            date: Purchase date, if any

        Returns:
            Updated StoreCustomerBalance
        """
        return accrual.award_points(store_id, customer_id, income, code, date)

    @classmethod
    def redeem(
        cls,
        store_id: int,
        customer_id: int,
        prize_id: int,
        idempotency_key: str | None = None,
    ) -> Prize:
        """
        Exchange points for a prize.

        Returns:
            The redeemed Prize. The HistoryRecord stays in the audit trail.
        """
        record = redemption.redeem(store_id, customer_id, prize_id, idempotency_key)
        return record.prize_snapshot()

    @classmethod
    def current_code(cls, store_id: int) -> int:
        """Active promotional code of a store."""
        return promo_codes.current_code(store_id)

    # ======================================================================
    # CONVENIENCE API
    # ======================================================================

    @classmethod
    def get_balance(cls, store_id: int, customer_id: int) -> int:
        """Points at a store. Returns 0 if the customer never bought there."""
        found = balance.get(store_id, customer_id)
        return found.points if found else 0

    @classmethod
    def stores_for_customer(cls, customer_id: int) -> list[StoreCustomerBalance]:
        return balance.list_for_customer(customer_id)

    @classmethod
    def customers_for_store(cls, store_id: int) -> list[StoreCustomerBalance]:
        return balance.list_for_store(store_id)

    @classmethod
    def prizes(cls, store_id: int) -> list[Prize]:
        return catalog.list_prizes(store_id)

    @classmethod
    def history(
        cls,
        store_id: int | None = None,
        customer_id: int | None = None,
        sector: str | None = None,
        limit: int | None = None,
    ) -> list[HistoryRecord]:
        """Redemption history, newest first."""
        return history.list_records(store_id=store_id, customer_id=customer_id, sector=sector, limit=limit)
