"""Pointsman models.

Plain entities (Store, Customer, Prize) are maintained by external CRUD;
the ledger only reads them. StoreCustomerBalance, HistoryRecord and
PromotionalCode are the state the ledger owns.
"""

from pointsman.models.store import Store
from pointsman.models.customer import Customer
from pointsman.models.prize import Prize
from pointsman.models.balance import MAX_POINTS, StoreCustomerBalance
from pointsman.models.history import HistoryRecord
from pointsman.models.promo_code import PromotionalCode

__all__ = [
    # Entities
    "Store",
    "Customer",
    "Prize",
    # Ledger state
    "StoreCustomerBalance",
    "MAX_POINTS",
    "HistoryRecord",
    "PromotionalCode",
]
