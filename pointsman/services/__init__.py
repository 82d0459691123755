"""Pointsman services.

- balance: StoreCustomerBalance read/create/update (the balance repository)
- history: append-only redemption history
- catalog: read-only prize lookups
- promo_codes: per-store promotional code issuer
- accrual: accrual policy and the award_points orchestration
- redemption: the atomic redemption engine
"""

from pointsman.services import balance
from pointsman.services import history
from pointsman.services import catalog
from pointsman.services import promo_codes
from pointsman.services import accrual
from pointsman.services import redemption

__all__ = ["balance", "history", "catalog", "promo_codes", "accrual", "redemption"]
