"""
Pointsman signals - public event API.

Emitted signals:
- points_awarded: Emitted by services.accrual.award_points()
- prize_redeemed: Emitted by services.redemption.redeem()
"""

from django.dispatch import Signal

# Ledger signals (emitted by services once their transaction block succeeds)
points_awarded = Signal()  # sender=StoreCustomerBalance, balance, points, code_matched
prize_redeemed = Signal()  # sender=HistoryRecord, record
