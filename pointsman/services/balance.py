"""Balance service - StoreCustomerBalance persistence.

Every debit goes through apply_delta(), whose conditional UPDATE is the
authoritative guard against negative balances. Reads made before it are
only advisory.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from pointsman.exceptions import (
    ConflictError,
    InsufficientBalanceError,
    InvalidArgumentError,
    NotFoundError,
)
from pointsman.models import MAX_POINTS, StoreCustomerBalance
from pointsman.validation import require_ids

logger = logging.getLogger(__name__)


def get(store_id: int, customer_id: int) -> StoreCustomerBalance | None:
    """Get balance for (store, customer). None means no relationship yet."""
    require_ids(store_id=store_id, customer_id=customer_id)
    try:
        return StoreCustomerBalance.objects.get(store_id=store_id, customer_id=customer_id)
    except StoreCustomerBalance.DoesNotExist:
        return None


def get_for_update(store_id: int, customer_id: int) -> StoreCustomerBalance | None:
    """
    Get balance with a row-level lock.

    MUST be called inside transaction.atomic().
    """
    try:
        return StoreCustomerBalance.objects.select_for_update().get(
            store_id=store_id,
            customer_id=customer_id,
        )
    except StoreCustomerBalance.DoesNotExist:
        return None


def list_for_customer(customer_id: int) -> list[StoreCustomerBalance]:
    """All balances a customer holds, one per store."""
    require_ids(customer_id=customer_id)
    return list(StoreCustomerBalance.objects.filter(customer_id=customer_id).order_by("store_id"))


def list_for_store(store_id: int) -> list[StoreCustomerBalance]:
    """All customer balances held at a store."""
    require_ids(store_id=store_id)
    return list(StoreCustomerBalance.objects.filter(store_id=store_id).order_by("customer_id"))


def create(store_id: int, customer_id: int, initial_points: int = 0) -> StoreCustomerBalance:
    """
    Create the balance row for (store, customer).

    Raises:
        ConflictError: If the pair already has a balance
        InvalidArgumentError: If initial_points is negative
    """
    require_ids(store_id=store_id, customer_id=customer_id)
    if initial_points < 0:
        raise InvalidArgumentError(
            message="Initial points cannot be negative",
            field="initial_points",
            value=initial_points,
        )

    try:
        with transaction.atomic():
            balance = StoreCustomerBalance.objects.create(
                store_id=store_id,
                customer_id=customer_id,
                points=initial_points,
            )
    except IntegrityError:
        if StoreCustomerBalance.objects.filter(store_id=store_id, customer_id=customer_id).exists():
            raise ConflictError("BALANCE_EXISTS", store_id=store_id, customer_id=customer_id)
        raise

    logger.info("Balance opened: store=%s customer=%s points=%s", store_id, customer_id, initial_points)
    return balance


def apply_delta(store_id: int, customer_id: int, delta: int) -> StoreCustomerBalance:
    """
    Add `delta` points (negative for debits) in one conditional UPDATE.

    The WHERE clause only matches when the result stays non-negative, so two
    concurrent debits can never both succeed against the same points.

    Raises:
        NotFoundError: If the pair has no balance
        InsufficientBalanceError: If the result would be negative (balance unchanged)
        InvalidArgumentError: If the result would exceed MAX_POINTS (balance unchanged)
    """
    require_ids(store_id=store_id, customer_id=customer_id)
    if isinstance(delta, bool) or not isinstance(delta, int):
        raise InvalidArgumentError(message="Delta must be an integer", field="delta", value=delta)
    if abs(delta) > MAX_POINTS:
        raise InvalidArgumentError("POINTS_LIMIT_EXCEEDED", field="delta", value=delta, limit=MAX_POINTS)

    with transaction.atomic():
        rows = StoreCustomerBalance.objects.filter(store_id=store_id, customer_id=customer_id)
        if delta < 0:
            rows = rows.filter(points__gte=-delta)
        elif delta > 0:
            rows = rows.filter(points__lte=MAX_POINTS - delta)

        updated = rows.update(points=F("points") + delta, updated_at=timezone.now())

        if not updated:
            current = get(store_id, customer_id)
            if current is None:
                raise NotFoundError("BALANCE_NOT_FOUND", store_id=store_id, customer_id=customer_id)
            if delta > 0:
                raise InvalidArgumentError(
                    "POINTS_LIMIT_EXCEEDED",
                    field="delta",
                    value=delta,
                    available=current.points,
                    limit=MAX_POINTS,
                )
            raise InsufficientBalanceError(
                available=current.points,
                requested=-delta,
                store_id=store_id,
                customer_id=customer_id,
            )

        return StoreCustomerBalance.objects.get(store_id=store_id, customer_id=customer_id)
