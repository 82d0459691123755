"""Redemption service - exchange points for a prize.

A redemption moves through validate, load, affordability pre-check and one
atomic block that debits the balance and appends the history record. The
pre-check only produces a fast error; the conditional debit inside the
transaction decides. Either both writes commit or neither does.
"""

import logging

from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from pointsman.exceptions import (
    ConflictError,
    InsufficientPointsError,
    NotFoundError,
    PointsmanError,
    RedemptionFailedError,
)
from pointsman.models import Customer, HistoryRecord
from pointsman.services import balance as balance_service
from pointsman.services import catalog
from pointsman.services import history as history_service
from pointsman.signals import prize_redeemed
from pointsman.validation import require_ids

logger = logging.getLogger(__name__)


def redeem(
    store_id: int,
    customer_id: int,
    prize_id: int,
    idempotency_key: str | None = None,
) -> HistoryRecord:
    """
    Redeem a prize with the customer's points at a store.

    Args:
        store_id: Store offering the prize
        customer_id: Redeeming customer
        prize_id: Prize in the store's catalog
        idempotency_key: Optional caller token; retries with the same key
            return the original record without debiting again

    Returns:
        The HistoryRecord of the redemption (record.prize is the prize)

    Raises:
        InvalidArgumentError: If an id is not a positive integer
        NotFoundError: If balance, prize, active store or active customer is missing
        InsufficientPointsError: If the balance cannot cover the prize
            (InsufficientBalanceError when a concurrent debit won the race)
        ConflictError: If idempotency_key belongs to a different redemption
        RedemptionFailedError: If the transaction failed; nothing was written
    """
    require_ids(store_id=store_id, customer_id=customer_id, prize_id=prize_id)

    if idempotency_key:
        previous = history_service.find_by_idempotency_key(idempotency_key)
        if previous is not None:
            return _replay(previous, store_id, customer_id, prize_id, idempotency_key)

    balance = balance_service.get(store_id, customer_id)
    if balance is None:
        raise NotFoundError("BALANCE_NOT_FOUND", store_id=store_id, customer_id=customer_id)

    prize = catalog.get_prize(prize_id, store_id)
    if prize is None:
        raise NotFoundError("PRIZE_NOT_FOUND", prize_id=prize_id, store_id=store_id)
    if not prize.store.is_active:
        raise NotFoundError("STORE_NOT_FOUND", store_id=store_id)

    try:
        customer = Customer.objects.get(pk=customer_id, is_active=True)
    except Customer.DoesNotExist:
        raise NotFoundError("CUSTOMER_NOT_FOUND", customer_id=customer_id)

    if balance.points < prize.points:
        logger.warning(
            "Redemption rejected: store=%s customer=%s prize=%s available=%s required=%s",
            store_id,
            customer_id,
            prize_id,
            balance.points,
            prize.points,
        )
        raise InsufficientPointsError(available=balance.points, required=prize.points)

    try:
        with transaction.atomic():
            balance = balance_service.apply_delta(store_id, customer_id, -prize.points)
            record = history_service.append(
                store=prize.store,
                customer=customer,
                prize=prize,
                customer_age=customer.age_on(timezone.localdate()),
                idempotency_key=idempotency_key,
            )
    except PointsmanError:
        raise
    except IntegrityError as exc:
        previous = history_service.find_by_idempotency_key(idempotency_key) if idempotency_key else None
        if previous is not None:
            return _replay(previous, store_id, customer_id, prize_id, idempotency_key)
        logger.exception("Redemption failed: store=%s customer=%s prize=%s", store_id, customer_id, prize_id)
        raise RedemptionFailedError(store_id=store_id, customer_id=customer_id, prize_id=prize_id) from exc
    except DatabaseError as exc:
        logger.exception("Redemption failed: store=%s customer=%s prize=%s", store_id, customer_id, prize_id)
        raise RedemptionFailedError(store_id=store_id, customer_id=customer_id, prize_id=prize_id) from exc

    logger.info(
        "Prize redeemed: store=%s customer=%s prize=%s points=%s balance=%s record=%s",
        store_id,
        customer_id,
        prize_id,
        record.points_spent,
        balance.points,
        record.pk,
    )
    prize_redeemed.send(sender=HistoryRecord, record=record)
    return record


def _replay(
    record: HistoryRecord,
    store_id: int,
    customer_id: int,
    prize_id: int,
    idempotency_key: str,
) -> HistoryRecord:
    if (record.store_id, record.customer_id, record.prize_ref) != (store_id, customer_id, prize_id):
        raise ConflictError(
            "IDEMPOTENCY_KEY_REUSED",
            idempotency_key=idempotency_key,
            record_id=record.pk,
        )
    logger.info("Redemption replayed: key=%s record=%s", idempotency_key, record.pk)
    return record
