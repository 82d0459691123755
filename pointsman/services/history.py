"""History service - append-only redemption ledger.

Records are written once by the redemption engine and only read afterwards.
"""

from pointsman.conf import pointsman_settings
from pointsman.exceptions import InvalidArgumentError
from pointsman.models import Customer, HistoryRecord, Prize, Store
from pointsman.validation import require_id


def append(
    *,
    store: Store,
    customer: Customer,
    prize: Prize,
    customer_age: int | None,
    idempotency_key: str | None = None,
) -> HistoryRecord:
    """Write a history record, copying prize and store details by value."""
    return HistoryRecord.objects.create(
        store=store,
        store_sector=store.sector,
        customer=customer,
        customer_age=customer_age,
        prize=prize,
        prize_ref=prize.pk,
        prize_name=prize.name,
        prize_category=prize.category,
        points_spent=prize.points,
        idempotency_key=idempotency_key or None,
    )


def get(record_id: int) -> HistoryRecord | None:
    require_id(record_id, "record_id")
    try:
        return HistoryRecord.objects.get(pk=record_id)
    except HistoryRecord.DoesNotExist:
        return None


def find_by_idempotency_key(key: str) -> HistoryRecord | None:
    if not key:
        return None
    return HistoryRecord.objects.filter(idempotency_key=key).first()


def list_records(
    store_id: int | None = None,
    customer_id: int | None = None,
    sector: str | None = None,
    limit: int | None = None,
) -> list[HistoryRecord]:
    """
    List history records, newest first.

    Args:
        store_id: Only records of this store
        customer_id: Only records of this customer
        sector: Only records whose store sector matches (at least 3 characters)
        limit: Maximum records (defaults to HISTORY_LIMIT)
    """
    records = HistoryRecord.objects.all()

    if store_id is not None:
        records = records.filter(store_id=require_id(store_id, "store_id"))
    if customer_id is not None:
        records = records.filter(customer_id=require_id(customer_id, "customer_id"))
    if sector is not None:
        if not isinstance(sector, str) or len(sector) < 3:
            raise InvalidArgumentError(
                message="Sector must have at least 3 characters",
                field="sector",
                value=sector,
            )
        records = records.filter(store_sector=sector)

    if limit is None:
        limit = pointsman_settings.HISTORY_LIMIT
    return list(records[:limit])
