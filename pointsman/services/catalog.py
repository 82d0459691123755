"""Catalog service - read-only prize lookups."""

from pointsman.models import Prize
from pointsman.validation import require_ids


def get_prize(prize_id: int, store_id: int) -> Prize | None:
    """Get a prize offered by the given store."""
    require_ids(prize_id=prize_id, store_id=store_id)
    try:
        return Prize.objects.select_related("store").get(pk=prize_id, store_id=store_id)
    except Prize.DoesNotExist:
        return None


def list_prizes(store_id: int) -> list[Prize]:
    """Prizes of a store, cheapest first."""
    require_ids(store_id=store_id)
    return list(Prize.objects.filter(store_id=store_id).order_by("points", "id"))
