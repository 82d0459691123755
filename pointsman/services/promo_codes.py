"""Promotional code service - one rotating code per store.

Consuming a code is a single conditional UPDATE filtered on the code being
consumed: of several concurrent callers submitting the same code, exactly
one sees an affected row and gets the bonus.
"""

import logging
import random

from django.db import IntegrityError, transaction
from django.utils import timezone

from pointsman.conf import pointsman_settings
from pointsman.models import PromotionalCode
from pointsman.validation import require_id

logger = logging.getLogger(__name__)


def generate_code(exclude: int | None = None) -> int:
    """Random code in [PROMO_CODE_MIN, PROMO_CODE_MAX], never equal to `exclude`."""
    low = pointsman_settings.PROMO_CODE_MIN
    high = pointsman_settings.PROMO_CODE_MAX
    while True:
        code = random.randint(low, high)
        if code != exclude or low == high:
            return code


def get_state(store_id: int) -> PromotionalCode:
    """Get the store's code row, issuing the first code if there is none."""
    require_id(store_id, "store_id")
    try:
        return PromotionalCode.objects.get(store_id=store_id)
    except PromotionalCode.DoesNotExist:
        pass

    try:
        with transaction.atomic():
            state = PromotionalCode.objects.create(store_id=store_id, code=generate_code())
    except IntegrityError:
        # Issued concurrently by another request
        return PromotionalCode.objects.get(store_id=store_id)

    logger.info("Promotional code issued: store=%s", store_id)
    return state


def current_code(store_id: int) -> int:
    """Active code of the store."""
    return get_state(store_id).code


def try_consume(store_id: int, submitted_code: int) -> bool:
    """
    Compare and rotate in one statement.

    Returns:
        True if `submitted_code` was the active code (now replaced), False otherwise
    """
    get_state(store_id)
    updated = PromotionalCode.objects.filter(store_id=store_id, code=submitted_code).update(
        code=generate_code(exclude=submitted_code),
        issued_at=timezone.now(),
    )
    if updated:
        logger.info("Promotional code consumed and rotated: store=%s", store_id)
    return bool(updated)


def rotate(store_id: int) -> int:
    """Replace the store's code unconditionally. Returns the new code."""
    state = get_state(store_id)
    new_code = generate_code(exclude=state.code)
    PromotionalCode.objects.filter(pk=state.pk).update(code=new_code, issued_at=timezone.now())
    logger.info("Promotional code rotated: store=%s", store_id)
    return new_code
