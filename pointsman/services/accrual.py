"""Accrual service - points policy and award orchestration.

compute_accrual() is pure: it prices one purchase event. award_points()
applies it to the ledger, consuming the promotional code when it matched.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_DOWN, Decimal, InvalidOperation

from django.db import transaction

from pointsman.conf import pointsman_settings
from pointsman.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from pointsman.models import MAX_POINTS, Customer, PromotionalCode, Store, StoreCustomerBalance
from pointsman.services import balance as balance_service
from pointsman.services import promo_codes
from pointsman.signals import points_awarded
from pointsman.validation import require_ids

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CampaignWindow:
    """A promotional period: `duration_days` counted from `anchor`."""

    anchor: date
    duration_days: int

    @classmethod
    def from_settings(cls) -> "CampaignWindow":
        return cls(
            anchor=pointsman_settings.campaign_anchor,
            duration_days=pointsman_settings.CAMPAIGN_DURATION_DAYS,
        )

    def contains(self, day: date) -> bool:
        """
        Whether `day` earns the campaign bonus.

        Same calendar month and year as the anchor, and a day-of-week
        offset (Sunday = 0) below the duration. The weekday offset wraps
        every week, so with the default 7-day duration every day of the
        anchor month qualifies.
        """
        if day.year != self.anchor.year or day.month != self.anchor.month:
            return False
        offset = _weekday(day) - _weekday(self.anchor)
        return abs(offset) < self.duration_days


@dataclass(frozen=True)
class Accrual:
    """Points for one accrual event, itemized."""

    base: int
    code_bonus: int = 0
    date_bonus: int = 0

    @property
    def points(self) -> int:
        return self.base + self.code_bonus + self.date_bonus

    @property
    def code_matched(self) -> bool:
        """The caller must rotate the store's code exactly once."""
        return self.code_bonus > 0


def compute_accrual(
    income,
    submitted_code=None,
    event_date=None,
    code_state: PromotionalCode | int | None = None,
    campaign: CampaignWindow | None = None,
) -> Accrual:
    """
    Price one accrual event.

    Base points are income * INCOME_MULTIPLIER. A code equal to the store's
    active code adds CODE_BONUS; otherwise an event date inside the
    campaign window adds DATE_BONUS.

    Args:
        income: Purchase amount (non-negative number)
        submitted_code: Code presented by the customer (int or numeric string)
        event_date: Date of the purchase (date, datetime or ISO string)
        code_state: The store's active code (PromotionalCode or plain int)
        campaign: Campaign window (defaults to settings)

    Raises:
        InvalidArgumentError: If income is missing, non-numeric or negative
            or prices above MAX_POINTS
    """
    base = parse_income(income) * pointsman_settings.INCOME_MULTIPLIER
    base = int(base.to_integral_value(rounding=ROUND_DOWN))
    if base + max(pointsman_settings.CODE_BONUS, pointsman_settings.DATE_BONUS) > MAX_POINTS:
        raise InvalidArgumentError(
            "POINTS_LIMIT_EXCEEDED",
            field="income",
            value=income,
            limit=MAX_POINTS,
        )

    active_code = code_state.code if isinstance(code_state, PromotionalCode) else code_state
    code = parse_code(submitted_code)
    if code is not None and active_code is not None and code == active_code:
        return Accrual(base=base, code_bonus=pointsman_settings.CODE_BONUS)

    day = parse_date(event_date)
    campaign = campaign or CampaignWindow.from_settings()
    if day is not None and campaign.contains(day):
        return Accrual(base=base, date_bonus=pointsman_settings.DATE_BONUS)

    return Accrual(base=base)


def award_points(
    store_id: int,
    customer_id: int,
    income,
    submitted_code=None,
    event_date=None,
) -> StoreCustomerBalance:
    """
    Credit a purchase to the customer's balance at a store.

    Opens the balance on the first purchase. The returned balance is the
    committed state.

    Raises:
        InvalidArgumentError: If ids are not positive integers or income is invalid
        NotFoundError: If the store or customer does not exist
    """
    require_ids(store_id=store_id, customer_id=customer_id)
    parse_income(income)

    if not Store.objects.filter(pk=store_id, is_active=True).exists():
        raise NotFoundError("STORE_NOT_FOUND", store_id=store_id)
    if not Customer.objects.filter(pk=customer_id, is_active=True).exists():
        raise NotFoundError("CUSTOMER_NOT_FOUND", customer_id=customer_id)

    campaign = CampaignWindow.from_settings()

    with transaction.atomic():
        if balance_service.get_for_update(store_id, customer_id) is None:
            try:
                balance_service.create(store_id, customer_id)
            except ConflictError:
                # Opened concurrently by another request
                pass

        accrual = compute_accrual(
            income,
            submitted_code,
            event_date,
            promo_codes.get_state(store_id),
            campaign,
        )
        if accrual.code_matched and not promo_codes.try_consume(store_id, parse_code(submitted_code)):
            logger.warning("Promotional code already consumed: store=%s customer=%s", store_id, customer_id)
            accrual = compute_accrual(income, None, event_date, None, campaign)

        balance = balance_service.apply_delta(store_id, customer_id, accrual.points)

    logger.info(
        "Points awarded: store=%s customer=%s points=%s (base=%s code=%s date=%s) balance=%s",
        store_id,
        customer_id,
        accrual.points,
        accrual.base,
        accrual.code_bonus,
        accrual.date_bonus,
        balance.points,
    )
    points_awarded.send(
        sender=StoreCustomerBalance,
        balance=balance,
        points=accrual.points,
        code_matched=accrual.code_matched,
    )
    return balance


# =============================================================================
# Input parsing
# =============================================================================


def parse_income(income) -> Decimal:
    if income is None or isinstance(income, bool):
        raise InvalidArgumentError(message="Income is required", field="income", value=income)
    try:
        value = Decimal(str(income).strip())
    except InvalidOperation:
        raise InvalidArgumentError(message="Income must be a number", field="income", value=income)
    if not value.is_finite() or value < 0:
        raise InvalidArgumentError(
            message="Income must be a non-negative number",
            field="income",
            value=income,
        )
    return value


def parse_code(code) -> int | None:
    """Numeric code or None. Leading digits of strings are honoured ("1234x" -> 1234)."""
    if code is None or isinstance(code, bool):
        return None
    if isinstance(code, int):
        return code
    text = str(code).strip()
    digits = ""
    for char in text:
        if not char.isdigit():
            break
        digits += char
    return int(digits) if digits else None


def parse_date(value) -> date | None:
    """Date of the event, or None when absent or unparsable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            return None
    return None


def _weekday(day: date) -> int:
    """Day of week with Sunday = 0."""
    return day.isoweekday() % 7
