"""Tests for the accrual policy and award_points."""

from datetime import date, datetime
from unittest.mock import patch

import pytest

from pointsman.exceptions import InvalidArgumentError, NotFoundError
from pointsman.models import PromotionalCode, StoreCustomerBalance
from pointsman.services import promo_codes
from pointsman.services.accrual import (
    Accrual,
    CampaignWindow,
    award_points,
    compute_accrual,
    parse_code,
    parse_date,
)
from pointsman.signals import points_awarded


# Anchor is a Wednesday (Sunday = 0 -> weekday 3)
CAMPAIGN = CampaignWindow(anchor=date(2024, 3, 6), duration_days=7)


# ═══════════════════════════════════════════════════════════════════
# Policy (no database)
# ═══════════════════════════════════════════════════════════════════


class TestComputeAccrual:
    def test_base_only(self):
        result = compute_accrual(5, campaign=CAMPAIGN)
        assert result == Accrual(base=50)
        assert result.points == 50
        assert not result.code_matched

    def test_decimal_income_rounds_down(self):
        assert compute_accrual("2.57", campaign=CAMPAIGN).points == 25

    def test_zero_income(self):
        assert compute_accrual(0, campaign=CAMPAIGN).points == 0

    def test_matching_code(self):
        result = compute_accrual(5, 1234, None, 1234, CAMPAIGN)
        assert result.points == 100
        assert result.code_bonus == 50
        assert result.code_matched

    def test_matching_code_as_string(self):
        assert compute_accrual(5, "1234", None, 1234, CAMPAIGN).code_matched

    def test_code_against_promotional_code_row(self):
        state = PromotionalCode(store_id=1, code=4321)
        assert compute_accrual(1, 4321, None, state, CAMPAIGN).code_matched

    def test_mismatched_code(self):
        result = compute_accrual(5, 1111, None, 1234, CAMPAIGN)
        assert result.points == 50
        assert not result.code_matched

    def test_code_without_active_code(self):
        assert not compute_accrual(5, 1234, None, None, CAMPAIGN).code_matched

    def test_campaign_date(self):
        result = compute_accrual(5, None, date(2024, 3, 20), None, CAMPAIGN)
        assert result.date_bonus == 100
        assert result.points == 150

    def test_date_string(self):
        assert compute_accrual(5, None, "2024-03-20", None, CAMPAIGN).points == 150

    def test_date_other_month(self):
        assert compute_accrual(5, None, date(2024, 4, 3), None, CAMPAIGN).points == 50

    def test_date_other_year(self):
        assert compute_accrual(5, None, date(2023, 3, 6), None, CAMPAIGN).points == 50

    def test_unparsable_date_gives_no_bonus(self):
        assert compute_accrual(5, None, "not-a-date", None, CAMPAIGN).points == 50

    def test_code_bonus_excludes_date_bonus(self):
        result = compute_accrual(5, 1234, date(2024, 3, 20), 1234, CAMPAIGN)
        assert result.code_bonus == 50
        assert result.date_bonus == 0
        assert result.points == 100

    def test_mismatched_code_still_gets_date_bonus(self):
        assert compute_accrual(5, 9999, date(2024, 3, 20), 1234, CAMPAIGN).points == 150

    def test_multipliers_from_settings(self, settings):
        settings.POINTSMAN = {"INCOME_MULTIPLIER": 3, "CODE_BONUS": 7, "DATE_BONUS": 11}
        assert compute_accrual(2, 1234, None, 1234, CAMPAIGN).points == 13
        assert compute_accrual(2, None, date(2024, 3, 20), None, CAMPAIGN).points == 17

    def test_income_above_points_limit(self):
        with pytest.raises(InvalidArgumentError) as exc:
            compute_accrual("1e30", campaign=CAMPAIGN)
        assert exc.value.code == "POINTS_LIMIT_EXCEEDED"
        assert exc.value.data["field"] == "income"

    @pytest.mark.parametrize("income", [None, "abc", "", -1, "-0.5", True, "NaN", "Infinity"])
    def test_invalid_income(self, income):
        with pytest.raises(InvalidArgumentError) as exc:
            compute_accrual(income, campaign=CAMPAIGN)
        assert exc.value.data["field"] == "income"


class TestCampaignWindow:
    """Day-of-week offset from the anchor, within the anchor's month."""

    def test_whole_month_with_weekly_duration(self):
        assert all(CAMPAIGN.contains(date(2024, 3, day)) for day in range(1, 32))

    def test_short_duration_uses_weekday_offset(self):
        window = CampaignWindow(anchor=date(2024, 3, 6), duration_days=3)
        assert window.contains(date(2024, 3, 7))  # Thursday, offset 1
        assert window.contains(date(2024, 3, 4))  # Monday, offset -2
        assert window.contains(date(2024, 3, 27))  # Wednesday three weeks later
        assert not window.contains(date(2024, 3, 10))  # Sunday, offset -3
        assert not window.contains(date(2024, 3, 9))  # Saturday, offset 3

    def test_from_settings(self, settings):
        settings.POINTSMAN = {"CAMPAIGN_ANCHOR": "2025-01-10", "CAMPAIGN_DURATION_DAYS": 2}
        assert CampaignWindow.from_settings() == CampaignWindow(date(2025, 1, 10), 2)

    def test_default_anchor_is_stable(self, settings):
        settings.POINTSMAN = {}
        assert CampaignWindow.from_settings().anchor == CampaignWindow.from_settings().anchor


class TestParsing:
    @pytest.mark.parametrize(
        "value,expected",
        [(1234, 1234), ("1234", 1234), (" 42 ", 42), ("12ab", 12), ("ab", None), (None, None), ("", None)],
    )
    def test_parse_code(self, value, expected):
        assert parse_code(value) == expected

    def test_parse_date(self):
        assert parse_date(datetime(2024, 3, 6, 10, 30)) == date(2024, 3, 6)
        assert parse_date("2024-03-06T10:30:00") == date(2024, 3, 6)
        assert parse_date(12345) is None


# ═══════════════════════════════════════════════════════════════════
# award_points
# ═══════════════════════════════════════════════════════════════════


@pytest.mark.django_db
class TestAwardPoints:
    def test_first_purchase_opens_balance(self, store, customer):
        balance = award_points(store.pk, customer.pk, 5)

        assert balance.points == 50
        assert balance.as_dict() == {"idstore": store.pk, "idcustomer": customer.pk, "points": 50}
        assert StoreCustomerBalance.objects.filter(store=store, customer=customer).count() == 1

    def test_adds_to_existing_balance(self, balance, store, customer):
        assert award_points(store.pk, customer.pk, 3).points == 230

    def test_matching_code_adds_bonus_and_rotates(self, store, customer):
        code = promo_codes.current_code(store.pk)

        balance = award_points(store.pk, customer.pk, 5, submitted_code=code)

        assert balance.points == 100
        assert promo_codes.current_code(store.pk) != code

    def test_matching_code_as_string(self, store, customer):
        code = promo_codes.current_code(store.pk)
        assert award_points(store.pk, customer.pk, 1, submitted_code=str(code)).points == 60

    def test_mismatched_code_keeps_current_code(self, store, customer):
        code = promo_codes.current_code(store.pk)
        wrong = 1000 if code != 1000 else 1001

        balance = award_points(store.pk, customer.pk, 5, submitted_code=wrong)

        assert balance.points == 50
        assert promo_codes.current_code(store.pk) == code

    def test_absent_code_keeps_current_code(self, store, customer):
        code = promo_codes.current_code(store.pk)
        award_points(store.pk, customer.pk, 5)
        assert promo_codes.current_code(store.pk) == code

    def test_code_is_single_use(self, store, customer, customer_b):
        code = promo_codes.current_code(store.pk)

        first = award_points(store.pk, customer.pk, 1, submitted_code=code)
        second = award_points(store.pk, customer_b.pk, 1, submitted_code=code)

        assert first.points == 60
        assert second.points == 10

    def test_campaign_date_bonus(self, store, customer):
        # Test settings anchor the campaign on 2024-03-06
        assert award_points(store.pk, customer.pk, 5, event_date="2024-03-31").points == 150

    def test_date_outside_campaign(self, store, customer):
        assert award_points(store.pk, customer.pk, 5, event_date="2024-04-01").points == 50

    def test_lost_code_race_falls_back_to_date_bonus(self, store, customer):
        code = promo_codes.current_code(store.pk)

        with patch("pointsman.services.accrual.promo_codes.try_consume", return_value=False):
            balance = award_points(store.pk, customer.pk, 5, submitted_code=code, event_date="2024-03-20")

        assert balance.points == 150

    def test_invalid_income_writes_nothing(self, store, customer):
        with pytest.raises(InvalidArgumentError):
            award_points(store.pk, customer.pk, "lots")
        assert not StoreCustomerBalance.objects.exists()

    def test_income_above_points_limit_writes_nothing(self, store, customer):
        with pytest.raises(InvalidArgumentError) as exc:
            award_points(store.pk, customer.pk, "1e30")

        assert exc.value.code == "POINTS_LIMIT_EXCEEDED"
        assert not StoreCustomerBalance.objects.exists()

    @pytest.mark.parametrize("store_id,customer_id", [(0, 1), (1, -2), ("1", 1), (None, 1)])
    def test_invalid_ids(self, store_id, customer_id):
        with pytest.raises(InvalidArgumentError):
            award_points(store_id, customer_id, 5)

    def test_unknown_store(self, customer):
        with pytest.raises(NotFoundError) as exc:
            award_points(999, customer.pk, 5)
        assert exc.value.code == "STORE_NOT_FOUND"

    def test_unknown_customer(self, store):
        with pytest.raises(NotFoundError) as exc:
            award_points(store.pk, 999, 5)
        assert exc.value.code == "CUSTOMER_NOT_FOUND"

    def test_emits_points_awarded(self, store, customer):
        received = []

        def handler(sender, **kwargs):
            received.append(kwargs)

        points_awarded.connect(handler)
        try:
            award_points(store.pk, customer.pk, 2)
        finally:
            points_awarded.disconnect(handler)

        assert len(received) == 1
        assert received[0]["points"] == 20
        assert received[0]["code_matched"] is False
        assert received[0]["balance"].points == 20
