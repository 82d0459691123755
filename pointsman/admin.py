"""Pointsman admin - read-only views of the ledger.

Balances and history change only through the services, so the admin
never adds, edits or deletes them.
"""

from django.contrib import admin
from django.utils.html import format_html

from pointsman.models import HistoryRecord, PromotionalCode, StoreCustomerBalance


class ReadOnlyLedgerAdmin(admin.ModelAdmin):
    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(StoreCustomerBalance)
class StoreCustomerBalanceAdmin(ReadOnlyLedgerAdmin):
    list_display = ["store", "customer", "points", "updated_at"]
    list_filter = ["store"]
    search_fields = ["customer__email", "customer__first_name", "store__name"]
    readonly_fields = ["store", "customer", "points", "created_at", "updated_at"]


@admin.register(HistoryRecord)
class HistoryRecordAdmin(ReadOnlyLedgerAdmin):
    list_display = [
        "created_at",
        "store",
        "customer",
        "prize_name",
        "prize_category",
        "points_display",
    ]
    list_filter = ["store_sector", "prize_category"]
    search_fields = ["customer__email", "prize_name", "idempotency_key"]
    readonly_fields = [
        "created_at",
        "store",
        "store_sector",
        "customer",
        "customer_age",
        "prize",
        "prize_ref",
        "prize_name",
        "prize_category",
        "points_spent",
        "idempotency_key",
    ]
    date_hierarchy = "created_at"

    def points_display(self, obj):
        return format_html('<span style="color:red">-{}</span>', obj.points_spent)

    points_display.short_description = "Points"


@admin.register(PromotionalCode)
class PromotionalCodeAdmin(ReadOnlyLedgerAdmin):
    list_display = ["store", "code", "issued_at"]
    readonly_fields = ["store", "code", "issued_at"]
