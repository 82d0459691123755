"""Store/customer point balance."""

from django.db import models
from django.utils.translation import gettext_lazy as _

# Largest value the points column holds (32-bit signed INTEGER)
MAX_POINTS = 2**31 - 1


class StoreCustomerBalance(models.Model):
    """
    A customer's point balance at one store.

    One row per (store, customer), created lazily on the first accrual.
    The database refuses negative balances; services additionally guard
    every debit with a conditional update.
    """

    store = models.ForeignKey(
        "pointsman.Store",
        on_delete=models.CASCADE,
        related_name="balances",
        verbose_name=_("store"),
    )
    customer = models.ForeignKey(
        "pointsman.Customer",
        on_delete=models.CASCADE,
        related_name="balances",
        verbose_name=_("customer"),
    )
    points = models.IntegerField(_("points"), default=0)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        db_table = "pointsman_store_customer"
        verbose_name = _("balance")
        verbose_name_plural = _("balances")
        constraints = [
            models.UniqueConstraint(
                fields=["store", "customer"],
                name="pointsman_unique_store_customer",
            ),
            models.CheckConstraint(
                condition=models.Q(points__gte=0),
                name="pointsman_balance_points_non_negative",
            ),
        ]

    def __str__(self):
        return f"store {self.store_id} / customer {self.customer_id}: {self.points}pts"

    def as_dict(self) -> dict:
        return {
            "idstore": self.store_id,
            "idcustomer": self.customer_id,
            "points": self.points,
        }
