"""Redemption history."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class HistoryRecord(models.Model):
    """
    Immutable record of a completed redemption.

    Prize name, category and cost, the store sector and the customer's age
    are copied at write time, so later catalog edits never rewrite history.
    Rows are append-only: saving an existing record or deleting one raises.
    """

    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)

    customer = models.ForeignKey(
        "pointsman.Customer",
        on_delete=models.PROTECT,
        related_name="history",
        verbose_name=_("customer"),
    )
    customer_age = models.PositiveSmallIntegerField(_("customer age"), null=True, blank=True)

    store = models.ForeignKey(
        "pointsman.Store",
        on_delete=models.PROTECT,
        related_name="history",
        verbose_name=_("store"),
    )
    store_sector = models.CharField(_("store sector"), max_length=50)

    prize = models.ForeignKey(
        "pointsman.Prize",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="history",
        verbose_name=_("prize"),
    )
    prize_ref = models.BigIntegerField(
        _("prize id"),
        null=True,
        blank=True,
        help_text=_("Id of the redeemed prize, kept when the prize is deleted"),
    )
    prize_name = models.CharField(_("prize name"), max_length=100)
    prize_category = models.CharField(_("prize category"), max_length=50)
    points_spent = models.PositiveIntegerField(_("points spent"))

    idempotency_key = models.CharField(
        _("idempotency key"),
        max_length=100,
        null=True,
        blank=True,
        unique=True,
        help_text=_("Caller-supplied token that makes a retried redemption a no-op"),
    )

    class Meta:
        db_table = "pointsman_history"
        verbose_name = _("history record")
        verbose_name_plural = _("history records")
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["store", "-created_at"], name="pointsman_h_store_i_5b1f0c_idx"),
            models.Index(fields=["customer", "-created_at"], name="pointsman_h_custome_8e2a4d_idx"),
            models.Index(fields=["store_sector"], name="pointsman_h_store_s_c3d9e7_idx"),
        ]

    def __str__(self):
        return f"-{self.points_spent}pts - {self.prize_name}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            from pointsman.exceptions import PointsmanError

            raise PointsmanError("HISTORY_IMMUTABLE", record_id=self.pk)
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        from pointsman.exceptions import PointsmanError

        raise PointsmanError("HISTORY_IMMUTABLE", record_id=self.pk)

    def prize_snapshot(self):
        """The redeemed prize; an unsaved copy rebuilt from the snapshot if it was deleted."""
        from pointsman.models.prize import Prize

        if self.prize_id is not None:
            return self.prize
        return Prize(
            pk=self.prize_ref,
            store_id=self.store_id,
            name=self.prize_name,
            category=self.prize_category,
            points=self.points_spent,
        )
