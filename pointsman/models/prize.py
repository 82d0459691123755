"""Prize catalog model."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Prize(models.Model):
    """Catalog item a customer can redeem at one store."""

    store = models.ForeignKey(
        "pointsman.Store",
        on_delete=models.CASCADE,
        related_name="prizes",
        verbose_name=_("store"),
    )
    name = models.CharField(_("name"), max_length=100)
    category = models.CharField(_("category"), max_length=50)
    points = models.PositiveIntegerField(
        _("points"),
        help_text=_("Point cost of the prize"),
    )

    class Meta:
        verbose_name = _("prize")
        verbose_name_plural = _("prizes")
        ordering = ["store", "points"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(points__gt=0),
                name="pointsman_prize_points_positive",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.points}pts)"
