"""Per-store promotional code."""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class PromotionalCode(models.Model):
    """
    The single active promotional code of a store.

    Stored durably so every process shares it; consuming a code is a
    conditional update on (store, code), see services.promo_codes.
    """

    store = models.OneToOneField(
        "pointsman.Store",
        on_delete=models.CASCADE,
        related_name="promo_code",
        verbose_name=_("store"),
    )
    code = models.PositiveSmallIntegerField(_("code"))
    issued_at = models.DateTimeField(_("issued at"), default=timezone.now)

    class Meta:
        verbose_name = _("promotional code")
        verbose_name_plural = _("promotional codes")

    def __str__(self):
        return f"store {self.store_id}: {self.code}"
