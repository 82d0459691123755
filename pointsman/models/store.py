"""Store model."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Store(models.Model):
    """Store where customers accrue and redeem points."""

    name = models.CharField(_("name"), max_length=100)
    email = models.EmailField(_("email"), unique=True)
    sector = models.CharField(
        _("sector"),
        max_length=50,
        help_text=_("Business sector, copied into redemption history"),
    )
    phone = models.CharField(_("phone"), max_length=20, blank=True)

    is_active = models.BooleanField(_("active"), default=True, db_index=True)
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)

    class Meta:
        verbose_name = _("store")
        verbose_name_plural = _("stores")
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.sector})"
