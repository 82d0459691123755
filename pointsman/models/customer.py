"""Customer model."""

from datetime import date

from django.db import models
from django.utils.translation import gettext_lazy as _


class Customer(models.Model):
    """
    Registered loyalty customer.

    Only birthdate matters to the ledger: the customer's age at redemption
    time is recorded in history.
    """

    first_name = models.CharField(_("first name"), max_length=100)
    last_name = models.CharField(_("last name"), max_length=100, blank=True)
    email = models.EmailField(_("email"), unique=True)
    birthdate = models.DateField(_("birthdate"), null=True, blank=True)
    postcode = models.CharField(_("postcode"), max_length=20, blank=True)

    is_active = models.BooleanField(_("active"), default=True, db_index=True)
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)

    class Meta:
        verbose_name = _("customer")
        verbose_name_plural = _("customers")
        ordering = ["first_name", "last_name"]

    def __str__(self):
        return f"{self.name} <{self.email}>"

    @property
    def name(self) -> str:
        """Full name (first + last)."""
        return f"{self.first_name} {self.last_name}".strip()

    def age_on(self, day: date) -> int | None:
        """Age in whole years on `day`; None without a birthdate or when born after `day`."""
        if self.birthdate is None or self.birthdate > day:
            return None
        age = day.year - self.birthdate.year
        if (day.month, day.day) < (self.birthdate.month, self.birthdate.day):
            age -= 1
        return age
