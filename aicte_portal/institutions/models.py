from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from aicte_portal.core.models import BaseModel


class Institution(BaseModel):
    """
    Profile of an institution account.

    Each institution user owns at most one profile; applications are filed
    on behalf of it.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="institution",
        verbose_name=_("user"),
    )
    name = models.CharField(_("name"), max_length=255)
    address = models.TextField(_("address"))
    state = models.CharField(_("state"), max_length=100)
    contact_email = models.EmailField(_("contact email"))
    contact_phone = models.CharField(_("contact phone"), max_length=30, blank=True)

    class Meta:
        verbose_name = _("institution")
        verbose_name_plural = _("institutions")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
