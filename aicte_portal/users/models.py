import uuid
from typing import ClassVar

from django.contrib.auth.models import AbstractUser
from django.db.models import CharField
from django.db.models import EmailField
from django.db.models import UUIDField
from django.utils.translation import gettext_lazy as _

from aicte_portal.core.roles import Role

from .managers import UserManager


class User(AbstractUser):
    """
    Custom user model for the approval portal.
    Uses email as the unique identifier instead of username.
    Uses UUID as primary key.
    """

    id = UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # A single display name replaces first_name/last_name
    name = CharField(_("name"), max_length=255)
    first_name = None  # type: ignore[assignment]
    last_name = None  # type: ignore[assignment]
    email = EmailField(_("email address"), unique=True)
    username = None  # type: ignore[assignment]

    role = CharField(
        _("role"),
        max_length=20,
        choices=Role.choices,
        default=Role.INSTITUTION,
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    objects: ClassVar[UserManager] = UserManager()

    class Meta:
        verbose_name = _("user")
        verbose_name_plural = _("users")
        ordering = ["-date_joined"]

    def __str__(self) -> str:
        return self.email

    def get_full_name(self) -> str:
        return self.name or self.email

    def get_short_name(self) -> str:
        return self.name or self.email
