"""
Database models for the ward application.

Three concepts are stored: patients, application users and the roles
granted to those users.  Users and roles are keyed by their natural names
(``username`` and ``name``) rather than by surrogate numeric ids.
"""
from __future__ import annotations

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.core.validators import MinLengthValidator
from django.db import models


class Patient(models.Model):
    """A patient record managed through the admin CRUD pages."""
    name = models.CharField(max_length=20, validators=[MinLengthValidator(3)])
    birth_date = models.DateField(null=True, blank=True)
    sick = models.BooleanField(default=False)
    score = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.name} ({self.pk})"


class AppRole(models.Model):
    """A named permission grouping such as ``ADMIN`` or ``USER``."""
    name = models.CharField(max_length=50, primary_key=True)

    def __str__(self) -> str:
        return self.name


class AppUserManager(BaseUserManager):
    def create_user(self, username: str, password: str | None = None, *, enabled: bool = True) -> "AppUser":
        if not username:
            raise ValueError("username must be set")
        user = self.model(username=username, enabled=enabled)
        user.set_password(password)
        user.save(using=self._db)
        return user


class AppUser(AbstractBaseUser):
    """Application user authenticated by username and password hash.

    ``enabled`` backs Django's ``is_active`` so that the stock
    authentication backend refuses disabled accounts both at login and
    when re-loading the user from the session.  The role set is always
    read from the database; nothing about it is kept in the session.
    """
    username = models.CharField(max_length=150, primary_key=True)
    enabled = models.BooleanField(default=True)
    roles = models.ManyToManyField(AppRole, related_name='users', blank=True)

    USERNAME_FIELD = 'username'
    REQUIRED_FIELDS: list[str] = []

    objects = AppUserManager()

    def __str__(self) -> str:
        return self.username

    @property
    def is_active(self) -> bool:
        return self.enabled

    def role_names(self) -> set[str]:
        return set(self.roles.values_list('name', flat=True))

    def has_role(self, role: str) -> bool:
        return self.roles.filter(name=role).exists()

    # Django admin console hooks: ADMIN role holders get full access.
    @property
    def is_staff(self) -> bool:
        return self.enabled and self.has_role('ADMIN')

    def has_perm(self, perm, obj=None) -> bool:
        return self.is_staff

    def has_module_perms(self, app_label) -> bool:
        return self.is_staff
