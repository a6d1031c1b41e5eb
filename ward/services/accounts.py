"""
Identity store operations for application users and roles.

Usernames and role names are natural keys.  Password strength is not
checked here; whoever creates an account is responsible for that.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction

from ward.exceptions import (
    PasswordMismatch,
    RoleAlreadyExists,
    RoleNotFound,
    UserAlreadyExists,
    UserNotFound,
)
from ward.models import AppRole, AppUser

logger = logging.getLogger(__name__)


def find_by_username(username: str) -> Optional[AppUser]:
    return AppUser.objects.filter(username=username).first()


def load_user_by_username(username: str) -> AppUser:
    user = find_by_username(username)
    if user is None:
        raise UserNotFound(username)
    return user


def _load_role(name: str) -> AppRole:
    role = AppRole.objects.filter(name=name).first()
    if role is None:
        raise RoleNotFound(name)
    return role


@transaction.atomic
def add_new_user(username: str, password: str, confirm_password: str, *, enabled: bool = True) -> AppUser:
    if password != confirm_password:
        raise PasswordMismatch()
    if AppUser.objects.filter(username=username).exists():
        raise UserAlreadyExists(username)
    user = AppUser.objects.create_user(username, password, enabled=enabled)
    logger.info("user created username=%s enabled=%s", username, enabled)
    return user


def add_new_role(name: str) -> AppRole:
    if AppRole.objects.filter(name=name).exists():
        raise RoleAlreadyExists(name)
    role = AppRole.objects.create(name=name)
    logger.info("role created name=%s", name)
    return role


@transaction.atomic
def add_role_to_user(username: str, role_name: str) -> AppUser:
    user = load_user_by_username(username)
    user.roles.add(_load_role(role_name))
    logger.info("role %s granted to %s", role_name, username)
    return user


@transaction.atomic
def remove_role_from_user(username: str, role_name: str) -> AppUser:
    user = load_user_by_username(username)
    user.roles.remove(_load_role(role_name))
    logger.info("role %s revoked from %s", role_name, username)
    return user


def set_enabled(username: str, enabled: bool) -> AppUser:
    user = load_user_by_username(username)
    user.enabled = enabled
    user.save(update_fields=['enabled'])
    return user
