"""
Bootstrap seeding of roles, users and sample patients.

Seeding is idempotent: roles and users are created only when missing and
sample patients only when the patient table is empty, so restarting the
process never duplicates rows.  Several workers starting at once are
serialized on a row lock over the seed roles.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from django.conf import settings
from django.db import connection, transaction

from ward.models import AppRole, AppUser, Patient
from ward.services import patients

logger = logging.getLogger(__name__)

SEED_ROLES = ('USER', 'ADMIN')

SEED_USERS = (
    ('admin', ('ADMIN',)),
    ('user2', ('USER',)),
)

SEED_PATIENTS = (
    {'name': 'Alice', 'birth_date': date(1990, 3, 14), 'sick': False, 'score': 56},
    {'name': 'Bob', 'birth_date': date(1985, 7, 2), 'sick': True, 'score': 120},
    {'name': 'Charlie', 'birth_date': date(2001, 11, 23), 'sick': False, 'score': 200},
)


@dataclass
class SeedResult:
    roles: list[str] = field(default_factory=list)
    users: list[str] = field(default_factory=list)
    patients: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.roles or self.users or self.patients)


@transaction.atomic
def seed_database(password: str | None = None) -> SeedResult:
    """Insert the sample data that is missing and report what was created."""
    password = password or settings.WARD_SEED_PASSWORD
    result = SeedResult()

    for name in SEED_ROLES:
        _, created = AppRole.objects.get_or_create(name=name)
        if created:
            result.roles.append(name)

    # concurrent seeders wait here until the first one commits
    list(AppRole.objects.select_for_update().filter(name__in=SEED_ROLES))

    for username, roles in SEED_USERS:
        if AppUser.objects.filter(username=username).exists():
            continue
        user = AppUser.objects.create_user(username, password)
        user.roles.set(AppRole.objects.filter(name__in=roles))
        result.users.append(username)

    if not Patient.objects.exists():
        for data in SEED_PATIENTS:
            patients.save(Patient(**data))
            result.patients.append(data['name'])

    return result


def seed_on_startup() -> SeedResult | None:
    """Seed before the server accepts requests, when enabled and migrated."""
    if not settings.WARD_SEED_ON_STARTUP:
        return None
    required = {Patient._meta.db_table, AppUser._meta.db_table, AppRole._meta.db_table}
    missing = required - set(connection.introspection.table_names())
    if missing:
        logger.warning("skipping seed, tables missing (run migrate first): %s", ", ".join(sorted(missing)))
        return None
    result = seed_database()
    if result.changed:
        logger.info("seeded roles=%s users=%s patients=%s", result.roles, result.users, result.patients)
    return result
