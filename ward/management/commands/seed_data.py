# ward/management/commands/seed_data.py
from django.conf import settings
from django.core.management.base import BaseCommand

from ward.services.seed import seed_database


class Command(BaseCommand):
    help = "Seed roles, sample users and sample patients (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            default=None,
            help="Password for newly created sample users (default: WARD_SEED_PASSWORD).",
        )

    def handle(self, *args, **opts):
        result = seed_database(opts["password"] or settings.WARD_SEED_PASSWORD)
        for name in result.roles:
            self.stdout.write(f"role: {name}")
        for username in result.users:
            self.stdout.write(f"user: {username}")
        for name in result.patients:
            self.stdout.write(f"patient: {name}")
        if result.changed:
            self.stdout.write(self.style.SUCCESS("Seed data created."))
        else:
            self.stdout.write(self.style.SUCCESS("Seed data already present, nothing to do."))
