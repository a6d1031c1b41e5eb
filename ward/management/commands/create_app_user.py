# ward/management/commands/create_app_user.py
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from ward.exceptions import AccountError
from ward.services import accounts


class Command(BaseCommand):
    help = "Create an application user and grant it existing roles."

    def add_arguments(self, parser):
        parser.add_argument("username")
        parser.add_argument("--password", required=True)
        parser.add_argument("--confirm-password", dest="confirm_password")
        parser.add_argument("--role", dest="roles", action="append", default=[],
                            help="Role to grant; may be repeated. The role must already exist.")
        parser.add_argument("--disabled", action="store_true", help="Create the account disabled.")

    def handle(self, *args, **opts):
        username = opts["username"]
        password = opts["password"]
        confirm = opts["confirm_password"] if opts["confirm_password"] is not None else password
        try:
            with transaction.atomic():
                accounts.add_new_user(username, password, confirm, enabled=not opts["disabled"])
                for role in opts["roles"]:
                    accounts.add_role_to_user(username, role)
        except AccountError as e:
            raise CommandError(str(e)) from e
        roles = ", ".join(opts["roles"]) or "none"
        self.stdout.write(self.style.SUCCESS(f"ok: {username} (roles: {roles})"))
