"""
ASGI config for the ward project.

Configure Django before importing any Django-dependent modules, then seed
sample data before the server starts accepting requests.
"""
import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "wardsite.settings")

from django.core.asgi import get_asgi_application  # noqa: E402

application = get_asgi_application()

from ward.services.seed import seed_on_startup  # noqa: E402

seed_on_startup()
