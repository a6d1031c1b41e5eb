"""
WSGI config for the ward project.

It exposes the WSGI callable as a module-level variable named ``application``.
Sample data is seeded once the application is built and before the server
starts accepting requests.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'wardsite.settings')

application = get_wsgi_application()

from ward.services.seed import seed_on_startup  # noqa: E402

seed_on_startup()
