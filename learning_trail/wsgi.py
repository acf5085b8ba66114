"""
WSGI config for the Learning Trail service.

The PDF endpoint is asynchronous; prefer the ASGI entry point in production.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'learning_trail.settings')

application = get_wsgi_application()
