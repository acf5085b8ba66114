"""
ASGI config for the Learning Trail service.

Run with:
    uvicorn learning_trail.asgi:application --port 3001
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'learning_trail.settings')

application = get_asgi_application()
