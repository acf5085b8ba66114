"""
Django settings for the Learning Trail service.

All values can be overridden from the environment (a local .env file is
loaded first).
"""
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / '.env')


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_optional_number(name, default, cast):
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip()
    if value == '' or value.lower() in ('none', 'off', '0'):
        return None
    return cast(value)


# APP_ENV takes precedence over NODE_ENV.
APP_ENV = os.environ.get('APP_ENV') or os.environ.get('NODE_ENV', 'development')
IS_PRODUCTION = APP_ENV == 'production'

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'learning-trail-insecure-dev-key')

DEBUG = _env_bool('DJANGO_DEBUG', default=not IS_PRODUCTION)

ALLOWED_HOSTS = os.environ.get('DJANGO_ALLOWED_HOSTS', '*').split(',')

PORT = int(os.environ.get('PORT', '3001'))

INSTALLED_APPS = [
    'core',
]

MIDDLEWARE = [
    'core.middleware.CorsOriginMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'core.middleware.JsonExceptionMiddleware',
]

ROOT_URLCONF = 'learning_trail.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [],
        },
    },
]

ASGI_APPLICATION = 'learning_trail.asgi.application'
WSGI_APPLICATION = 'learning_trail.wsgi.application'

# The service keeps no persistent state.
DATABASES = {}

LANGUAGE_CODE = os.environ.get('LANGUAGE_CODE', 'en-us')
TIME_ZONE = os.environ.get('TIME_ZONE', 'UTC')
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Learning Trail service options
LEARNING_TRAIL = {
    # Bundled Chromium binary (serverless packaging). None uses Playwright's own.
    'BROWSER_EXECUTABLE': os.environ.get('BROWSER_EXECUTABLE') or None,
    # Deadline for one render in seconds; None disables it.
    'RENDER_TIMEOUT': _env_optional_number('RENDER_TIMEOUT', 60.0, float),
    # Upper bound on simultaneous renders; None means unbounded.
    'MAX_CONCURRENT_RENDERS': _env_optional_number('MAX_CONCURRENT_RENDERS', None, int),
    'ESCAPE_USER_CONTENT': _env_bool('ESCAPE_USER_CONTENT', default=False),
    'FONT_STYLESHEET_URL': os.environ.get(
        'FONT_STYLESHEET_URL',
        'https://fonts.googleapis.com/css2?family=Comic+Neue:wght@300;400;700&display=swap',
    ),
    'OPENAI_API_KEY': os.environ.get('OPENAI_API_KEY', ''),
    'OPENAI_BASE_URL': os.environ.get('OPENAI_BASE_URL') or None,
    'OPENAI_DEFAULT_MODEL': 'gpt-4o-mini-2024-07-18',
    'OPENAI_MAX_TOKENS': 2000,
    'OPENAI_TEMPERATURE': 0.7,
    'OPENAI_TIMEOUT': 60.0,
    # Same-origin in production, so no cross-origin access at all.
    'CORS_ALLOWED_ORIGINS': [] if IS_PRODUCTION else [
        'http://localhost:3000',
        'http://127.0.0.1:8081',
        'http://localhost:8080',
    ],
}


LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': os.environ.get('LOG_LEVEL', 'INFO'),
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': os.environ.get('DJANGO_LOG_LEVEL', 'WARNING'),
            'propagate': False,
        },
    },
}
