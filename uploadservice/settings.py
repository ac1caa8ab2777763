"""
Django settings for uploadservice project.

Most values can be overridden with environment variables so the same
settings module serves development, tests and deployment.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ('1', 'true', 'yes', 'on')


SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-uploadservice-dev-key')

DEBUG = env_bool('DJANGO_DEBUG', True)

ALLOWED_HOSTS = [h for h in os.environ.get('DJANGO_ALLOWED_HOSTS', '*').split(',') if h]

INSTALLED_APPS = [
    'derivatives',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
]

ROOT_URLCONF = 'uploadservice.urls'

WSGI_APPLICATION = 'uploadservice.wsgi.application'

# Records are logged, not stored
DATABASES = {}

USE_TZ = True

# Spool uploads larger than this to a temporary file instead of memory
FILE_UPLOAD_MAX_MEMORY_SIZE = 10 * 1024 * 1024


# Ingestion settings

# Port for `manage.py runserver` when no address is given
PORT = int(os.environ.get('PORT', '3000'))

INGEST_UPLOAD_DIR = Path(os.environ.get('INGEST_UPLOAD_DIR', BASE_DIR / 'uploads'))
INGEST_PROCESSED_DIR = Path(os.environ.get('INGEST_PROCESSED_DIR', BASE_DIR / 'processed'))

INGEST_THUMBNAIL_TIMESTAMP = 5
INGEST_CLIP_DURATION = 5
INGEST_THUMBNAIL_WIDTH = 200

INGEST_FFMPEG_BINARY = os.environ.get('INGEST_FFMPEG_BINARY', 'ffmpeg')
INGEST_FFPROBE_BINARY = os.environ.get('INGEST_FFPROBE_BINARY', 'ffprobe')


LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '[{asctime}] {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'derivatives': {
            'handlers': ['console'],
            'level': os.environ.get('INGEST_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}
