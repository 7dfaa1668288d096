"""
Django settings for the mail store project.

Values come from environment variables, loaded with layered .env support
(.env, then .env.test or .env.prod picked by RUN_ENV).
"""
from pathlib import Path

from common.utils.env_util import load_env

BASE_DIR = Path(__file__).resolve().parent.parent

env = load_env(BASE_DIR)

SECRET_KEY = env("DJANGO_SECRET_KEY", default="django-insecure-mailstore-dev-key")

DEBUG = env.bool("DJANGO_DEBUG", default=False)

ALLOWED_HOSTS = env.list("DJANGO_ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])

INSTALLED_APPS = [
    "app_mailstore.apps.MailstoreConfig",
]

MIDDLEWARE = []

# the mail store keeps its data in its own backing store
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

USE_TZ = True
TIME_ZONE = "UTC"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LOG_LEVEL = env("LOG_LEVEL", default="INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "app_mailstore": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}
