"""
Settings used by the test suite.
"""
from sports_reels.settings import *  # noqa: F401,F403

DEBUG = False
DEMO_MODE = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

MINIO_BUCKET = "test-sports-reels"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"null": {"class": "logging.NullHandler"}},
    "loggers": {"sports_reels": {"handlers": ["null"], "propagate": False}},
}
