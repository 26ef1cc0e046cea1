"""Settings for the pytest run: in-memory SQLite, no throttling, quiet logs."""
import os

os.environ.setdefault("SECRET_KEY", "incentive-desk-test-key")
os.environ.setdefault("DEBUG", "True")

from .base import *  # noqa: F401,F403,E402

DEBUG = True
ENABLE_DJANGO_ADMIN = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
        "ATOMIC_REQUESTS": False,
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

REST_FRAMEWORK["DEFAULT_RENDERER_CLASSES"] = ["rest_framework.renderers.JSONRenderer"]  # noqa: F405
REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []  # noqa: F405
REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}  # noqa: F405

# Nothing in the suite should be reported as slow
API_SLOW_REQUEST_SECONDS = 60.0

LOGGING["root"]["level"] = "WARNING"  # noqa: F405
LOGGING["loggers"]["incentive_desk"].update({"handlers": ["console"], "level": "WARNING"})  # noqa: F405
