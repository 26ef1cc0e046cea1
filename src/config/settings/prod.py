"""Production settings."""
from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa: F401,F403

DEBUG = False
ENABLE_DJANGO_ADMIN = env.bool("ENABLE_DJANGO_ADMIN", default=False)  # noqa: F405

if "DATABASE_URL" not in env.ENVIRON:  # noqa: F405
    raise ImproperlyConfigured("운영 환경에서는 DATABASE_URL을 지정해야 합니다.")
DATABASES["default"]["CONN_MAX_AGE"] = env.int("DB_CONN_MAX_AGE", default=60)  # noqa: F405

# HTTPS behind the reverse proxy
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_SSL_REDIRECT = env.bool("SECURE_SSL_REDIRECT", default=True)  # noqa: F405
if not SECURE_SSL_REDIRECT:
    raise ImproperlyConfigured("운영 환경에서는 SECURE_SSL_REDIRECT를 활성화해야 합니다.")
SECURE_HSTS_SECONDS = env.int("SECURE_HSTS_SECONDS", default=31536000)  # noqa: F405
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=[])  # noqa: F405

# The front-end origin must be spelled out
CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS", default=[])  # noqa: F405
if not CORS_ALLOWED_ORIGINS or any(
    "localhost" in origin or "127.0.0.1" in origin for origin in CORS_ALLOWED_ORIGINS
):
    raise ImproperlyConfigured(
        "운영 환경의 CORS_ALLOWED_ORIGINS에는 실제 프론트엔드 주소만 사용할 수 있습니다.",
    )

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.ManifestStaticFilesStorage"},
}

# Calculation and import logs go to the rotating JSON file only
LOGGING["loggers"]["incentive_desk"].update({"handlers": ["file"], "level": "INFO"})  # noqa: F405
