"""Production settings for the facility booking service.

Sensitive values must come from environment variables; the secret key
and the database credentials are required.
"""

from .base import *  # noqa: F401,F403
from .base import get_env, get_env_list

# Never run with debug enabled in production
DEBUG = False

SECRET_KEY = get_env("DJANGO_SECRET_KEY", required=True)

# Allowed hosts should be defined explicitly via environment variable
ALLOWED_HOSTS = get_env_list("DJANGO_ALLOWED_HOSTS")

DATABASES = {
    "default": {
        "ENGINE": get_env("DB_ENGINE", "django.db.backends.postgresql"),
        "NAME": get_env("DB_NAME", required=True),
        "USER": get_env("DB_USER", required=True),
        "PASSWORD": get_env("DB_PASSWORD", required=True),
        "HOST": get_env("DB_HOST", "localhost"),
        "PORT": get_env("DB_PORT", "5432"),
        "CONN_MAX_AGE": 60,
    }
}

# Configure secure proxies and cookies
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = True
