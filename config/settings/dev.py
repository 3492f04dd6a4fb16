"""Development settings for the facility booking service.

Extends the base settings with debug mode, permissive hosts and CORS, a
local SQLite database unless DB_ENGINE says otherwise, and human readable
console logs. Do not use these settings in production!
"""

from .base import *  # noqa: F401,F403
from .base import BASE_DIR, LOGGING, get_env

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ["*"]

CORS_ALLOW_ALL_ORIGINS = True

if get_env("DB_ENGINE") is None:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
            # Atomic blocks take the write lock up front, serializing bookings.
            "OPTIONS": {"transaction_mode": "IMMEDIATE", "timeout": 20},
        }
    }

REST_FRAMEWORK = {
    **REST_FRAMEWORK,  # noqa: F405
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
        "rest_framework.renderers.BrowsableAPIRenderer",
    ],
}

LOGGING["handlers"]["console"]["formatter"] = "console"
