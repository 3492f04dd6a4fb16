"""Settings used by the test suite (pytest-django)."""

from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret-key"

DEBUG = False

ALLOWED_HOSTS = ["*"]

TIME_ZONE = "UTC"

# Tests run against SQLite unless DB_ENGINE points elsewhere. The test
# database is a file so threaded tests get their own connections, and
# writers queue on the IMMEDIATE write lock for up to ``timeout`` seconds.
if get_env("DB_ENGINE") is None:  # noqa: F405
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": str(BASE_DIR / "test_db.sqlite3"),  # noqa: F405
            "OPTIONS": {"transaction_mode": "IMMEDIATE", "timeout": 20},
            "TEST": {"NAME": str(BASE_DIR / "test_db.sqlite3")},  # noqa: F405
        }
    }

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
