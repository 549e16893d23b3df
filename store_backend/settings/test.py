# store_backend/settings/test.py
from .base import *

# -----------------------------------------------------------------------------
# Test Settings
# -----------------------------------------------------------------------------
DEBUG = False

SECRET_KEY = SECRET_KEY or "test-secret-key-not-for-production"
SIMPLE_JWT["SIGNING_KEY"] = SECRET_KEY

ALLOWED_HOSTS = ["testserver", "localhost", "127.0.0.1"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

SECURE_SSL_REDIRECT = False
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False

STORAGES["staticfiles"] = {
    "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
}

LOCAL_CEP_RANGES = [(38400000, 38419999)]

# No throttling noise in tests
REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []

LOGGING["root"]["level"] = "WARNING"
