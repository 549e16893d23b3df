# store_backend/settings/development.py
from .base import *

# -----------------------------------------------------------------------------
# Development Settings
# -----------------------------------------------------------------------------
DEBUG = True

if not SECRET_KEY:
    SECRET_KEY = "django-insecure-development-only"
    SIMPLE_JWT["SIGNING_KEY"] = SECRET_KEY

ALLOWED_HOSTS = ["*"]

CORS_ALLOW_ALL_ORIGINS = True
CORS_ALLOWED_ORIGINS = []

CSRF_TRUSTED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]

# -----------------------------------------------------------------------------
# Security Settings (Relaxed for Development)
# -----------------------------------------------------------------------------
SECURE_SSL_REDIRECT = False
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False
SECURE_HSTS_SECONDS = 0
SECURE_HSTS_INCLUDE_SUBDOMAINS = False
SECURE_HSTS_PRELOAD = False

X_FRAME_OPTIONS = "SAMEORIGIN"

# -----------------------------------------------------------------------------
# Logging Configuration (Development)
# -----------------------------------------------------------------------------
LOGGING["root"]["level"] = "INFO"
LOGGING["loggers"]["pricing"]["level"] = "DEBUG"
LOGGING["loggers"]["coupons"]["level"] = "DEBUG"

LOGGING["loggers"]["django.db.backends"] = {
    "handlers": ["console"],
    "level": "DEBUG" if os.getenv("DEBUG_SQL", "0") == "1" else "INFO",
    "propagate": False,
}

# -----------------------------------------------------------------------------
# Static Files (Development)
# -----------------------------------------------------------------------------
STORAGES["staticfiles"] = {
    "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
}

# -----------------------------------------------------------------------------
# DRF Configuration (Development)
# -----------------------------------------------------------------------------
REST_FRAMEWORK["DEFAULT_RENDERER_CLASSES"] = [
    "rest_framework.renderers.JSONRenderer",
    "rest_framework.renderers.BrowsableAPIRenderer",
]

REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {
    "anon": "1000/hour",
    "user": "10000/hour",
}

SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"] = timedelta(hours=1)
SIMPLE_JWT["REFRESH_TOKEN_LIFETIME"] = timedelta(days=30)
