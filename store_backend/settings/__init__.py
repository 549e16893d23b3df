"""
Django settings package for the store backend.

This package provides environment-specific settings:
- development: Local development with debug enabled
- production: Production environment with security hardening
- test: In-memory database and fast hashers for the pytest suite

Settings are loaded based on the ENVIRONMENT variable and default to
development. DJANGO_SETTINGS_MODULE may also point at a submodule directly.
"""

import os
import sys

ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()

VALID_ENVIRONMENTS = ["development", "production", "test"]
if ENVIRONMENT not in VALID_ENVIRONMENTS:
    raise ValueError(
        f"Invalid ENVIRONMENT '{ENVIRONMENT}'. "
        f"Must be one of: {', '.join(VALID_ENVIRONMENTS)}"
    )

if ENVIRONMENT == "production":
    from .production import *
elif ENVIRONMENT == "test":
    from .test import *
else:
    from .development import *

ENVIRONMENT_INFO = {
    "name": ENVIRONMENT,
    "debug": DEBUG,
    "allowed_hosts": ALLOWED_HOSTS,
    "database_engine": DATABASES["default"]["ENGINE"],
    "static_url": STATIC_URL,
}


def validate_settings():
    """Validate critical settings are properly configured."""
    errors = []

    if not SECRET_KEY or SECRET_KEY == "your-secret-key-here":
        errors.append("SECRET_KEY must be set to a secure random value")

    if not DATABASES.get("default"):
        errors.append("Database configuration is missing")

    if ENVIRONMENT == "production" and not ALLOWED_HOSTS:
        errors.append("ALLOWED_HOSTS must be configured for production")

    if ENVIRONMENT == "production" and globals().get("CORS_ALLOW_ALL_ORIGINS", False):
        errors.append("CORS_ALLOW_ALL_ORIGINS should not be True in production")

    if ENVIRONMENT == "production" and DEBUG:
        errors.append("DEBUG should be False in production")

    if not LOCAL_CEP_RANGES:
        errors.append("LOCAL_CEP_RANGES must define at least one range")

    if errors:
        error_msg = "\n".join([f"  - {error}" for error in errors])
        raise ValueError(f"Settings validation failed:\n{error_msg}")


if "migrate" not in sys.argv and "collectstatic" not in sys.argv:
    try:
        validate_settings()
    except ValueError as e:
        if ENVIRONMENT == "production":
            raise
        print(f"Settings validation warning: {e}")

__all__ = ["ENVIRONMENT_INFO", "validate_settings"]
