# store_backend/settings/production.py
from .base import *
import sentry_sdk
from sentry_sdk.integrations.django import DjangoIntegration

# -----------------------------------------------------------------------------
# Production Settings
# -----------------------------------------------------------------------------
DEBUG = False

if not SECRET_KEY:
    raise ValueError("DJANGO_SECRET_KEY environment variable is required")

ALLOWED_HOSTS = _split_csv("DJANGO_ALLOWED_HOSTS")
if not ALLOWED_HOSTS:
    raise ValueError("DJANGO_ALLOWED_HOSTS must be set in production")

# -----------------------------------------------------------------------------
# Database Configuration (Production)
# -----------------------------------------------------------------------------
if not os.getenv("DATABASE_URL") and not os.getenv("PG_NAME"):
    raise ValueError("Database configuration is required in production")

DATABASES["default"]["CONN_MAX_AGE"] = 600  # 10 minutes
DATABASES["default"]["OPTIONS"] = {
    "sslmode": "require",
    "options": "-c default_transaction_isolation=read_committed"
}

# -----------------------------------------------------------------------------
# Static Files (Production)
# -----------------------------------------------------------------------------
WHITENOISE_USE_FINDERS = True
WHITENOISE_AUTOREFRESH = False

# -----------------------------------------------------------------------------
# Logging Configuration (Production)
# -----------------------------------------------------------------------------
if os.getenv("USE_JSON_LOGGING", "0") == "1":
    LOGGING["handlers"]["json_console"] = {
        "level": "INFO",
        "class": "logging.StreamHandler",
        "formatter": "json",
        "filters": ["request_id"],
    }
    for logger_name in ["django", "pricing", "coupons", "catalog"]:
        LOGGING["loggers"][logger_name]["handlers"] = ["json_console"] + [
            h for h in LOGGING["loggers"][logger_name]["handlers"] if h != "console"
        ]

# -----------------------------------------------------------------------------
# Error Monitoring (Sentry)
# -----------------------------------------------------------------------------
SENTRY_DSN = os.getenv("SENTRY_DSN")
if SENTRY_DSN:
    sentry_sdk.init(
        dsn=SENTRY_DSN,
        integrations=[
            DjangoIntegration(transaction_style="url"),
        ],
        traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.1")),
        send_default_pii=False,
        environment=os.getenv("ENVIRONMENT", "production"),
        release=os.getenv("APP_VERSION", "unknown"),
    )

# -----------------------------------------------------------------------------
# API Configuration (Production)
# -----------------------------------------------------------------------------
REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {
    "anon": os.getenv("DRF_ANON_THROTTLE_RATE", "100/hour"),
    "user": os.getenv("DRF_USER_THROTTLE_RATE", "1000/hour"),
}
