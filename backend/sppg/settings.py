"""
Django settings for the SPPG kitchen backend.

Single settings module; environment differences (local / staging / production)
are handled by the DJANGO_ENV shim at the bottom.
"""

import os
from pathlib import Path
from celery.schedules import crontab

LOG_JSON = os.getenv("LOG_JSON", "1") == "1"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# this file lives at backend/sppg/settings.py; BASE_DIR is /backend
BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-unsafe")
DEBUG = os.getenv("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]
CSRF_TRUSTED_ORIGINS = [o.strip() for o in os.getenv("CSRF_TRUSTED_ORIGINS", "").split(",") if o.strip()]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # project apps
    "accounts",
    "audit",
    "volunteers",
    "inventory",
    "menus",
    "procurement",
    "distribution",
    "reporting",
    "rowstore.apps.RowStoreConfig",  # <- registers the mirror signals
    "ops",                           # observability + backups
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "ops.middleware.RequestLogMiddleware",
]

# Templates (needed for Django admin)
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",   # admin needs this
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    }
]

ROOT_URLCONF = "sppg.urls"
WSGI_APPLICATION = "sppg.wsgi.application"

MYSQL_DATABASE = os.getenv("MYSQL_DATABASE", "")

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.mysql",
        "NAME": MYSQL_DATABASE or "sppg",
        "USER": os.getenv("MYSQL_USER", "sppg"),
        "PASSWORD": os.getenv("MYSQL_PASSWORD", "sppg"),
        "HOST": os.getenv("DB_HOST", "127.0.0.1"),
        "PORT": int(os.getenv("DB_PORT", "3306")),
        "OPTIONS": {
            "charset": "utf8mb4",
            "use_unicode": True,
        },
    }
}

AUTH_USER_MODEL = "accounts.User"
AUTHENTICATION_BACKENDS = ["django.contrib.auth.backends.ModelBackend"]

LANGUAGE_CODE = "id"
TIME_ZONE = os.getenv("TIME_ZONE", "Asia/Jakarta")
USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

ADMIN_URL = os.getenv("ADMIN_URL", "admin")

# --- Kitchen / letterhead ---
KITCHEN_NAME = os.getenv("KITCHEN_NAME", "SPPG MARTAJASAH")
KITCHEN_AGENCY = os.getenv("KITCHEN_AGENCY", "BADAN GIZI NASIONAL")
KITCHEN_FOUNDATION = os.getenv("KITCHEN_FOUNDATION", "YAYASAN SEHAT LUHUR MANDIRI")
KITCHEN_ADDRESS = os.getenv(
    "KITCHEN_ADDRESS",
    "Martajasah, Kec. Bangkalan, Kab. Bangkalan-Madura. Jawa Timur, 69115.",
)
KITCHEN_PHONE = os.getenv("KITCHEN_PHONE", "089612827022")

# --- Distribution ---
# Statuses in which a planned distribution may still be cancelled.
DISTRIBUTION_CANCELLABLE_STATUSES = [
    s.strip() for s in os.getenv("DISTRIBUTION_CANCELLABLE_STATUSES", "PREPARING").split(",") if s.strip()
]
SERIAL_AGENCY_CODE = os.getenv("SERIAL_AGENCY_CODE", "SJ/MRTJSH")
DAILY_PORTION_TARGET = int(os.getenv("DAILY_PORTION_TARGET", "2678"))
DEFAULT_RECIPIENT_NAME = os.getenv("DEFAULT_RECIPIENT_NAME", "PANITIA MBG")
# Default destination list for bulk planning (comma separated).
DISTRIBUTION_DESTINATIONS = [
    s.strip() for s in os.getenv("DISTRIBUTION_DESTINATIONS", "").split(",") if s.strip()
]

# --- Remote row store ---
ROWSTORE_PROVIDER = os.getenv("ROWSTORE_PROVIDER", "mock")
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_KEY = os.getenv("SUPABASE_KEY", "")
ROWSTORE_TIMEOUT = int(os.getenv("ROWSTORE_TIMEOUT", "20"))
ROWSTORE_MAX_ATTEMPTS = int(os.getenv("ROWSTORE_MAX_ATTEMPTS", "5"))
ROWSTORE_FLUSH_ON_COMMIT = os.getenv("ROWSTORE_FLUSH_ON_COMMIT", "1") == "1"

CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/0")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/1")
CELERY_TIMEZONE = TIME_ZONE

CELERY_BEAT_SCHEDULE = {
    "rowstore-flush-every-1m": {
        "task": "rowstore.tasks.flush_pending_writes",
        "schedule": crontab(minute="*/1"),
    },
    "ops-beat-heartbeat-every-1m": {
        "task": "ops.tasks.beat_heartbeat",
        "schedule": crontab(minute="*/1"),
    },
    "ops-nightly-backup": {
        "task": "ops.tasks.nightly_backup",
        "schedule": crontab(hour=2, minute=30),
    },
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {"format": "%(message)s"},
        "verbose": {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"},
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json" if LOG_JSON else "verbose",
        },
    },
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "request": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "django.db.backends": {"level": "WARNING"},
    },
}

# ------------------------------------------------------------------------------
# Environment profile
# ------------------------------------------------------------------------------
# Prefer DJANGO_ENV; if not set, fall back to the *suffix* of DJANGO_SETTINGS_MODULE
# (e.g. ".local", ".staging", ".production").
DJANGO_ENV = os.getenv("DJANGO_ENV")
if not DJANGO_ENV:
    _dsm = os.getenv("DJANGO_SETTINGS_MODULE", "")
    if _dsm.endswith(".staging"):
        DJANGO_ENV = "staging"
    elif _dsm.endswith(".production"):
        DJANGO_ENV = "production"
    else:
        DJANGO_ENV = "local"

DJANGO_ENV = DJANGO_ENV.lower()

if DJANGO_ENV == "local":
    DEBUG = True
    if not MYSQL_DATABASE:
        DATABASES = {
            "default": {
                "ENGINE": "django.db.backends.sqlite3",
                "NAME": BASE_DIR / "db.sqlite3",
            }
        }
elif DJANGO_ENV in {"staging", "production"}:
    DEBUG = False
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True
    SECURE_SSL_REDIRECT = True
    SECURE_HSTS_SECONDS = 3600
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_PRELOAD = True
# ------------------------------------------------------------------------------
