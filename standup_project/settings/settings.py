import os
import sys
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv(Path(__file__).resolve().parents[2] / ".env")

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv(
    "SECRET_KEY",
    "django-insecure-4q$7r!n0v+z1w@b3k^s8e%u2j#p6y&c9d*t5m(h)x_g-a=f0i",
)

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.getenv("DEBUG", "True").lower() == "true"

# Environment configuration
ENV = os.getenv("ENV", "DEVELOPMENT").upper()

# Allowed hosts configuration
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")

# Database configuration
MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "standup")

INSTALLED_APPS = [
    "django.contrib.staticfiles",
    "corsheaders",
    "rest_framework",
    "drf_spectacular",
    "standup",
    "django.contrib.auth",
    "django.contrib.contenttypes",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.common.CommonMiddleware",
    "standup.middlewares.jwt_auth.JWTAuthenticationMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# Add CORS middleware for all environments
MIDDLEWARE.insert(0, "corsheaders.middleware.CorsMiddleware")

ROOT_URLCONF = "standup_project.urls"
WSGI_APPLICATION = "standup_project.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    },
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "standup.exceptions.exception_handler.handle_exception",
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

# Standup domain configuration
STANDUP = {
    "KEY_PREFIX": os.getenv("STANDUP_KEY_PREFIX", "standup/v1"),
    "DEFAULT_CUTOFF_TIME": os.getenv("DEFAULT_STANDUP_CUTOFF", "09:30"),
    "DEFAULT_TEAM_NAME": os.getenv("BOOTSTRAP_TEAM_NAME", "Engineering"),
    "TIMEZONE": os.getenv("STANDUP_TIMEZONE", "UTC"),
    "SELF_HEAL_ENABLED": os.getenv("STANDUP_SELF_HEAL_ENABLED", "True").lower() == "true",
    "HISTORY_DEFAULT_LIMIT": int(os.getenv("STANDUP_HISTORY_DEFAULT_LIMIT", "14")),
    "HISTORY_MAX_LIMIT": int(os.getenv("STANDUP_HISTORY_MAX_LIMIT", "60")),
    "KPI_WINDOW_DAYS": int(os.getenv("STANDUP_KPI_WINDOW_DAYS", "30")),
    "KPI_RECENT_DAYS": int(os.getenv("STANDUP_KPI_RECENT_DAYS", "7")),
    "SCAN_LIMIT": int(os.getenv("STANDUP_SCAN_LIMIT", "200")),
}

# First team / manager bootstrap
BOOTSTRAP = {
    "MANAGER_EMAIL": os.getenv("BOOTSTRAP_MANAGER_EMAIL", "").strip().lower(),
    "INITIAL_MANAGER_EMAIL": os.getenv("INITIAL_MANAGER_EMAIL", "").strip().lower(),
    "MANAGER_NAME": os.getenv("BOOTSTRAP_MANAGER_NAME", ""),
}

# Login allowlist. Empty means every address may sign in.
ALLOWED_EMAILS = [email.strip().lower() for email in os.getenv("ALLOWED_EMAILS", "").split(",") if email.strip()]

# Testing configuration
TESTING = "test" in sys.argv or "pytest" in sys.modules or os.getenv("TESTING") == "True"

if TESTING:
    AUTH_CONFIG = {
        "ALGORITHM": "HS256",
        "SECRET": "test-secret-key-for-jwt-signing-very-long-key-needed-for-security",
        "SESSION_LIFETIME": int(os.getenv("SESSION_LIFETIME", str(30 * 24 * 60 * 60))),
        "MAGIC_LINK_LIFETIME": int(os.getenv("MAGIC_LINK_LIFETIME", str(15 * 60))),
    }
else:
    AUTH_CONFIG = {
        "ALGORITHM": "HS256",
        "SECRET": os.getenv("AUTH_SECRET"),
        "SESSION_LIFETIME": int(os.getenv("SESSION_LIFETIME", str(30 * 24 * 60 * 60))),
        "MAGIC_LINK_LIFETIME": int(os.getenv("MAGIC_LINK_LIFETIME", str(15 * 60))),
    }

# Session cookie settings
COOKIE_SETTINGS = {
    "SESSION_COOKIE_NAME": os.getenv("SESSION_COOKIE_NAME", "standup_session"),
    "COOKIE_DOMAIN": os.getenv("COOKIE_DOMAIN") or None,
    "COOKIE_SECURE": os.getenv("COOKIE_SECURE", "False").lower() == "true",
    "COOKIE_HTTPONLY": True,
    "COOKIE_SAMESITE": os.getenv("COOKIE_SAMESITE", "Lax"),
    "COOKIE_PATH": "/",
}

# Frontend URL used when building magic links
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:" if TESTING else BASE_DIR / "db.sqlite3",
    }
}

PUBLIC_PATHS = [
    "/favicon.ico",
    "/v1/health",
    "/api/docs",
    "/api/schema",
    "/api/redoc",
    "/static/",
    "/v1/auth/request-link",
    "/v1/auth/verify",
    "/v1/auth/logout",
    "/v1/auth/session",
]

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "standup": {
            "handlers": ["console"],
            "level": os.getenv("STANDUP_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "standup_project": {
            "handlers": ["console"],
            "level": os.getenv("STANDUP_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}

# CORS Configuration
CORS_ALLOW_CREDENTIALS = os.getenv("CORS_ALLOW_CREDENTIALS", "True").lower() == "true"
CORS_ALLOW_ALL_ORIGINS = os.getenv("CORS_ALLOW_ALL_ORIGINS", "True").lower() == "true"

if not CORS_ALLOW_ALL_ORIGINS:
    CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")

CORS_ALLOW_HEADERS = [
    "accept",
    "accept-encoding",
    "content-type",
    "if-match",
    "origin",
    "user-agent",
    "x-csrftoken",
    "x-requested-with",
]
CORS_EXPOSE_HEADERS = ["etag"]

# Security Settings
SECURE_SSL_REDIRECT = os.getenv("SECURE_SSL_REDIRECT", "False").lower() == "true"
CSRF_COOKIE_SECURE = os.getenv("CSRF_COOKIE_SECURE", "False").lower() == "true"

# Swagger/OpenAPI Configuration
SPECTACULAR_SETTINGS = {
    "TITLE": "Standup API",
    "DESCRIPTION": "Daily standup tracking: per-team standup documents, team management and compliance KPIs",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": "/v1/",
    "TAGS": [
        {"name": "standup", "description": "Daily standup documents"},
        {"name": "manager", "description": "Team and member management"},
        {"name": "kpi", "description": "Compliance statistics"},
        {"name": "auth", "description": "Session operations"},
        {"name": "health", "description": "Health check endpoints"},
    ],
}

STATIC_URL = "/static/"
