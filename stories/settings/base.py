# stories/settings/base.py
from __future__ import annotations
import os
from pathlib import Path

# Optional in dev, inert without a .env file
try:
    from dotenv import load_dotenv, find_dotenv  # type: ignore

    _dotenv_path = find_dotenv(filename=os.getenv("DOTENV_FILE", ".env"), usecwd=True)
    if _dotenv_path:
        load_dotenv(_dotenv_path, override=False)
except ImportError:
    pass

BASE_DIR = Path(__file__).resolve().parents[2]  # project root

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}


def env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return bool(default)
    return str(value).strip().lower() in _TRUE_VALUES


# --------------------------------------------------------------------------------------
# Keys & debug
# --------------------------------------------------------------------------------------
SECRET_KEY = os.getenv('SECRET_KEY', 'CHANGE_ME_DEV_ONLY')
DEBUG = False  # Safe default; dev.py flips it.

ALLOWED_HOSTS: list[str] = [h for h in os.getenv("ALLOWED_HOSTS", "").split(",") if h]

# --------------------------------------------------------------------------------------
# Apps
# --------------------------------------------------------------------------------------
DJANGO_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'django.contrib.staticfiles',
]

LOCAL_APPS = [
    "apps.assets.apps.AssetsConfig",
]

INSTALLED_APPS = DJANGO_APPS + LOCAL_APPS

# --------------------------------------------------------------------------------------
# Middleware
# WhiteNoise right after SecurityMiddleware
# --------------------------------------------------------------------------------------
MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'django.middleware.locale.LocaleMiddleware',
    'django.middleware.common.CommonMiddleware',
    "apps.assets.middleware.AssetsMiddleware",
]

ROOT_URLCONF = 'stories.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.template.context_processors.i18n',
            ],
        },
    },
]

WSGI_APPLICATION = 'stories.wsgi.application'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}

# --------------------------------------------------------------------------------------
# I18N / TZ
# --------------------------------------------------------------------------------------
LANGUAGE_CODE = 'en'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

LANGUAGES = [
    ('en', 'English'),
    ('fr', 'French'),
    ('ar', 'Arabic'),
    ('he', 'Hebrew'),
]

# --------------------------------------------------------------------------------------
# Static & build output
# --------------------------------------------------------------------------------------
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

ASSETS_BASE_DIR = Path(os.getenv("ASSETS_BASE_DIR", str(BASE_DIR / "assets")))
ASSETS_BASE_URL = os.getenv("ASSETS_BASE_URL", STATIC_URL + "assets/")
ASSETS_VERSION = os.getenv("ASSETS_VERSION", "1.0.0")
ASSETS_TEXT_DOMAIN = os.getenv("ASSETS_TEXT_DOMAIN", "stories")
ASSETS_LANGUAGES_DIR = Path(os.getenv("ASSETS_LANGUAGES_DIR", str(BASE_DIR / "languages")))
ASSETS_I18N_GLOBAL = "storiesI18n"

# Build output is collected under STATIC_URL/assets/
STATICFILES_DIRS = [("assets", ASSETS_BASE_DIR)] if ASSETS_BASE_DIR.is_dir() else []

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {
        # Chunks already carry a content hash; only compress.
        "BACKEND": "whitenoise.storage.CompressedStaticFilesStorage"
    },
}

# --------------------------------------------------------------------------------------
# Logging
# --------------------------------------------------------------------------------------
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {'format': '[{levelname}] {name}: {message}', 'style': '{'},
        'verbose': {'format': '{asctime} [{levelname}] {name} {module}:{lineno} - {message}', 'style': '{'},
    },
    'handlers': {
        'console': {'class': 'logging.StreamHandler', 'formatter': 'verbose'},
    },
    'root': {'handlers': ['console'], 'level': LOG_LEVEL},
    'loggers': {
        'django.request': {'handlers': ['console'], 'level': 'WARNING', 'propagate': True},
        'assets': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
    },
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
