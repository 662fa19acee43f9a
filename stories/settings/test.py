# stories/settings/test.py
from .base import *  # noqa: F401,F403

DEBUG = False
ALLOWED_HOSTS = ['testserver']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Tests point ASSETS_BASE_DIR / ASSETS_LANGUAGES_DIR at temporary directories.
STATICFILES_DIRS = []
WHITENOISE_AUTOREFRESH = True
WHITENOISE_USE_FINDERS = False

LOGGING['loggers']['assets']['level'] = 'CRITICAL'
