# stories/settings/dev.py
# export DJANGO_SETTINGS_MODULE=stories.settings.dev

from .base import *

DEBUG = True

ALLOWED_HOSTS = ['127.0.0.1', 'localhost', 'testserver']

LOGGING['loggers'].update({
    'assets.registry': {
        'handlers': ['console'],
        'level': 'DEBUG',
        'propagate': False,
    },
})

# Dev: serve the build output straight from disk
WHITENOISE_AUTOREFRESH = True
WHITENOISE_USE_FINDERS = True
