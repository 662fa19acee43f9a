# stories/settings/prod.py
from .base import *

SECURE_SSL_REDIRECT = env_flag("SECURE_SSL_REDIRECT", default=True)
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
