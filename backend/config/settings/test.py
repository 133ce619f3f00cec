"""
Test settings: in-memory SQLite, fast hashing, no throttling.
"""

from .base import *

DEBUG = False

ALLOWED_HOSTS = ['*']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []
REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'] = {}

ECODE_LISTING_ORDER = 'asc'
ECODE_CREATE_MAX_ATTEMPTS = 3
ECODE_ADMIN_GROUP = 'ecode-admin'

# Console only
for _logger in LOGGING['loggers'].values():
    _logger['handlers'] = ['console']
