"""
Settings module initialization.
Selects dev, prod or test settings from the DJANGO_ENV environment variable.
"""

import os

env = os.environ.get('DJANGO_ENV', 'dev')

if env == 'prod':
    from .prod import *
elif env == 'test':
    from .test import *
else:
    from .dev import *
