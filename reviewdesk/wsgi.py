"""
WSGI config for the review dashboard.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "reviewdesk.settings")

application = get_wsgi_application()
