"""
WSGI config for staytrack project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'staytrack.settings')

application = get_wsgi_application()
