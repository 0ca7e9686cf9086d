"""
WSGI config for Hris project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "Hris.settings")

application = get_wsgi_application()
