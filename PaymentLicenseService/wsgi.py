"""
WSGI config for PaymentLicenseService project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "PaymentLicenseService.settings.dev")

application = get_wsgi_application()
