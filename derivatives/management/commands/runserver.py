"""
Development server that listens on the configured port.

Same as Django's runserver, but the default port comes from settings.PORT
(environment variable PORT, default 3000).
"""
from django.core.management.commands.runserver import Command as RunserverCommand

from derivatives.service.config import get_port


class Command(RunserverCommand):
    help = 'Starts the upload service on the port from the PORT environment variable'

    def handle(self, *args, **options):
        self.default_port = str(get_port())
        super().handle(*args, **options)
