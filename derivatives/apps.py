from django.apps import AppConfig


class DerivativesConfig(AppConfig):
    name = 'derivatives'
    default_auto_field = 'django.db.models.BigAutoField'

    def ready(self):
        """Create the upload and processed directories at startup"""
        from derivatives.service.config import ensure_directories

        ensure_directories()
