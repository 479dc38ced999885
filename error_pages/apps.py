from django.apps import AppConfig
from django.core import checks


class ErrorPagesConfig(AppConfig):
    name = "error_pages"
    verbose_name = "Error pages"

    def ready(self):
        from .checks import check_error_pages_settings

        checks.register(check_error_pages_settings, checks.Tags.compatibility)
