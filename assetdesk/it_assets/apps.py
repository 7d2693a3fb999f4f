from django.apps import AppConfig


class ItAssetsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "it_assets"
    verbose_name = "IT Assets"

    def ready(self):
        from . import signals  # noqa: F401
