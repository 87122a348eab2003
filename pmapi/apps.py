from django.apps import AppConfig


class PmapiConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pmapi"
    verbose_name = "Project Management"
