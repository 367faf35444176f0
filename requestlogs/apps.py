from django.apps import AppConfig


class RequestlogsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "requestlogs"
    verbose_name = "Request logs"
