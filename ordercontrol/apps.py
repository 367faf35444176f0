# ordercontrol/apps.py
from django.apps import AppConfig


class OrderControlConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ordercontrol"
    verbose_name = "Order control"

    def ready(self):
        # Wire our handlers into the storefront's event table at startup
        from storefront.hooks import registry
        from .handlers import register_hooks

        register_hooks(registry)
