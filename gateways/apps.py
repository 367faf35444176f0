# gateways/apps.py
from django.apps import AppConfig


class GatewaysConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "gateways"
    verbose_name = "Payment gateway control"

    def ready(self):
        from storefront.hooks import registry
        from .handlers import register_hooks

        register_hooks(registry)
