from django.db import models


class Option(models.Model):
    """
    Simple key/value settings store.
    Each key holds one whole settings record as JSON. Example keys:
      - cst_order_control_settings
      - ser_payment_gateway_settings
      - cst_currency_settings
    """
    key = models.CharField(max_length=100, unique=True)
    value = models.JSONField(default=dict, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.key
