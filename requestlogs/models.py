# requestlogs/models.py
#
# Purpose:
# - Record of a shopper request handled by the storefront, shown in the
#   admin log viewer.
#
# Notes for developers:
# - request_params, request_headers and response_data hold JSON text as
#   captured; nothing guarantees it parses (the viewer copes with that).
#
from django.db import models


class RequestLog(models.Model):
    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("success", "Success"),
        ("failed", "Failed"),
    ]

    ip_address = models.GenericIPAddressField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    created_at = models.DateTimeField(auto_now_add=True)
    processed_at = models.DateTimeField(null=True, blank=True)
    request_body = models.TextField(blank=True)
    request_params = models.TextField(blank=True)
    request_headers = models.TextField(blank=True)
    response_data = models.TextField(blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"Log #{self.pk} ({self.status})"
