from django.contrib import admin
from .models import RequestLog


@admin.register(RequestLog)
class RequestLogAdmin(admin.ModelAdmin):
    list_display = ("id", "ip_address", "status", "created_at", "processed_at")
    list_filter = ("status",)
    search_fields = ("ip_address",)
    readonly_fields = ("created_at",)
