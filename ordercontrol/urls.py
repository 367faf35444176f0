from django.urls import path

from .views import OrderControlSettingsView, OrderControlStatisticsView

urlpatterns = [
    path("settings/", OrderControlSettingsView.as_view(), name="order_control_settings"),
    path("statistics/", OrderControlStatisticsView.as_view(), name="order_control_statistics"),
]
