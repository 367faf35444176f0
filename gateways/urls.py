from django.urls import path

from .views import AvailableGatewaysView, GatewaySettingsView, GatewayStatisticsView

urlpatterns = [
    path("settings/", GatewaySettingsView.as_view(), name="gateway_settings"),
    path("available/", AvailableGatewaysView.as_view(), name="gateway_available"),
    path("statistics/", GatewayStatisticsView.as_view(), name="gateway_statistics"),
]
