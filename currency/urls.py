from django.urls import path

from .views import CurrencySettingsView

urlpatterns = [
    path("settings/", CurrencySettingsView.as_view(), name="currency_settings"),
]
