# commerce_control/urls.py
#
# Purpose:
# - Project URL router.
# - Shopper-facing storefront under /shop/, staff JSON APIs under /api/,
#   log viewer AJAX under /admin-ajax/.
#
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    # Django admin
    path("admin/", admin.site.urls),

    # Admin log viewer AJAX
    path("admin-ajax/", include("requestlogs.urls")),

    # Storefront (host adapter)
    path("shop/", include("storefront.urls")),

    # Staff settings APIs
    path("api/order-control/", include("ordercontrol.urls")),
    path("api/payment-gateways/", include("gateways.urls")),
    path("api/currency/", include("currency.urls")),
]
