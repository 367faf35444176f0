from django.urls import path

from .views import CheckoutView, GatewayListView, ProductPageView

urlpatterns = [
    path("products/<int:product_id>/", ProductPageView.as_view(), name="product_page"),
    path("checkout/", CheckoutView.as_view(), name="checkout"),
    path("gateways/", GatewayListView.as_view(), name="gateway_list"),
]
