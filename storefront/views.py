# storefront/views.py
#
# Purpose:
# - Thin host adapter: shopper-facing endpoints that fire hook events and turn
#   the decisions into HTTP responses. No order/availability logic lives here.
#   * GET  /shop/products/<id>/   purchasable flag + product page messages
#   * GET  /shop/checkout/        redirect away (if requested) or checkout info
#   * POST /shop/checkout/        run checkout process + validation events
#   * GET  /shop/gateways/        gateways offered for the active currency
#
import logging

from django.http import HttpResponseRedirect
from django.shortcuts import get_object_or_404
from django.utils.http import url_has_allowed_host_and_scheme
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from catalog.models import Product
from currency.services.currency_control import current_currency_for
from gateways.services.gateway_filter import get_available_gateways
from .hooks import (
    CHECKOUT_PROCESS,
    CHECKOUT_VALIDATE,
    PAGE_CHECKOUT,
    PAGE_PRODUCT,
    PAGE_REDIRECT,
    PAYMENT_AVAILABLE_GATEWAYS,
    PRODUCT_IS_PURCHASABLE,
    PRODUCT_SUMMARY,
    EventContext,
    registry,
)
from .serializers import CheckoutSerializer

logger = logging.getLogger(__name__)


def _is_admin_request(request) -> bool:
    return request.path.startswith("/admin/")


def _safe_redirect(request, url):
    """
    Redirect to 'url' when it points at this host (or a relative path);
    anything else falls back to the site root.
    """
    if not url_has_allowed_host_and_scheme(
        url, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        logger.warning("Refusing off-site redirect to %s", url)
        url = "/"
    return HttpResponseRedirect(url)


def _flatten_errors(errors) -> list:
    return [str(message) for messages in errors.values() for message in messages]


def available_gateways_for(request) -> dict:
    ctx = EventContext(request=request, value=get_available_gateways(), is_admin=_is_admin_request(request))
    return registry.dispatch(PAYMENT_AVAILABLE_GATEWAYS, ctx)


class ProductPageView(APIView):
    def get(self, request, product_id):
        product = get_object_or_404(Product, pk=product_id, active=True)

        purchasable = registry.dispatch(
            PRODUCT_IS_PURCHASABLE,
            EventContext(request=request, value=True, product_id=product.id, page=PAGE_PRODUCT),
        )

        summary = EventContext(request=request, product_id=product.id, page=PAGE_PRODUCT)
        registry.dispatch(PRODUCT_SUMMARY, summary)

        return Response({
            "id": product.id,
            "name": product.name,
            "purchasable": bool(purchasable),
            "messages": [str(fragment) for fragment in summary.output],
        })


class CheckoutView(APIView):
    def get(self, request):
        ctx = EventContext(request=request, page=PAGE_CHECKOUT)
        registry.dispatch(PAGE_REDIRECT, ctx)
        if ctx.redirect_url:
            return _safe_redirect(request, ctx.redirect_url)

        return Response({
            "currency": current_currency_for(request),
            "gateways": available_gateways_for(request),
        })

    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"result": "failure", "errors": _flatten_errors(serializer.errors)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        ctx = EventContext(request=request, value=serializer.validated_data, page=PAGE_CHECKOUT)
        registry.dispatch(CHECKOUT_PROCESS, ctx)
        registry.dispatch(CHECKOUT_VALIDATE, ctx)

        payment_method = serializer.validated_data["payment_method"]
        if payment_method and payment_method not in available_gateways_for(request):
            ctx.add_error("invalid_payment_method", "Invalid payment method.")

        errors = ctx.error_messages()
        if errors:
            return Response(
                {"result": "failure", "errors": [str(e) for e in errors]},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response({"result": "success"}, status=status.HTTP_200_OK)


class GatewayListView(APIView):
    def get(self, request):
        return Response({
            "currency": current_currency_for(request),
            "gateways": available_gateways_for(request),
        })
