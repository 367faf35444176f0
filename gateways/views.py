# gateways/views.py
#
# Purpose:
# - Staff-only JSON endpoints for currency -> gateway rules.
#   * GET /api/payment-gateways/settings/     stored rules
#   * PUT /api/payment-gateways/settings/     replace all rules
#   * GET /api/payment-gateways/available/    every gateway + active currencies
#   * GET /api/payment-gateways/statistics/   dashboard counts
#
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from configmgr.permissions import IsStaffOnly
from currency.services.currency_control import CurrencyControl, load_currency_settings
from .serializers import PaymentGatewaySettingsSerializer
from .services.gateway_filter import GatewayCurrencyFilter, get_available_gateways
from .services.gateway_rules import load_gateway_settings, save_gateway_settings


class GatewaySettingsView(APIView):
    permission_classes = [IsStaffOnly]

    def get(self, request):
        return Response(load_gateway_settings().to_dict())

    def put(self, request):
        serializer = PaymentGatewaySettingsSerializer(
            data=request.data,
            context={"known_gateways": get_available_gateways()},
        )
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        settings = serializer.to_settings()
        save_gateway_settings(settings)
        return Response(settings.to_dict(), status=status.HTTP_200_OK)


class AvailableGatewaysView(APIView):
    permission_classes = [IsStaffOnly]

    def get(self, request):
        return Response({
            "gateways": get_available_gateways(),
            "currencies": CurrencyControl(load_currency_settings()).get_active_currencies(),
        })


class GatewayStatisticsView(APIView):
    permission_classes = [IsStaffOnly]

    def get(self, request):
        currency_control = CurrencyControl(load_currency_settings())
        gateway_filter = GatewayCurrencyFilter(
            load_gateway_settings(), currency_control.settings.default_currency
        )
        return Response(gateway_filter.get_statistics(
            available_gateways=get_available_gateways(),
            active_currencies=currency_control.get_active_currencies(),
        ))
