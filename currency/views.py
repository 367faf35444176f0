# currency/views.py
#
# Purpose:
# - Staff-only endpoints for the store currency table.
#   * GET /api/currency/settings/   stored record
#   * PUT /api/currency/settings/   replace record (rows are normalized)
#
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from configmgr.permissions import IsStaffOnly
from .serializers import CurrencySettingsSerializer
from .services.currency_control import CurrencyControl, load_currency_settings, save_currency_settings

logger = logging.getLogger(__name__)


class CurrencySettingsView(APIView):
    permission_classes = [IsStaffOnly]

    def get(self, request):
        settings = load_currency_settings()
        data = settings.to_dict()
        data["active_currencies"] = CurrencyControl(settings).get_active_currencies()
        return Response(data)

    def put(self, request):
        serializer = CurrencySettingsSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        settings = serializer.to_settings()
        save_currency_settings(settings)
        logger.info("Currency settings updated (%d rates)", len(settings.currencies))
        return Response(settings.to_dict(), status=status.HTTP_200_OK)
