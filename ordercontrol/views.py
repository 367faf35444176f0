# ordercontrol/views.py
#
# Purpose:
# - Staff-only JSON endpoints for the order control settings record.
#   * GET /api/order-control/settings/     current record (defaults filled in)
#   * PUT /api/order-control/settings/     replace the whole record
#   * GET /api/order-control/statistics/   dashboard summary
#
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from configmgr.permissions import IsStaffOnly
from .serializers import OrderControlSettingsSerializer
from .services.availability_evaluator import OrderAvailabilityEvaluator
from .services.order_settings import load_order_settings, save_order_settings


class OrderControlSettingsView(APIView):
    permission_classes = [IsStaffOnly]

    def get(self, request):
        return Response(load_order_settings().to_dict())

    def put(self, request):
        serializer = OrderControlSettingsSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        settings = serializer.to_settings()
        save_order_settings(settings)
        return Response(settings.to_dict(), status=status.HTTP_200_OK)


class OrderControlStatisticsView(APIView):
    permission_classes = [IsStaffOnly]

    def get(self, request):
        evaluator = OrderAvailabilityEvaluator(load_order_settings())
        return Response(evaluator.get_statistics())
