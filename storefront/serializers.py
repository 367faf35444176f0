from rest_framework import serializers


class CheckoutSerializer(serializers.Serializer):
    payment_method = serializers.CharField(required=False, allow_blank=True, default="")
