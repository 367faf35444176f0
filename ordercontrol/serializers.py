from rest_framework import serializers

from .services.order_settings import RESTRICTION_TYPES, DEFAULT_DISABLED_MESSAGE, OrderControlSettings
from .services.time_utils import parse_hhmm, parse_timestamp


class OrderControlSettingsSerializer(serializers.Serializer):
    """
    Whole-record payload for the order control settings.
    Fields left out of a PUT fall back to their defaults.
    """
    enable_orders = serializers.BooleanField(default=True)
    restriction_type = serializers.ChoiceField(choices=RESTRICTION_TYPES, default="all")
    restricted_categories = serializers.ListField(child=serializers.IntegerField(min_value=1), default=list)
    restricted_products = serializers.ListField(child=serializers.IntegerField(min_value=1), default=list)
    enable_date_range = serializers.BooleanField(default=False)
    start_datetime = serializers.CharField(allow_blank=True, default="")
    end_datetime = serializers.CharField(allow_blank=True, default="")
    enable_timeframe = serializers.BooleanField(default=False)
    start_time = serializers.CharField(allow_blank=True, default="00:00")
    end_time = serializers.CharField(allow_blank=True, default="23:59")
    redirect_url = serializers.CharField(allow_blank=True, default="", max_length=2000)
    disabled_message = serializers.CharField(allow_blank=True, default=DEFAULT_DISABLED_MESSAGE)

    def _validate_time(self, value):
        value = value.strip()
        if not value:
            return value
        try:
            t = parse_hhmm(value)
        except ValueError:
            raise serializers.ValidationError("Use HH:MM (24-hour) format.")
        return t.strftime("%H:%M")

    def _validate_timestamp(self, value):
        value = value.strip()
        if not value:
            return value
        try:
            parse_timestamp(value)
        except ValueError:
            raise serializers.ValidationError("Use YYYY-MM-DD or YYYY-MM-DDTHH:MM format.")
        return value

    def validate_start_time(self, value):
        return self._validate_time(value)

    def validate_end_time(self, value):
        return self._validate_time(value)

    def validate_start_datetime(self, value):
        return self._validate_timestamp(value)

    def validate_end_datetime(self, value):
        return self._validate_timestamp(value)

    def validate(self, attrs):
        start, end = attrs.get("start_datetime"), attrs.get("end_datetime")
        if start and end and parse_timestamp(start) > parse_timestamp(end):
            raise serializers.ValidationError({"end_datetime": "End must not be before start."})
        return attrs

    def to_settings(self) -> OrderControlSettings:
        return OrderControlSettings.from_dict(self.validated_data)
