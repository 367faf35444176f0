from rest_framework import serializers

from .services.currency_control import CurrencySettings


class CurrencySettingsSerializer(serializers.Serializer):
    default_currency = serializers.RegexField(r"^[A-Za-z]{3}$", required=False, allow_blank=True)
    # Rows as posted by the admin rate table: {select, code, symbol, rate}
    currencies = serializers.ListField(child=serializers.DictField(), default=list)

    def to_settings(self) -> CurrencySettings:
        return CurrencySettings.from_dict(self.validated_data)
