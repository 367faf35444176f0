from rest_framework import serializers

from .services.gateway_rules import GatewayRule, PaymentGatewaySettings


class GatewayRuleSerializer(serializers.Serializer):
    enabled = serializers.BooleanField(default=True)
    currencies = serializers.ListField(
        child=serializers.RegexField(r"^[A-Za-z]{3}$"), allow_empty=False
    )
    gateways = serializers.ListField(child=serializers.CharField(max_length=100), allow_empty=False)

    def validate_gateways(self, value):
        known = self.context.get("known_gateways")
        if known is not None:
            unknown = [g for g in value if g not in known]
            if unknown:
                raise serializers.ValidationError(f"Unknown gateways: {', '.join(unknown)}")
        return value


class PaymentGatewaySettingsSerializer(serializers.Serializer):
    rules = GatewayRuleSerializer(many=True, default=list)

    def to_settings(self) -> PaymentGatewaySettings:
        return PaymentGatewaySettings(
            rules=tuple(GatewayRule.from_dict(dict(r)) for r in self.validated_data["rules"])
        )
