"""
Serializers for plan and currency endpoints.
"""

from rest_framework import serializers

from plans.domain.plan import PlanPrice

MONEY = {"max_digits": 14, "decimal_places": 2}


class PlanPriceSerializer(serializers.Serializer):
    """One per-currency price row of a plan."""

    currency = serializers.CharField(max_length=3)
    monthlyPrice = serializers.DecimalField(source="monthly_price", min_value=0, required=False, allow_null=True, **MONEY)
    periodPrice = serializers.DecimalField(source="period_price", min_value=0, required=False, allow_null=True, **MONEY)
    yearlyPrice = serializers.DecimalField(source="yearly_price", min_value=0, required=False, allow_null=True, **MONEY)
    discount = serializers.DecimalField(min_value=0, max_value=100, required=False, allow_null=True, **MONEY)
    isPrimary = serializers.BooleanField(source="is_primary", default=False)

    def to_price(self, data) -> PlanPrice:
        return PlanPrice(
            currency=data["currency"],
            monthly_price=data.get("monthly_price"),
            period_price=data.get("period_price"),
            yearly_price=data.get("yearly_price"),
            discount=data.get("discount"),
            is_primary=data.get("is_primary", False),
        )


class PlanRequestSerializer(serializers.Serializer):
    """Body of plan create and update."""

    name = serializers.CharField(min_length=2, max_length=100)
    durationMonths = serializers.IntegerField(min_value=1, default=12)
    deviceLimit = serializers.IntegerField(min_value=0, default=1)
    prices = PlanPriceSerializer(many=True, default=list)
    features = serializers.DictField(child=serializers.BooleanField(), required=False, default=dict)
    limits = serializers.DictField(child=serializers.FloatField(), required=False, default=dict)
    isActive = serializers.BooleanField(default=True)
    priceUSD = serializers.DecimalField(min_value=0, required=False, allow_null=True, **MONEY)

    def command_kwargs(self) -> dict:
        """Validated data in the shape of the plan commands."""
        data = self.validated_data
        price_serializer = PlanPriceSerializer()
        limits = {key: int(value) if float(value).is_integer() else value for key, value in data["limits"].items()}
        return {
            "name": data["name"],
            "duration_months": data["durationMonths"],
            "device_limit": data["deviceLimit"],
            "prices": [price_serializer.to_price(price) for price in data["prices"]],
            "features": data["features"],
            "limits": limits,
            "is_active": data["isActive"],
            "price_usd": data.get("priceUSD"),
        }


class PlanSerializer(serializers.Serializer):
    """Plan as returned to the dashboard."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    durationMonths = serializers.IntegerField(source="duration_months")
    deviceLimit = serializers.IntegerField(source="device_limit")
    priceUSD = serializers.DecimalField(source="price_usd", coerce_to_string=False, **MONEY)
    price_monthly = serializers.DecimalField(coerce_to_string=False, **MONEY)
    price_yearly = serializers.DecimalField(coerce_to_string=False, **MONEY)
    currency = serializers.CharField()
    features = serializers.DictField()
    limits = serializers.DictField()
    isActive = serializers.BooleanField(source="is_active")
    is_active = serializers.BooleanField()
    isTrial = serializers.BooleanField(source="is_trial")
    prices = PlanPriceSerializer(many=True)
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class PublicPlanSerializer(serializers.Serializer):
    """Plan summary on the public pricing page."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    price_monthly = serializers.DecimalField(coerce_to_string=False, **MONEY)
    price_yearly = serializers.DecimalField(coerce_to_string=False, **MONEY)
    currency = serializers.CharField()
    features = serializers.DictField()
    limits = serializers.DictField()
    is_active = serializers.BooleanField()


class CurrencySerializer(serializers.Serializer):
    code = serializers.CharField()
    rate = serializers.DecimalField(max_digits=18, decimal_places=6, coerce_to_string=False)
    symbol = serializers.CharField()
    lastUpdated = serializers.DateTimeField(source="last_updated")


class CurrencyCreateSerializer(serializers.Serializer):
    """Body of currency create."""

    code = serializers.CharField(min_length=3, max_length=3)
    rate = serializers.DecimalField(max_digits=18, decimal_places=6)
    symbol = serializers.CharField(max_length=5)


class CurrencyUpdateSerializer(serializers.Serializer):
    """Body of currency update; omitted fields are kept."""

    rate = serializers.DecimalField(max_digits=18, decimal_places=6, required=False)
    symbol = serializers.CharField(max_length=5, required=False)


class RateSyncSerializer(serializers.Serializer):
    updated = serializers.IntegerField()
    source = serializers.CharField()
