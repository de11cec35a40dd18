"""
Serializers for dashboard analytics.
"""

from rest_framework import serializers

from api.v1.plans.serializers import MONEY


class DashboardStatsSerializer(serializers.Serializer):
    activeLicenses = serializers.IntegerField(source="active_licenses")
    expiredLicenses = serializers.IntegerField(source="expired_licenses")
    totalRevenueUSD = serializers.DecimalField(source="total_revenue_usd", coerce_to_string=False, **MONEY)
    totalCustomers = serializers.IntegerField(source="total_customers")
    expiringSoonCount = serializers.IntegerField(source="expiring_soon_count")
    openTickets = serializers.IntegerField(source="open_tickets")


class TransactionSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    licenseId = serializers.UUIDField(source="license_id", allow_null=True)
    customerName = serializers.CharField(source="customer_name")
    planName = serializers.CharField(source="plan_name")
    amount = serializers.DecimalField(coerce_to_string=False, **MONEY)
    currency = serializers.CharField()
    type = serializers.CharField(source="type.value")
    status = serializers.CharField(source="status.value")
    date = serializers.DateTimeField()


class FinancialStatsSerializer(serializers.Serializer):
    totalRevenue = serializers.DecimalField(source="total_revenue", coerce_to_string=False, **MONEY)
    dailyRevenue = serializers.DecimalField(source="daily_revenue", coerce_to_string=False, **MONEY)
    monthlyRevenue = serializers.DecimalField(source="monthly_revenue", coerce_to_string=False, **MONEY)


class RevenuePointSerializer(serializers.Serializer):
    name = serializers.CharField()
    revenue = serializers.DecimalField(coerce_to_string=False, **MONEY)
