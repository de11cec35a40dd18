"""
Integration tests for dashboard analytics.
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from licenses.domain.services import MONTH_NAMES
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.models import Transaction as TransactionModel
from plans.infrastructure.models import Currency as CurrencyModel


def generate(client, plan, customer, quantity=1):
    response = client.post(
        "/api/licenses/generate",
        {"planId": str(plan.id), "customerName": customer, "quantity": quantity},
        format="json",
    )
    assert response.status_code == 201, response.content
    return response.json()


@pytest.mark.django_db
class TestAnalyticsAPI:
    """Tests for /api/analytics."""

    def test_dashboard_stats(self, admin_client, viewer_client, api_client, db_plan):
        licenses = generate(admin_client, db_plan, "Corner Shop", quantity=2)
        generate(admin_client, db_plan, "Main Street Market")
        api_client.post("/license/activate", {"serial": licenses[0]["serial"], "hardwareId": "HW-1"}, format="json")
        LicenseModel.objects.filter(serial=licenses[1]["serial"]).update(status="expired")

        response = viewer_client.get("/api/analytics/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["activeLicenses"] == 1
        assert data["expiredLicenses"] == 1
        assert data["totalCustomers"] == 2
        assert Decimal(str(data["totalRevenueUSD"])) == Decimal("360")
        assert data["expiringSoonCount"] == 0
        assert data["openTickets"] == 0

    def test_expiring_soon(self, admin_client, viewer_client, api_client, db_license):
        api_client.post("/license/activate", {"serial": db_license.serial, "hardwareId": "HW-1"}, format="json")
        LicenseModel.objects.filter(id=db_license.id).update(expire_date=timezone.now() + timedelta(days=10))

        assert viewer_client.get("/api/analytics/stats").json()["expiringSoonCount"] == 1

    def test_revenue_converted_to_usd(self, admin_client, viewer_client, db_license):
        CurrencyModel.objects.create(code="IQD", rate=Decimal("1500"), symbol="IQD")
        TransactionModel.objects.create(
            license_id=db_license.id,
            customer_name="Corner Shop",
            plan_name="Standard",
            amount=Decimal("150000"),
            currency="IQD",
            type="purchase",
            date=timezone.now(),
        )

        data = viewer_client.get("/api/analytics/financial-stats").json()

        assert Decimal(str(data["totalRevenue"])) == Decimal("100")
        assert Decimal(str(data["monthlyRevenue"])) == Decimal("100")
        assert Decimal(str(data["dailyRevenue"])) == Decimal("100")

    def test_recent_transactions(self, admin_client, viewer_client, db_plan):
        generate(admin_client, db_plan, "Corner Shop")

        response = viewer_client.get("/api/analytics/transactions")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["type"] == "purchase"
        assert data[0]["status"] == "completed"
        assert data[0]["planName"] == "Standard"
        assert Decimal(str(data[0]["amount"])) == Decimal("120")

    def test_revenue_history(self, admin_client, viewer_client, db_plan):
        generate(admin_client, db_plan, "Corner Shop")

        history = viewer_client.get("/api/analytics/revenue-history").json()

        assert len(history) == 12
        assert history[-1]["name"] == MONTH_NAMES[timezone.now().month - 1]
        assert Decimal(str(history[-1]["revenue"])) == Decimal("120")

    def test_requires_login(self, api_client, db):
        assert api_client.get("/api/analytics/stats").status_code == 401
