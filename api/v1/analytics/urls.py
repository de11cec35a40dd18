"""
URL configuration for analytics endpoints.
"""

from django.urls import path

from api.v1.analytics import views

urlpatterns = [
    path("stats", views.DashboardStatsView.as_view(), name="analytics-stats"),
    path("transactions", views.RecentTransactionsView.as_view(), name="analytics-transactions"),
    path("financial-stats", views.FinancialStatsView.as_view(), name="analytics-financial-stats"),
    path("revenue-history", views.RevenueHistoryView.as_view(), name="analytics-revenue-history"),
]
