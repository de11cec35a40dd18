"""
URL configuration for plan and currency endpoints.
"""

from django.urls import path

from api.v1.plans import views

plan_urlpatterns = [
    path("", views.PlanListView.as_view(), name="plan-list"),
    path("<uuid:plan_id>", views.PlanDetailView.as_view(), name="plan-detail"),
    path("<uuid:plan_id>/activate", views.PlanActivationView.as_view(is_active=True), name="plan-activate"),
    path("<uuid:plan_id>/deactivate", views.PlanActivationView.as_view(is_active=False), name="plan-deactivate"),
]

public_plan_urlpatterns = [
    path("", views.PublicPlanListView.as_view(), name="public-plan-list"),
]

currency_urlpatterns = [
    path("", views.CurrencyListView.as_view(), name="currency-list"),
    path("sync", views.CurrencySyncView.as_view(), name="currency-sync"),
    path("<str:code>", views.CurrencyDetailView.as_view(), name="currency-detail"),
]
