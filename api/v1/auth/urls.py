"""
URL configuration for authentication and user endpoints.
"""

from django.urls import path

from api.v1.auth import views

auth_urlpatterns = [
    path("login", views.LoginView.as_view(), name="auth-login"),
    path("refresh", views.RefreshView.as_view(), name="auth-refresh"),
    path("me", views.MeView.as_view(), name="auth-me"),
    path("logout", views.LogoutView.as_view(), name="auth-logout"),
]

user_urlpatterns = [
    path("", views.UserListView.as_view(), name="user-list"),
    path("<uuid:user_id>", views.UserDetailView.as_view(), name="user-detail"),
]
