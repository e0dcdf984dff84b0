"""URL configuration for accounts app."""

from django.contrib.auth import views as auth_views
from django.urls import path

from server.apps.accounts import views

app_name = 'accounts'

urlpatterns = [
    path('register/', views.register, name='register'),
    path(
        'login/',
        auth_views.LoginView.as_view(redirect_authenticated_user=True),
        name='login',
    ),
    path('logout/', auth_views.LogoutView.as_view(), name='logout'),
]
