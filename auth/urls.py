# auth/urls.py
from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from auth.views import (
    ForgotPasswordView,
    LoginView,
    LogoutView,
    ResendVerificationView,
    ResetPasswordView,
    SignupView,
    VerifyEmailView,
)

urlpatterns = [
    path("signup", SignupView.as_view(), name="signup"),
    path("login", LoginView.as_view(), name="login"),
    path("logout", LogoutView.as_view(), name="logout"),
    path("token/refresh", TokenRefreshView.as_view(), name="token_refresh"),
    path("verify-email", VerifyEmailView.as_view(), name="verify_email"),
    path(
        "resend-verification",
        ResendVerificationView.as_view(),
        name="resend_verification",
    ),
    path("forgot-password", ForgotPasswordView.as_view(), name="forgot_password"),
    path("reset-password", ResetPasswordView.as_view(), name="reset_password"),
]
