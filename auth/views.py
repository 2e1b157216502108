# auth/views.py
import logging

from django.contrib.auth import get_user_model
from django.utils import timezone
from django.utils.decorators import method_decorator
from django.views.decorators.debug import sensitive_post_parameters
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed, NotFound, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from users import services as user_services
from users.emails import send_password_reset_email, send_verification_email
from users.serializers import UserSerializer

from .serializers import (
    EmailOnlySerializer,
    LoginSerializer,
    LogoutSerializer,
    ResetPasswordSerializer,
    SignupSerializer,
    VerifyEmailSerializer,
)

logger = logging.getLogger(__name__)
User = get_user_model()

sensitive_post_parameters_m = method_decorator(
    sensitive_post_parameters("password"), name="dispatch"
)

FORGOT_PASSWORD_MESSAGE = (
    "If an account exists for that email, a password reset link is on its way."
)


def issue_tokens(user):
    """Refresh/access pair carrying the handle and e-mail as extra claims."""
    refresh = RefreshToken.for_user(user)
    refresh["email"] = user.email
    refresh["handle"] = user.handle
    return {"token": str(refresh.access_token), "refresh": str(refresh)}


@sensitive_post_parameters_m
class SignupView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        description="Create an unverified account and e-mail a verification code",
        summary="Sign Up",
        tags=["Auth"],
        request=SignupSerializer,
    )
    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = user_services.create_user(**serializer.validated_data)
        send_verification_email(user)
        return Response(
            {
                "message": "Account created. Check your email for a verification code.",
                "user": UserSerializer(user).data,
            },
            status=status.HTTP_201_CREATED,
        )


@sensitive_post_parameters_m
class LoginView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        description="Exchange e-mail and password for a bearer token pair",
        summary="Log In",
        tags=["Auth"],
        request=LoginSerializer,
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = user_services.find_by_email(serializer.validated_data["email"])
        if user is None:
            raise NotFound("Account not found.")
        if not user.is_active or not user.check_password(serializer.validated_data["password"]):
            logger.info(f"Failed login for @{user.handle}")
            raise AuthenticationFailed("Invalid email or password.")
        if not user.is_verified:
            return Response(
                {
                    "detail": "Please verify your email before logging in.",
                    "needsVerification": True,
                },
                status=status.HTTP_403_FORBIDDEN,
            )

        User.objects.filter(pk=user.pk).update(last_login=timezone.now())
        return Response({**issue_tokens(user), "user": UserSerializer(user).data})


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        description="Blacklist the supplied refresh token",
        summary="Log Out",
        tags=["Auth"],
        request=LogoutSerializer,
    )
    def post(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            RefreshToken(serializer.validated_data["refresh"]).blacklist()
        except TokenError as e:
            raise ValidationError({"refresh": str(e)})
        logger.info(f"User @{request.user.handle} logged out")
        return Response(status=status.HTTP_204_NO_CONTENT)


class VerifyEmailView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        description="Confirm an account with the 6-digit code sent at signup",
        summary="Verify Email",
        tags=["Auth"],
        request=VerifyEmailSerializer,
    )
    def post(self, request):
        serializer = VerifyEmailSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = user_services.verify_by_code(
            serializer.validated_data["email"], serializer.validated_data["code"]
        )
        return Response(
            {"message": "Email verified. You can now log in.", "user": UserSerializer(user).data}
        )


class ResendVerificationView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        description="Issue and e-mail a fresh verification code",
        summary="Resend Verification",
        tags=["Auth"],
        request=EmailOnlySerializer,
    )
    def post(self, request):
        serializer = EmailOnlySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = user_services.refresh_verification_code(serializer.validated_data["email"])
        send_verification_email(user)
        return Response({"message": "A new verification code has been sent."})


class ForgotPasswordView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        description="E-mail a password reset link; the response never reveals whether the account exists",
        summary="Forgot Password",
        tags=["Auth"],
        request=EmailOnlySerializer,
    )
    def post(self, request):
        serializer = EmailOnlySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = user_services.create_password_reset_token(serializer.validated_data["email"])
        if user is not None:
            send_password_reset_email(user)
        return Response({"message": FORGOT_PASSWORD_MESSAGE})


@sensitive_post_parameters_m
class ResetPasswordView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        description="Set a new password with a reset token and log the user in",
        summary="Reset Password",
        tags=["Auth"],
        request=ResetPasswordSerializer,
    )
    def post(self, request):
        serializer = ResetPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = user_services.reset_password_with_token(
            serializer.validated_data["token"], serializer.validated_data["password"]
        )
        return Response(
            {
                "message": "Password updated.",
                **issue_tokens(user),
                "user": UserSerializer(user).data,
            }
        )
