# users/views.py
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema
import logging

from .serializers import ContactMatchSerializer, UserSerializer
from .services import match_by_email_hashes

logger = logging.getLogger(__name__)


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        description="Return the authenticated user's profile",
        summary="Current User",
        tags=["Users"],
        responses={200: UserSerializer},
    )
    def get(self, request):
        return Response({"user": UserSerializer(request.user).data})


class ContactMatchView(APIView):
    """Find registered users from a list of address book e-mails or their hashes."""

    permission_classes = [AllowAny]

    @extend_schema(
        description="Match contacts by e-mail or sha256 e-mail hash",
        summary="Match Contacts",
        tags=["Users"],
        request=ContactMatchSerializer,
    )
    def post(self, request):
        serializer = ContactMatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        users = match_by_email_hashes(
            emails=serializer.validated_data.get("emails", []),
            hashes=serializer.validated_data.get("hashes", []),
        )
        logger.debug("Contact match returned %d users", len(users))
        return Response(
            {"users": UserSerializer(users, many=True).data}, status=status.HTTP_200_OK
        )
