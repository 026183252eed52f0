import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from .serializers import ProfileSerializer, RegisterSerializer

logger = logging.getLogger(__name__)


@api_view(["POST"])
@permission_classes([AllowAny])
def register_user(request):
    """
    POST: Create an account and return it with an access token.
    Missing fields, invalid or duplicate e-mails come back as 400.
    """
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()
    logger.info("Registered user %s", user.pk)
    return Response(serializer.data, status=status.HTTP_201_CREATED)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def user_profile(request):
    """GET: The account resolved from the bearer token."""
    return Response(ProfileSerializer(request.user).data)
