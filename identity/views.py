import logging

from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView

from .serializers import CustomTokenObtainPairSerializer, SessionSerializer, UserRegistrationSerializer, get_subject_id

logger = logging.getLogger(__name__)


class RegisterUserView(generics.CreateAPIView):
    """Sign-up endpoint of the identity provider"""
    serializer_class = UserRegistrationSerializer
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if serializer.is_valid():
            user = serializer.save()
            logger.info(f"Registered identity for {user.username}")
            return Response(
                {
                    "message": f"User {user.username} created successfully.",
                    "username": user.username,
                    "userSub": get_subject_id(user),
                },
                status=status.HTTP_201_CREATED
            )
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class CustomTokenObtainPairView(TokenObtainPairView):
    """Sign-in: exchanges username/password for an access/refresh pair"""
    serializer_class = CustomTokenObtainPairSerializer
    permission_classes = [AllowAny]
    authentication_classes = []


class LogoutAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        refresh_token = request.data.get('refresh_token') or request.data.get('refresh')
        try:
            if refresh_token:
                RefreshToken(refresh_token).blacklist()
        except TokenError as e:
            logger.warning(f"Logout with unusable refresh token for {request.user.username}: {e}")
            return Response({'error': 'Invalid token or logout failed'}, status=status.HTTP_400_BAD_REQUEST)

        return Response({'message': 'Successfully logged out'}, status=status.HTTP_200_OK)


class SessionAPIView(APIView):
    """Identity behind the presented access token"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        serializer = SessionSerializer(request.user)
        return Response(serializer.data)
