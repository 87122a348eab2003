import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ..models import Member
from ..serializers import MemberSerializer
from .utils import sparse_payload

logger = logging.getLogger(__name__)

MEMBER_FIELDS = ('username', 'email', 'profilePictureUrl', 'cognitoId', 'teamId')


class UserAPIView(APIView):
    """User directory: list users, and record users forwarded after sign-up"""
    permission_classes = [IsAuthenticated]
    serializer_class = MemberSerializer

    def get(self, request):
        try:
            users = Member.objects.all()
            serializer = self.serializer_class(users, many=True)
            return Response(serializer.data)
        except Exception as e:
            logger.error(f"Error retrieving users: {e}", exc_info=True)
            return Response({'message': 'Error retrieving users'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    def post(self, request):
        data = sparse_payload(request.data, MEMBER_FIELDS)
        if 'username' not in data or 'cognitoId' not in data:
            return Response({
                'message': 'Missing required fields: username and cognitoId are required'
            }, status=status.HTTP_400_BAD_REQUEST)

        serializer = self.serializer_class(data=data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            member = serializer.save()
        except Exception as e:
            logger.error(f"Error creating user {data['username']}: {e}", exc_info=True)
            return Response({'message': 'Error creating user'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(f"Created user {member.user_id} for subject {member.cognito_id}")
        return Response(self.serializer_class(member).data, status=status.HTTP_201_CREATED)


class UserDetailAPIView(APIView):
    """Look a user up by identity-provider subject id"""
    permission_classes = [IsAuthenticated]
    serializer_class = MemberSerializer

    def get(self, request, cognito_id):
        try:
            member = Member.objects.filter(cognito_id=cognito_id).first()
        except Exception as e:
            logger.error(f"Error retrieving user {cognito_id}: {e}", exc_info=True)
            return Response({'message': 'Error retrieving user'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        if member is None:
            return Response({'message': 'User not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(self.serializer_class(member).data)
