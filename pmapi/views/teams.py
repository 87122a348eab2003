import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ..models import Team
from ..serializers import TeamSerializer

logger = logging.getLogger(__name__)


class TeamAPIView(APIView):
    """Teams with the usernames of their product owner and project manager"""
    permission_classes = [IsAuthenticated]
    serializer_class = TeamSerializer

    def get(self, request):
        try:
            teams = Team.objects.select_related('product_owner', 'project_manager').order_by('id')
            serializer = self.serializer_class(teams, many=True)
            return Response(serializer.data)
        except Exception as e:
            logger.error(f"Error retrieving teams: {e}", exc_info=True)
            return Response({'message': 'Error retrieving teams'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
