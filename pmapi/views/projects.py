import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ..models import Project
from ..serializers import ProjectSerializer
from .utils import sparse_payload

logger = logging.getLogger(__name__)

PROJECT_FIELDS = ('name', 'description', 'startDate', 'endDate')


class ProjectAPIView(APIView):
    """List and create projects"""
    permission_classes = [IsAuthenticated]
    serializer_class = ProjectSerializer

    def get(self, request):
        try:
            projects = Project.objects.all()
            serializer = self.serializer_class(projects, many=True)
            return Response(serializer.data)
        except Exception as e:
            logger.error(f"Error retrieving projects: {e}", exc_info=True)
            return Response({'message': 'Error retrieving projects'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    def post(self, request):
        data = sparse_payload(request.data, PROJECT_FIELDS)
        if not str(data.get('name', '')).strip():
            return Response({'message': 'Missing required field: name is required'}, status=status.HTTP_400_BAD_REQUEST)

        serializer = self.serializer_class(data=data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            project = serializer.save()
        except Exception as e:
            logger.error(f"Error creating a project: {e}", exc_info=True)
            return Response({'message': 'Error creating a project'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(f"Created project {project.id} ({project.name})")
        return Response(self.serializer_class(project).data, status=status.HTTP_201_CREATED)
