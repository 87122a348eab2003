import logging

from django.db.models import Q
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ..models import Member, Project
from ..serializers import MemberSerializer, ProjectSerializer, TaskSerializer
from .tasks import task_queryset

logger = logging.getLogger(__name__)


class SearchAPIView(APIView):
    """Case-insensitive substring search over tasks, projects and users"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = request.query_params.get('query', '').strip()
        if not query:
            return Response({'tasks': [], 'projects': [], 'users': []})

        try:
            tasks = task_queryset().filter(
                Q(title__icontains=query) |
                Q(description__icontains=query)
            )
            projects = Project.objects.filter(
                Q(name__icontains=query) |
                Q(description__icontains=query)
            )
            users = Member.objects.filter(username__icontains=query)

            return Response({
                'tasks': TaskSerializer(tasks, many=True).data,
                'projects': ProjectSerializer(projects, many=True).data,
                'users': MemberSerializer(users, many=True).data,
            })
        except Exception as e:
            logger.error(f"Error performing search for {query!r}: {e}", exc_info=True)
            return Response({'message': 'Error performing search'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
