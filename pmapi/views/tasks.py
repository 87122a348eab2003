import logging

from django.db.models import Q
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ..models import Task, STATUS_VALUES
from ..serializers import TaskSerializer, TaskCreateSerializer
from .utils import parse_int, sparse_payload

logger = logging.getLogger(__name__)

REQUIRED_TASK_FIELDS = ('title', 'projectId', 'authorUserId')
TASK_FIELDS = REQUIRED_TASK_FIELDS + (
    'description', 'status', 'priority', 'tags', 'startDate', 'dueDate',
    'points', 'assignedUserId',
)


def task_queryset():
    return Task.objects.select_related('author', 'assignee').prefetch_related('comments', 'attachments')


class TaskAPIView(APIView):
    """Tasks of a project, and task creation"""
    permission_classes = [IsAuthenticated]
    serializer_class = TaskSerializer

    def get(self, request):
        project_id = parse_int(request.query_params.get('projectId'))
        if project_id is None:
            return Response({'message': 'projectId query parameter is required'}, status=status.HTTP_400_BAD_REQUEST)

        try:
            tasks = task_queryset().filter(project_id=project_id)
            serializer = self.serializer_class(tasks, many=True)
            return Response(serializer.data)
        except Exception as e:
            logger.error(f"Error retrieving tasks for project {project_id}: {e}", exc_info=True)
            return Response({'message': 'Error retrieving tasks'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    def post(self, request):
        data = sparse_payload(request.data, TASK_FIELDS)
        if any(field not in data for field in REQUIRED_TASK_FIELDS):
            return Response({
                'message': 'Missing required fields: title, projectId, and authorUserId are required'
            }, status=status.HTTP_400_BAD_REQUEST)

        serializer = TaskCreateSerializer(data=data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        logger.info(f"Creating task with data: {data}")
        try:
            task = serializer.save()
        except Exception as e:
            logger.error(f"Error creating a task: {e}", exc_info=True)
            return Response({'message': 'Error creating a task'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        task = task_queryset().get(pk=task.pk)
        return Response(self.serializer_class(task).data, status=status.HTTP_201_CREATED)


class UserTasksAPIView(APIView):
    """Tasks a user wrote or is assigned to"""
    permission_classes = [IsAuthenticated]
    serializer_class = TaskSerializer

    def get(self, request, user_id):
        try:
            tasks = task_queryset().filter(Q(author_id=user_id) | Q(assignee_id=user_id)).distinct()
            serializer = self.serializer_class(tasks, many=True)
            return Response(serializer.data)
        except Exception as e:
            logger.error(f"Error retrieving tasks for user {user_id}: {e}", exc_info=True)
            return Response({'message': "Error retrieving user's tasks"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class TaskStatusAPIView(APIView):
    """Overwrite the status of one task.

    The value is stored as given. Statuses outside the board's columns are
    logged but not rejected.
    """
    permission_classes = [IsAuthenticated]
    serializer_class = TaskSerializer

    def patch(self, request, task_id):
        new_status = request.data.get('status')
        if new_status not in STATUS_VALUES:
            logger.warning(f"Task {task_id} status set to unrecognised value {new_status!r}")

        try:
            task = Task.objects.get(id=task_id)
            task.status = new_status
            task.save(update_fields=['status'])
            task = task_queryset().get(pk=task.pk)
            return Response(self.serializer_class(task).data)
        except Exception as e:
            logger.error(f"Error updating task {task_id}: {e}", exc_info=True)
            return Response({'message': 'Error updating task'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
