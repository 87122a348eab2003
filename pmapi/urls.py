from django.urls import path

from .views import (
    ProjectAPIView, TaskAPIView, UserTasksAPIView, TaskStatusAPIView,
    UserAPIView, UserDetailAPIView, TeamAPIView, SearchAPIView, HealthCheckView,
)

urlpatterns = [
    # Projects
    path('projects', ProjectAPIView.as_view(), name='projects'),

    # Tasks
    path('tasks', TaskAPIView.as_view(), name='tasks'),
    path('tasks/user/<int:user_id>', UserTasksAPIView.as_view(), name='user-tasks'),
    path('tasks/<int:task_id>/status', TaskStatusAPIView.as_view(), name='task-status'),

    # Users
    path('users', UserAPIView.as_view(), name='users'),
    path('users/<str:cognito_id>', UserDetailAPIView.as_view(), name='user-detail'),

    # Teams
    path('teams', TeamAPIView.as_view(), name='teams'),

    # Search
    path('search', SearchAPIView.as_view(), name='search'),

    # Container health probe
    path('health', HealthCheckView.as_view(), name='health'),
]
