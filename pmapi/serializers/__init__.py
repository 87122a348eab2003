# Import all serializers from the main serializers file
from .main import (
    MemberSerializer,
    ProjectSerializer,
    CommentSerializer,
    AttachmentSerializer,
    TaskSerializer,
    TaskCreateSerializer,
    TeamSerializer,
)
from .fields import FlexibleDateTimeField

__all__ = [
    'MemberSerializer',
    'ProjectSerializer',
    'CommentSerializer',
    'AttachmentSerializer',
    'TaskSerializer',
    'TaskCreateSerializer',
    'TeamSerializer',
    'FlexibleDateTimeField',
]
