# Import all models from their respective modules for clean organization

# Teams
from .teams import Team

# Users
from .members import Member

# Projects
from .projects import Project

# Tasks
from .tasks import (
    Task, Comment, Attachment,
    STATUS_CHOICES, PRIORITY_CHOICES, STATUS_VALUES, PRIORITY_VALUES,
    STATUS_TO_DO, PRIORITY_MEDIUM,
)

__all__ = [
    'Team',
    'Member',
    'Project',
    'Task',
    'Comment',
    'Attachment',
    'STATUS_CHOICES',
    'PRIORITY_CHOICES',
    'STATUS_VALUES',
    'PRIORITY_VALUES',
    'STATUS_TO_DO',
    'PRIORITY_MEDIUM',
]
