"""Client data layer for the project management API."""

from pmclient.client import ApiClient, MutationResult, QueryResult
from pmclient.config import ClientConfig, load_config
from pmclient.errors import ApiError, NotAuthenticatedError
from pmclient.forms import NewProjectForm, NewTaskForm
from pmclient.identity import IdentityAdapter
from pmclient.models import Priority, Status
from pmclient.session import SessionStore
from pmclient.tags import Tag, TagCache
from pmclient.ui_state import UIState

__all__ = [
    "ApiClient",
    "ApiError",
    "ClientConfig",
    "IdentityAdapter",
    "MutationResult",
    "NewProjectForm",
    "NewTaskForm",
    "NotAuthenticatedError",
    "Priority",
    "QueryResult",
    "SessionStore",
    "Status",
    "Tag",
    "TagCache",
    "UIState",
    "load_config",
]
