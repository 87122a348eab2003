"""Read-only view models for the dashboard, board, priority and users pages.

Each view loads through the ApiClient, keeps loading/error/empty state, and
subscribes to the cache entries it shows so a mutation anywhere marks it for
refetch.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Hashable, Iterable
from datetime import datetime
from typing import Any

from pmclient.client import ApiClient, QueryResult, cache_key
from pmclient.models import Priority, Project, Status, Task, User
from pmclient.ui_state import UIState

logger = logging.getLogger(__name__)

LIGHT_CHART_COLORS = {"bar": "#3B82F6", "barGrid": "#E5E7EB", "text": "#111827"}
DARK_CHART_COLORS = {"bar": "#3B82F6", "barGrid": "#374151", "text": "#F9FAFB"}
PIE_COLORS = ["#3B82F6", "#10B981", "#F59E0B", "#EF4444", "#8B5CF6"]

NOT_SET = "Not set"


def _value(item: Any) -> Any:
    return item.value if isinstance(item, (Status, Priority)) else item


def priority_distribution(tasks: Iterable[Task]) -> list[dict[str, Any]]:
    """Task counts per priority, in order of first appearance."""
    counts = Counter(_value(task.priority) for task in tasks if task.priority)
    return [{"name": name, "count": count} for name, count in counts.items()]


def project_status_counts(projects: Iterable[Project]) -> list[dict[str, Any]]:
    """Completed (has an end date) vs Active project counts."""
    counts = Counter(project.status for project in projects)
    return [{"name": name, "count": count} for name, count in counts.items()]


def filter_by_priority(tasks: Iterable[Task], priority: Priority | str) -> list[Task]:
    wanted = _value(priority)
    return [task for task in tasks if _value(task.priority) == wanted]


def board_columns(tasks: Iterable[Task]) -> dict[str, list[Task]]:
    """Tasks grouped into one column per status, in board order.

    Tasks whose status is not one of the board's columns are left out.
    """
    columns: dict[str, list[Task]] = {status.value: [] for status in Status}
    for task in tasks:
        status = _value(task.status)
        if status in columns:
            columns[status].append(task)
    return columns


def format_date(value: datetime | None) -> str:
    return value.strftime("%b %d, %Y") if value else NOT_SET


def task_card(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description or "No description provided",
        "status": _value(task.status),
        "priority": _value(task.priority),
        "tags": task.tag_list,
        "startDate": format_date(task.start_date),
        "dueDate": format_date(task.due_date),
        "points": task.points,
        "author": task.author.username if task.author else "Unknown",
        "assignee": task.assignee.username if task.assignee else "Unassigned",
        "commentCount": len(task.comments),
        "attachments": [attachment.file_name or attachment.file_url for attachment in task.attachments],
    }


def users_table_rows(users: Iterable[User]) -> list[dict[str, Any]]:
    return [
        {
            "userId": user.user_id,
            "username": user.username,
            "profilePictureUrl": user.profile_picture_url,
            "email": user.email,
            "teamId": user.team_id,
        }
        for user in users
    ]


class ViewModel:
    """Loading/error/empty state plus stale tracking through cache subscriptions."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.loading = False
        self.error: str | None = None
        self.stale = True
        self._unsubscribers: list[Callable[[], None]] = []
        self._watched: set[Hashable] = set()

    @property
    def is_empty(self) -> bool:
        raise NotImplementedError

    def _watch(self, name: str, arg: Any = None) -> None:
        key = cache_key(name, arg)
        if key in self._watched:
            return
        self._watched.add(key)
        self._unsubscribers.append(self.client.subscribe(name, arg, self._on_invalidated))

    def _on_invalidated(self, key: Hashable) -> None:
        logger.debug(f"{self.__class__.__name__} marked stale by {key}")
        self.stale = True

    def _check(self, result: QueryResult) -> bool:
        if result.is_error:
            self.error = result.error.message
            return False
        return True

    async def load(self) -> None:
        self.loading = True
        self.error = None
        # cleared up front so an invalidation arriving mid-load sticks
        self.stale = False
        try:
            await self._load()
            if self.error is not None:
                self.stale = True
        finally:
            self.loading = False

    async def refresh_if_stale(self) -> bool:
        if not self.stale:
            return False
        await self.load()
        return True

    async def _load(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self._watched.clear()


class HomeDashboard(ViewModel):
    """Project dashboard: task priority chart, project status pie, task table."""

    def __init__(self, client: ApiClient, ui_state: UIState, project_id: int = 1):
        super().__init__(client)
        self.ui_state = ui_state
        self.project_id = project_id
        self.tasks: list[Task] = []
        self.projects: list[Project] = []

    @property
    def is_empty(self) -> bool:
        return not self.tasks and not self.projects

    async def _load(self) -> None:
        self._watch("getTasks", {"project_id": self.project_id})
        self._watch("getProjects")
        tasks = await self.client.get_tasks(self.project_id)
        projects = await self.client.get_projects()
        if self._check(tasks) and self._check(projects):
            self.tasks = tasks.data
            self.projects = projects.data

    @property
    def task_distribution(self) -> list[dict[str, Any]]:
        return priority_distribution(self.tasks)

    @property
    def project_status(self) -> list[dict[str, Any]]:
        return project_status_counts(self.projects)

    @property
    def task_rows(self) -> list[dict[str, Any]]:
        return [
            {
                "title": task.title,
                "status": _value(task.status),
                "priority": _value(task.priority),
                "dueDate": task.due_date.isoformat() if task.due_date else None,
            }
            for task in self.tasks
        ]

    @property
    def chart_colors(self) -> dict[str, str]:
        return DARK_CHART_COLORS if self.ui_state.is_dark_mode else LIGHT_CHART_COLORS


class BoardView(HomeDashboard):
    """Kanban board of one project's tasks."""

    def __init__(self, client: ApiClient, ui_state: UIState, project_id: int):
        super().__init__(client, ui_state, project_id)

    @property
    def is_empty(self) -> bool:
        return not self.tasks

    async def _load(self) -> None:
        self._watch("getTasks", {"project_id": self.project_id})
        tasks = await self.client.get_tasks(self.project_id)
        if self._check(tasks):
            self.tasks = tasks.data

    @property
    def columns(self) -> dict[str, list[dict[str, Any]]]:
        return {status: [task_card(task) for task in tasks] for status, tasks in board_columns(self.tasks).items()}

    async def move_task(self, task_id: int, status: Status | str) -> bool:
        result = await self.client.update_task_status(task_id, status)
        if result.is_error:
            self.error = result.error.message
            return False
        return True


class PriorityPage(ViewModel):
    """The signed-in user's tasks of one priority."""

    def __init__(self, client: ApiClient, priority: Priority):
        super().__init__(client)
        self.priority = Priority(priority)
        self.user_id: int | None = None
        self.tasks: list[Task] = []

    @property
    def title(self) -> str:
        return f"{self.priority.value} Priority Tasks"

    @property
    def empty_message(self) -> str:
        return f"No {self.priority.value.lower()} priority tasks found."

    @property
    def is_empty(self) -> bool:
        return not self.tasks

    async def _load(self) -> None:
        auth = await self.client.get_auth_user()
        if not self._check(auth):
            return
        self.user_id = auth.data.user_details.user_id
        if self.user_id is None:
            self.error = "Signed-in user has no user record"
            return
        self._watch("getTasksByUser", self.user_id)
        tasks = await self.client.get_tasks_by_user(self.user_id)
        if self._check(tasks):
            self.tasks = filter_by_priority(tasks.data, self.priority)


class UsersPage(ViewModel):
    def __init__(self, client: ApiClient):
        super().__init__(client)
        self.users: list[User] = []

    @property
    def is_empty(self) -> bool:
        return not self.users

    async def _load(self) -> None:
        self._watch("getUsers")
        users = await self.client.get_users()
        if self._check(users):
            self.users = users.data

    @property
    def rows(self) -> list[dict[str, Any]]:
        return users_table_rows(self.users)
