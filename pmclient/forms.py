"""Create-project and create-task forms.

Both forms keep their own field state until submit, block the network call
when a required field is missing, and send a sparse payload: blank optional
fields are left out so the server applies its defaults. Date inputs are
expanded to a complete ISO timestamp before sending.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from dateutil import parser as date_parser
from dateutil import tz

from pmclient.models import Priority, Status

if TYPE_CHECKING:
    from pmclient.client import ApiClient, MutationResult

logger = logging.getLogger(__name__)


def to_iso_timestamp(value: str, timezone: str = "UTC") -> str | None:
    """Expand a date input (``2024-03-01``) to a full timestamp.

    Date-only values are midnight in ``timezone``. UTC is written with a
    ``Z`` suffix. Blank input gives None.
    """
    value = (value or "").strip()
    if not value:
        return None
    parsed = date_parser.isoparse(value)
    if parsed.tzinfo is None:
        zone = tz.gettz(timezone)
        if zone is None:
            raise ValueError(f"Unknown time zone: {timezone}")
        parsed = parsed.replace(tzinfo=zone)
    stamp = parsed.replace(microsecond=0)
    if stamp.utcoffset() == timedelta(0):
        return stamp.strftime("%Y-%m-%dT%H:%M:%SZ")
    return stamp.isoformat()


def _parse_id(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        number = int(str(value).strip())
    except ValueError:
        return None
    return number if number > 0 else None


class BaseForm:
    """Submit lifecycle shared by the modal forms."""

    def __init__(self, timezone: str = "UTC"):
        self.timezone = timezone
        self.is_open = True
        self.is_submitting = False
        self.error: str | None = None
        self.reset()

    def reset(self) -> None:
        raise NotImplementedError

    def validate(self) -> dict[str, str]:
        raise NotImplementedError

    def is_valid(self) -> bool:
        return not self.validate()

    def open(self) -> None:
        self.is_open = True
        self.error = None

    def close(self) -> None:
        self.is_open = False

    def _date(self, field: str, value: str, errors: dict[str, str]) -> None:
        try:
            to_iso_timestamp(value, self.timezone)
        except ValueError:
            errors[field] = "Enter a valid date"

    def _finish(self, result: "MutationResult") -> "MutationResult":
        if result.is_error:
            self.error = result.error.message
            logger.error(f"{self.__class__.__name__} submit failed: {self.error}")
            return result
        self.reset()
        self.error = None
        self.close()
        return result


class NewProjectForm(BaseForm):
    def reset(self) -> None:
        self.name = ""
        self.description = ""
        self.start_date = ""
        self.end_date = ""

    def validate(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if not self.name.strip():
            errors["name"] = "Project name is required"
        self._date("start_date", self.start_date, errors)
        self._date("end_date", self.end_date, errors)
        return errors

    def build_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name.strip()}
        if self.description.strip():
            payload["description"] = self.description.strip()
        start = to_iso_timestamp(self.start_date, self.timezone)
        if start:
            payload["startDate"] = start
        end = to_iso_timestamp(self.end_date, self.timezone)
        if end:
            payload["endDate"] = end
        return payload

    async def submit(self, client: "ApiClient") -> "MutationResult | None":
        errors = self.validate()
        if errors:
            self.error = next(iter(errors.values()))
            return None

        self.is_submitting = True
        try:
            result = await client.create_project(self.build_payload())
        finally:
            self.is_submitting = False
        return self._finish(result)


class NewTaskForm(BaseForm):
    """Task form.

    ``project_id`` passed in by the owning project view wins over the form's
    own project field. The author defaults to the signed-in user.
    """

    def __init__(self, project_id: int | None = None, author_user_id: int | None = None, timezone: str = "UTC"):
        self.fixed_project_id = project_id
        self.author_user_id = author_user_id
        super().__init__(timezone=timezone)

    def reset(self) -> None:
        self.title = ""
        self.description = ""
        self.status: Status = Status.TO_DO
        self.priority: Priority = Priority.MEDIUM
        self.tags = ""
        self.start_date = ""
        self.due_date = ""
        self.points = ""
        self.assigned_user_id = ""
        self.project_id = ""

    @property
    def resolved_project_id(self) -> int | None:
        if self.fixed_project_id is not None:
            return _parse_id(self.fixed_project_id)
        return _parse_id(self.project_id)

    def validate(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if not self.title.strip():
            errors["title"] = "Please enter a task title"
        if self.resolved_project_id is None:
            errors["project_id"] = "Please choose a project"
        if str(self.assigned_user_id).strip() and _parse_id(self.assigned_user_id) is None:
            errors["assigned_user_id"] = "Assigned user must be a user id"
        if str(self.points).strip():
            try:
                int(str(self.points).strip())
            except ValueError:
                errors["points"] = "Points must be a whole number"
        try:
            Status(self.status)
        except ValueError:
            errors["status"] = f"Unknown status: {self.status}"
        try:
            Priority(self.priority)
        except ValueError:
            errors["priority"] = f"Unknown priority: {self.priority}"
        self._date("start_date", self.start_date, errors)
        self._date("due_date", self.due_date, errors)
        return errors

    def build_payload(self, author_user_id: int) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": self.title.strip(),
            "status": Status(self.status).value,
            "priority": Priority(self.priority).value,
            "projectId": self.resolved_project_id,
            "authorUserId": author_user_id,
        }
        if self.description.strip():
            payload["description"] = self.description.strip()
        if self.tags.strip():
            payload["tags"] = self.tags.strip()
        start = to_iso_timestamp(self.start_date, self.timezone)
        if start:
            payload["startDate"] = start
        due = to_iso_timestamp(self.due_date, self.timezone)
        if due:
            payload["dueDate"] = due
        if str(self.points).strip():
            payload["points"] = int(str(self.points).strip())
        assignee = _parse_id(self.assigned_user_id)
        if assignee is not None:
            payload["assignedUserId"] = assignee
        return payload

    async def resolve_author(self, client: "ApiClient") -> int | None:
        if self.author_user_id is not None:
            return self.author_user_id
        result = await client.get_auth_user()
        if result.is_error or result.data is None:
            return None
        return result.data.user_details.user_id

    async def submit(self, client: "ApiClient") -> "MutationResult | None":
        errors = self.validate()
        if errors:
            self.error = next(iter(errors.values()))
            return None

        author_user_id = await self.resolve_author(client)
        if author_user_id is None:
            self.error = "Could not determine the task author; please sign in again"
            return None

        self.is_submitting = True
        try:
            result = await client.create_task(self.build_payload(author_user_id))
        finally:
            self.is_submitting = False
        return self._finish(result)
