"""Resource models as the API returns them.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Status(str, Enum):
    TO_DO = "To Do"
    WORK_IN_PROGRESS = "Work In Progress"
    UNDER_REVIEW = "Under Review"
    COMPLETED = "Completed"


class Priority(str, Enum):
    URGENT = "Urgent"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    BACKLOG = "Backlog"


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class User(ApiModel):
    user_id: int | None = Field(default=None, alias="userId")
    username: str
    email: str = ""
    profile_picture_url: str | None = Field(default=None, alias="profilePictureUrl")
    cognito_id: str | None = Field(default=None, alias="cognitoId")
    team_id: int | None = Field(default=None, alias="teamId")


class Team(ApiModel):
    team_id: int = Field(alias="teamId")
    team_name: str = Field(alias="teamName")
    product_owner_user_id: int | None = Field(default=None, alias="productOwnerUserId")
    project_manager_user_id: int | None = Field(default=None, alias="projectManagerUserId")
    product_owner_username: str | None = Field(default=None, alias="productOwnerUsername")
    project_manager_username: str | None = Field(default=None, alias="projectManagerUsername")


class Project(ApiModel):
    id: int
    name: str
    description: str | None = None
    start_date: datetime | None = Field(default=None, alias="startDate")
    end_date: datetime | None = Field(default=None, alias="endDate")

    @property
    def status(self) -> str:
        return "Completed" if self.end_date else "Active"


class Comment(ApiModel):
    id: int
    text: str
    task_id: int = Field(alias="taskId")
    user_id: int = Field(alias="userId")


class Attachment(ApiModel):
    id: int
    file_url: str = Field(alias="fileURL")
    file_name: str | None = Field(default=None, alias="fileName")
    task_id: int = Field(alias="taskId")
    uploaded_by_id: int = Field(alias="uploadedById")


class Task(ApiModel):
    id: int
    title: str
    description: str | None = None
    # the server stores status updates verbatim, so unknown values must still parse
    status: Status | str | None = None
    priority: Priority | str | None = None
    tags: str | None = None
    start_date: datetime | None = Field(default=None, alias="startDate")
    due_date: datetime | None = Field(default=None, alias="dueDate")
    points: int | None = None
    project_id: int = Field(alias="projectId")
    author_user_id: int | None = Field(default=None, alias="authorUserId")
    assigned_user_id: int | None = Field(default=None, alias="assignedUserId")
    author: User | None = None
    assignee: User | None = None
    comments: list[Comment] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)

    @property
    def tag_list(self) -> list[str]:
        if not self.tags:
            return []
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]


class SearchResults(ApiModel):
    tasks: list[Task] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    users: list[User] = Field(default_factory=list)


class CurrentUser(ApiModel):
    """Identity of the signed-in user as the session reports it."""

    username: str
    user_id: str = Field(alias="userId")


class AuthUser(ApiModel):
    """Result of the composite auth-user lookup."""

    user: CurrentUser
    user_sub: str = Field(alias="userSub")
    user_details: User = Field(alias="userDetails")
