"""Tests for the page view models and their aggregation helpers."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from pmclient.models import Priority, Project, Status, Task
from pmclient.ui_state import UIState
from pmclient.views import (
    DARK_CHART_COLORS,
    LIGHT_CHART_COLORS,
    BoardView,
    HomeDashboard,
    PriorityPage,
    UsersPage,
    board_columns,
    filter_by_priority,
    format_date,
    priority_distribution,
    project_status_counts,
    task_card,
)
from tests.helpers import SUBJECT_ID, json_response, project_json, task_json, user_json


def _tasks(*pairs):
    return [Task.model_validate(task_json(i, status=status, priority=priority)) for i, (status, priority) in enumerate(pairs, 1)]


class TestAggregates:
    def test_priority_distribution(self):
        tasks = _tasks(("To Do", "High"), ("To Do", "Low"), ("Completed", "High"))

        assert priority_distribution(tasks) == [{"name": "High", "count": 2}, {"name": "Low", "count": 1}]

    def test_project_status_counts(self):
        projects = [
            Project.model_validate(project_json(1)),
            Project.model_validate(project_json(2, end_date="2024-06-30T00:00:00Z")),
            Project.model_validate(project_json(3)),
        ]

        assert project_status_counts(projects) == [{"name": "Active", "count": 2}, {"name": "Completed", "count": 1}]

    def test_filter_by_priority(self):
        tasks = _tasks(("To Do", "Urgent"), ("To Do", "Low"))

        assert [t.id for t in filter_by_priority(tasks, Priority.URGENT)] == [1]
        assert [t.id for t in filter_by_priority(tasks, "Low")] == [2]

    def test_board_columns_skip_unknown_status(self):
        tasks = _tasks(("Work In Progress", "Low"), ("Bogus", "Low"), ("To Do", "Low"))

        columns = board_columns(tasks)

        assert list(columns) == [status.value for status in Status]
        assert [t.id for t in columns["Work In Progress"]] == [1]
        assert [t.id for t in columns["To Do"]] == [3]
        assert columns["Completed"] == []
        assert sum(len(c) for c in columns.values()) == 2

    def test_format_date(self):
        assert format_date(datetime(2024, 3, 1, tzinfo=timezone.utc)) == "Mar 01, 2024"
        assert format_date(None) == "Not set"

    def test_task_card(self):
        task = Task.model_validate(task_json(1, tags="docs, backend ,", description=None))

        card = task_card(task)

        assert card["tags"] == ["docs", "backend"]
        assert card["description"] == "No description provided"
        assert card["assignee"] == "Unassigned"
        assert card["author"] == "alice"
        assert card["dueDate"] == "Not set"


class TestHomeDashboard:
    @pytest.mark.asyncio
    async def test_load(self, pm_client, recorder):
        recorder.routes[("GET", "/tasks")] = json_response(200, [task_json(1, priority="High"), task_json(2, priority="High")])
        recorder.routes[("GET", "/projects")] = json_response(200, [project_json(1)])
        view = HomeDashboard(pm_client, UIState())

        await view.load()

        assert view.error is None
        assert not view.stale
        assert not view.is_empty
        assert view.task_distribution == [{"name": "High", "count": 2}]
        assert view.project_status == [{"name": "Active", "count": 1}]
        assert view.task_rows[0] == {"title": "Task 1", "status": "To Do", "priority": "High", "dueDate": None}
        assert recorder.calls("GET", "/tasks")[0].url.params["projectId"] == "1"

    def test_chart_colors_follow_dark_mode(self, pm_client):
        ui_state = UIState()
        view = HomeDashboard(pm_client, ui_state)

        assert view.chart_colors == LIGHT_CHART_COLORS
        ui_state.toggle_dark_mode()
        assert view.chart_colors == DARK_CHART_COLORS

    @pytest.mark.asyncio
    async def test_error(self, pm_client, recorder):
        recorder.routes[("GET", "/tasks")] = json_response(500, {"message": "Error retrieving tasks"})
        recorder.routes[("GET", "/projects")] = json_response(200, [])
        view = HomeDashboard(pm_client, UIState())

        await view.load()

        assert view.error == "Error retrieving tasks"
        assert view.stale
        assert not view.loading

    @pytest.mark.asyncio
    async def test_goes_stale_after_task_created(self, pm_client, recorder):
        recorder.routes[("GET", "/tasks")] = json_response(200, [task_json(1)])
        recorder.routes[("GET", "/projects")] = json_response(200, [])
        recorder.routes[("POST", "/tasks")] = json_response(201, task_json(2))
        view = HomeDashboard(pm_client, UIState())
        await view.load()

        await pm_client.create_task({"title": "New", "projectId": 1, "authorUserId": 1})
        recorder.routes[("GET", "/tasks")] = json_response(200, [task_json(1), task_json(2)])

        assert view.stale
        assert await view.refresh_if_stale()
        assert len(view.tasks) == 2
        assert not await view.refresh_if_stale()
        assert len(recorder.calls("GET", "/projects")) == 1


    @pytest.mark.asyncio
    async def test_still_notified_after_cache_reset(self, pm_client, recorder):
        recorder.routes[("GET", "/tasks")] = json_response(200, [task_json(1)])
        recorder.routes[("GET", "/projects")] = json_response(200, [])
        recorder.routes[("POST", "/tasks")] = json_response(201, task_json(2))
        view = HomeDashboard(pm_client, UIState())
        await view.load()

        pm_client.cache.reset()

        assert view.stale
        await view.load()
        assert not view.stale

        await pm_client.create_task({"title": "New", "projectId": 1, "authorUserId": 1})

        assert view.stale is True


class TestBoardView:
    @pytest.mark.asyncio
    async def test_move_task_marks_board_stale(self, pm_client, recorder):
        recorder.routes[("GET", "/tasks")] = json_response(200, [task_json(1), task_json(2, status="Completed")])
        recorder.routes[("PATCH", "/tasks/1/status")] = json_response(200, task_json(1, status="Under Review"))
        board = BoardView(pm_client, UIState(), project_id=1)
        await board.load()

        assert [card["id"] for card in board.columns["Completed"]] == [2]

        assert await board.move_task(1, Status.UNDER_REVIEW)
        assert board.stale

    @pytest.mark.asyncio
    async def test_move_task_failure(self, pm_client, recorder):
        recorder.routes[("GET", "/tasks")] = json_response(200, [task_json(1)])
        recorder.routes[("PATCH", "/tasks/1/status")] = json_response(500, {"message": "Error updating task"})
        board = BoardView(pm_client, UIState(), project_id=1)
        await board.load()

        assert not await board.move_task(1, "Completed")
        assert board.error == "Error updating task"
        assert not board.stale


class TestPriorityPage:
    @pytest.mark.asyncio
    async def test_signed_in_users_tasks_of_one_priority(self, pm_client, recorder):
        recorder.routes[("GET", f"/users/{SUBJECT_ID}")] = json_response(200, user_json(7))
        recorder.routes[("GET", "/tasks/user/7")] = json_response(
            200, [task_json(1, priority="Urgent"), task_json(2, priority="Low"), task_json(3, priority="Urgent")]
        )
        page = PriorityPage(pm_client, Priority.URGENT)

        await page.load()

        assert page.title == "Urgent Priority Tasks"
        assert page.user_id == 7
        assert [t.id for t in page.tasks] == [1, 3]

    @pytest.mark.asyncio
    async def test_empty(self, pm_client, recorder):
        recorder.routes[("GET", f"/users/{SUBJECT_ID}")] = json_response(200, user_json(7))
        recorder.routes[("GET", "/tasks/user/7")] = json_response(200, [task_json(1, priority="Low")])
        page = PriorityPage(pm_client, "Backlog")

        await page.load()

        assert page.is_empty
        assert page.empty_message == "No backlog priority tasks found."

    @pytest.mark.asyncio
    async def test_no_user_record(self, pm_client, recorder):
        recorder.routes[("GET", f"/users/{SUBJECT_ID}")] = json_response(404, {"message": "User not found"})
        page = PriorityPage(pm_client, Priority.HIGH)

        await page.load()

        assert page.error == "User not found"
        assert recorder.calls("GET", "/tasks/user/7") == []


class TestUsersPage:
    @pytest.mark.asyncio
    async def test_rows(self, pm_client, recorder):
        recorder.routes[("GET", "/users")] = json_response(200, [user_json(1), user_json(2, "bob", cognito_id=None, teamId=3)])
        page = UsersPage(pm_client)

        await page.load()

        assert page.rows[1] == {
            "userId": 2,
            "username": "bob",
            "profilePictureUrl": None,
            "email": "bob@example.com",
            "teamId": 3,
        }

    @pytest.mark.asyncio
    async def test_close_unsubscribes(self, pm_client, recorder):
        recorder.routes[("GET", "/users")] = json_response(200, [])
        recorder.routes[("POST", "/users")] = json_response(201, user_json(2, "bob"))
        page = UsersPage(pm_client)
        await page.load()
        page.close()

        await pm_client.create_user({"username": "bob", "cognitoId": "sub-2"})

        assert not page.stale
