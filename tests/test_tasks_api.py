"""Tests for /tasks, /tasks/user/<id> and /tasks/<id>/status."""

import pytest

from pmapi.models import Comment, Task

pytestmark = pytest.mark.django_db


@pytest.fixture()
def project(make_project):
    return make_project("Launch")


@pytest.fixture()
def author(make_member):
    return make_member("alice")


class TestListTasks:
    def test_filters_by_project(self, api_client, project, author, make_project, make_task):
        other = make_project("Other")
        make_task(project, author, title="Mine")
        make_task(other, author, title="Not mine")

        response = api_client.get("/tasks", {"projectId": project.id})

        assert response.status_code == 200
        assert [t["title"] for t in response.json()] == ["Mine"]

    def test_embeds_people_and_comments(self, api_client, project, author, make_member, make_task):
        bob = make_member("bob")
        task = make_task(project, author, assignee=bob)
        Comment.objects.create(task=task, user=bob, text="On it")

        body = api_client.get("/tasks", {"projectId": project.id}).json()[0]

        assert body["author"]["username"] == "alice"
        assert body["assignee"]["username"] == "bob"
        assert body["assignedUserId"] == bob.user_id
        assert body["comments"][0]["text"] == "On it"
        assert body["attachments"] == []

    @pytest.mark.parametrize("params", [{}, {"projectId": ""}, {"projectId": "abc"}])
    def test_project_id_is_required(self, api_client, params):
        response = api_client.get("/tasks", params)
        assert response.status_code == 400

    def test_requires_authentication(self, anon_client, project):
        response = anon_client.get("/tasks", {"projectId": project.id})
        assert response.status_code == 401


class TestCreateTask:
    def test_defaults(self, api_client, project, author):
        response = api_client.post(
            "/tasks",
            {"title": "Write docs", "projectId": project.id, "authorUserId": author.user_id},
            format="json",
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "To Do"
        assert body["priority"] == "Medium"
        assert body["projectId"] == project.id
        assert body["author"]["username"] == "alice"
        assert body["assignee"] is None
        assert Task.objects.count() == 1

    def test_all_fields(self, api_client, project, author, make_member):
        bob = make_member("bob")
        response = api_client.post(
            "/tasks",
            {
                "title": "Write docs",
                "description": "User guide",
                "status": "Under Review",
                "priority": "Urgent",
                "tags": "docs,backend",
                "startDate": "2024-03-01",
                "dueDate": "2024-03-05T12:30:00Z",
                "points": 5,
                "projectId": str(project.id),
                "authorUserId": str(author.user_id),
                "assignedUserId": bob.user_id,
            },
            format="json",
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "Under Review"
        assert body["priority"] == "Urgent"
        assert body["tags"] == "docs,backend"
        assert body["points"] == 5
        assert body["startDate"] == "2024-03-01T00:00:00Z"
        assert body["dueDate"] == "2024-03-05T12:30:00Z"
        assert body["assignedUserId"] == bob.user_id

    @pytest.mark.parametrize("missing", ["title", "projectId", "authorUserId"])
    def test_missing_required_field(self, api_client, project, author, missing):
        payload = {"title": "Write docs", "projectId": project.id, "authorUserId": author.user_id}
        payload[missing] = ""

        response = api_client.post("/tasks", payload, format="json")

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Missing required fields: title, projectId, and authorUserId are required"
        )
        assert not Task.objects.exists()

    def test_unknown_status_is_rejected(self, api_client, project, author):
        response = api_client.post(
            "/tasks",
            {"title": "Write docs", "projectId": project.id, "authorUserId": author.user_id, "status": "Bogus"},
            format="json",
        )

        assert response.status_code == 400
        assert "status" in response.json()
        assert not Task.objects.exists()

    def test_unknown_project_is_rejected(self, api_client, author):
        response = api_client.post(
            "/tasks",
            {"title": "Write docs", "projectId": 999, "authorUserId": author.user_id},
            format="json",
        )

        assert response.status_code == 400
        assert "projectId" in response.json()
        assert not Task.objects.exists()


class TestUserTasks:
    def test_authored_or_assigned_without_duplicates(self, api_client, project, author, make_member, make_task):
        bob = make_member("bob")
        both = make_task(project, author, title="Both", assignee=author)
        authored = make_task(project, author, title="Authored", assignee=bob)
        assigned = make_task(project, bob, title="Assigned", assignee=author)
        make_task(project, bob, title="Unrelated")

        response = api_client.get(f"/tasks/user/{author.user_id}")

        assert response.status_code == 200
        ids = [t["id"] for t in response.json()]
        assert sorted(ids) == sorted([both.id, authored.id, assigned.id])
        assert len(ids) == len(set(ids))

    def test_unknown_user_gets_empty_list(self, api_client):
        response = api_client.get("/tasks/user/999")
        assert response.status_code == 200
        assert response.json() == []


class TestUpdateTaskStatus:
    def test_moves_task(self, api_client, project, author, make_task):
        task = make_task(project, author)

        response = api_client.patch(f"/tasks/{task.id}/status", {"status": "Completed"}, format="json")

        assert response.status_code == 200
        assert response.json()["status"] == "Completed"
        task.refresh_from_db()
        assert task.status == "Completed"

    def test_unrecognised_status_is_stored_as_given(self, api_client, project, author, make_task):
        task = make_task(project, author)

        response = api_client.patch(f"/tasks/{task.id}/status", {"status": "Bogus"}, format="json")

        assert response.status_code == 200
        assert response.json()["status"] == "Bogus"
        task.refresh_from_db()
        assert task.status == "Bogus"

    def test_unknown_task(self, api_client):
        response = api_client.patch("/tasks/999/status", {"status": "Completed"}, format="json")

        assert response.status_code == 500
        assert response.json()["message"] == "Error updating task"
