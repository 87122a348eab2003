"""Tests for /projects."""

import pytest

from pmapi.models import Project

pytestmark = pytest.mark.django_db


class TestListProjects:
    def test_requires_authentication(self, anon_client):
        response = anon_client.get("/projects")
        assert response.status_code == 401

    def test_returns_every_project(self, api_client, make_project):
        make_project("Launch")
        make_project("Billing", description="Move to the new provider")

        response = api_client.get("/projects")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Launch", "Billing"]
        assert response.json()[1]["description"] == "Move to the new provider"

    def test_empty_list(self, api_client):
        response = api_client.get("/projects")
        assert response.status_code == 200
        assert response.json() == []


class TestCreateProject:
    def test_name_only(self, api_client):
        response = api_client.post("/projects", {"name": "Launch"}, format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == Project.objects.get().id
        assert body["name"] == "Launch"
        assert body["description"] is None
        assert body["startDate"] is None
        assert body["endDate"] is None

    def test_blank_fields_are_dropped(self, api_client):
        response = api_client.post(
            "/projects",
            {"name": "Launch", "description": "", "startDate": "", "endDate": None},
            format="json",
        )

        assert response.status_code == 201
        project = Project.objects.get()
        assert project.description is None
        assert project.start_date is None

    def test_date_only_values_become_midnight(self, api_client):
        response = api_client.post(
            "/projects",
            {"name": "Launch", "startDate": "2024-03-01", "endDate": "2024-06-30T17:00:00Z"},
            format="json",
        )

        assert response.status_code == 201
        assert response.json()["startDate"] == "2024-03-01T00:00:00Z"
        assert response.json()["endDate"] == "2024-06-30T17:00:00Z"

    @pytest.mark.parametrize("payload", [{}, {"name": ""}, {"name": "   "}, {"description": "No name"}])
    def test_missing_name(self, api_client, payload):
        response = api_client.post("/projects", payload, format="json")

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required field: name is required"
        assert not Project.objects.exists()

    def test_invalid_date(self, api_client):
        response = api_client.post("/projects", {"name": "Launch", "startDate": "soon"}, format="json")

        assert response.status_code == 400
        assert "startDate" in response.json()
        assert not Project.objects.exists()

    def test_created_project_is_listed(self, api_client):
        api_client.post("/projects", {"name": "Launch"}, format="json")

        response = api_client.get("/projects")
        assert [p["name"] for p in response.json()] == ["Launch"]
