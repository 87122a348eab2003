"""Builders for fake tokens and HTTP responses used by the client tests."""

from __future__ import annotations

import json

import httpx
import jwt

SUBJECT_ID = "7c1a3c52-6f0e-4b7a-9d59-3f4f0f1b2a10"


def make_access_token(sub: str | None = SUBJECT_ID, username: str = "alice") -> str:
    """JWT carrying the claims the client reads; the signature is never checked client-side."""
    claims = {"username": username, "token_type": "access"}
    if sub is not None:
        claims["sub"] = sub
    return jwt.encode(claims, "test-secret-key-of-sufficient-length", algorithm="HS256")


def json_response(status_code: int = 200, data=None) -> httpx.Response:
    return httpx.Response(
        status_code=status_code,
        headers={"content-type": "application/json"},
        content=json.dumps(data).encode(),
    )


class Recorder:
    """MockTransport handler that answers from a route table and keeps every request."""

    def __init__(self, routes=None):
        # (method, path) -> response, or callable(request) -> response
        self.routes = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return json_response(404, {"message": "Not Found"})
        if callable(route):
            return route(request)
        return route

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


def user_json(user_id=1, username="alice", cognito_id=SUBJECT_ID, **extra):
    data = {
        "userId": user_id,
        "username": username,
        "email": f"{username}@example.com",
        "profilePictureUrl": None,
        "cognitoId": cognito_id,
        "teamId": None,
    }
    data.update(extra)
    return data


def project_json(project_id=1, name="Launch", end_date=None, **extra):
    data = {"id": project_id, "name": name, "description": None, "startDate": None, "endDate": end_date}
    data.update(extra)
    return data


def task_json(task_id=1, project_id=1, status="To Do", priority="Medium", **extra):
    data = {
        "id": task_id,
        "title": f"Task {task_id}",
        "description": None,
        "status": status,
        "priority": priority,
        "tags": None,
        "startDate": None,
        "dueDate": None,
        "points": None,
        "projectId": project_id,
        "authorUserId": 1,
        "assignedUserId": None,
        "author": user_json(),
        "assignee": None,
        "comments": [],
        "attachments": [],
    }
    data.update(extra)
    return data
