"""Shared fixtures.

Backend tests get an API client holding a JWT for a signed-in Django user
plus factories for the application records. Client tests talk to an
``httpx.MockTransport`` so nothing leaves the process.
"""

from __future__ import annotations

import httpx
import pytest

from pmclient.client import ApiClient
from pmclient.config import ClientConfig
from pmclient.session import SessionStore
from tests.helpers import Recorder, make_access_token


# ---------------------------------------------------------------------------
# Backend
# ---------------------------------------------------------------------------


@pytest.fixture()
def auth_user(db, django_user_model):
    return django_user_model.objects.create_user(username="alice", email="alice@example.com", password="S3cure-pass!")


@pytest.fixture()
def api_client(auth_user):
    from rest_framework.test import APIClient
    from rest_framework_simplejwt.tokens import RefreshToken

    client = APIClient()
    token = RefreshToken.for_user(auth_user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.access_token}")
    return client


@pytest.fixture()
def anon_client(db):
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture()
def make_member(db):
    from pmapi.models import Member

    def factory(username="alice", **kwargs):
        kwargs.setdefault("email", f"{username}@example.com")
        return Member.objects.create(username=username, **kwargs)

    return factory


@pytest.fixture()
def make_project(db):
    from pmapi.models import Project

    def factory(name="Launch", **kwargs):
        return Project.objects.create(name=name, **kwargs)

    return factory


@pytest.fixture()
def make_task(db):
    from pmapi.models import Task

    def factory(project, author, title="Write docs", **kwargs):
        return Task.objects.create(project=project, author=author, title=title, **kwargs)

    return factory


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


@pytest.fixture()
def recorder():
    return Recorder()


@pytest.fixture()
def session():
    store = SessionStore()
    store.set_tokens(make_access_token(), "refresh-token")
    return store


@pytest.fixture()
def pm_client(recorder, session):
    return ApiClient(
        config=ClientConfig(base_url="http://api.test"),
        session=session,
        transport=httpx.MockTransport(recorder),
    )
