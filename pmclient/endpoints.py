"""Declarative registry of API endpoints.

Every call the client can make is described here once: URL, verb, request
body, how the response is parsed, and which cache tags it provides (queries)
or invalidates (mutations). ``ApiClient`` only interprets these entries.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter

from pmclient.errors import ApiError, CUSTOM_ERROR
from pmclient.models import AuthUser, Project, SearchResults, Task, Team, User
from pmclient.tags import Tag

if TYPE_CHECKING:
    from pmclient.client import ApiClient

QUERY = "query"
MUTATION = "mutation"

# (result, error, arg) -> tags
TagsFn = Callable[[Any, Any, Any], list[Tag]]


@dataclass(frozen=True)
class Endpoint:
    name: str
    kind: str
    method: str = "GET"
    url: Callable[[Any], str] | None = None
    body: Callable[[Any], Any] | None = None
    params: Callable[[Any], dict[str, Any]] | None = None
    parse: Callable[[Any], Any] | None = None
    provides: TagsFn | None = None
    invalidates: TagsFn | None = None
    # custom fetch for endpoints that are not a single HTTP call
    query_fn: Callable[["ApiClient", Any], Any] | None = None

    @property
    def is_query(self) -> bool:
        return self.kind == QUERY

    def provided_tags(self, result: Any, error: Any, arg: Any) -> list[Tag]:
        return list(self.provides(result, error, arg)) if self.provides else []

    def invalidated_tags(self, result: Any, error: Any, arg: Any) -> list[Tag]:
        return list(self.invalidates(result, error, arg)) if self.invalidates else []


def query(name: str, **kwargs: Any) -> Endpoint:
    return Endpoint(name=name, kind=QUERY, **kwargs)


def mutation(name: str, method: str, **kwargs: Any) -> Endpoint:
    return Endpoint(name=name, kind=MUTATION, method=method, **kwargs)


def fixed(*tags: Tag) -> TagsFn:
    return lambda result, error, arg: list(tags)


def parser(type_: Any) -> Callable[[Any], Any]:
    adapter = TypeAdapter(type_)
    return adapter.validate_python


def _payload(value: Any) -> Any:
    # forms hand over dicts; pydantic models are dumped with wire names
    if hasattr(value, "model_dump"):
        return value.model_dump(by_alias=True, exclude_none=True, mode="json")
    return value


def _task_tags(result: list[Task] | None, error: Any, arg: Any, fallback_id: Any = None) -> list[Tag]:
    if result:
        return [Tag("Tasks", task.id) for task in result]
    return [Tag("Tasks", fallback_id)]


async def fetch_auth_user(client: "ApiClient", arg: Any) -> AuthUser:
    """Compose session identity, session tokens and the backend user record.

    Any step failing fails the whole lookup with a single ApiError.
    """
    user = await client.session.get_current_user()
    session = await client.session.fetch_auth_session()
    if session.tokens is None or not session.user_sub:
        raise ApiError(CUSTOM_ERROR, "No session found")

    details = await client.request("GET", f"/users/{session.user_sub}")
    return AuthUser(user=user, user_sub=session.user_sub, user_details=User.model_validate(details))


ENDPOINTS: dict[str, Endpoint] = {
    endpoint.name: endpoint
    for endpoint in (
        query(
            "getAuthUser",
            query_fn=fetch_auth_user,
        ),
        query(
            "getProjects",
            url=lambda arg: "/projects",
            parse=parser(list[Project]),
            provides=fixed(Tag("Projects")),
        ),
        mutation(
            "createProject",
            "POST",
            url=lambda project: "/projects",
            body=_payload,
            parse=Project.model_validate,
            invalidates=fixed(Tag("Projects")),
        ),
        query(
            "getTasks",
            url=lambda arg: "/tasks",
            params=lambda arg: {"projectId": arg["project_id"]},
            parse=parser(list[Task]),
            provides=lambda result, error, arg: _task_tags(result, error, arg),
        ),
        query(
            "getTasksByUser",
            url=lambda user_id: f"/tasks/user/{user_id}",
            parse=parser(list[Task]),
            provides=lambda result, error, user_id: _task_tags(result, error, user_id, fallback_id=user_id),
        ),
        mutation(
            "createTask",
            "POST",
            url=lambda task: "/tasks",
            body=_payload,
            parse=Task.model_validate,
            invalidates=fixed(Tag("Tasks")),
        ),
        mutation(
            "updateTaskStatus",
            "PATCH",
            url=lambda arg: f"/tasks/{arg['task_id']}/status",
            body=lambda arg: {"status": arg["status"]},
            parse=Task.model_validate,
            invalidates=lambda result, error, arg: [Tag("Tasks", arg["task_id"])],
        ),
        query(
            "getUsers",
            url=lambda arg: "/users",
            parse=parser(list[User]),
            provides=fixed(Tag("Users")),
        ),
        mutation(
            "createUser",
            "POST",
            url=lambda user: "/users",
            body=_payload,
            parse=User.model_validate,
            invalidates=fixed(Tag("Users")),
        ),
        query(
            "getTeams",
            url=lambda arg: "/teams",
            parse=parser(list[Team]),
            provides=fixed(Tag("Teams")),
        ),
        query(
            "search",
            url=lambda text: "/search",
            params=lambda text: {"query": text},
            parse=SearchResults.model_validate,
        ),
    )
}


def get_endpoint(name: str) -> Endpoint:
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise KeyError(f"Unknown endpoint: {name}") from None
