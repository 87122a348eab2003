"""HTTP client for the project management API."""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import httpx

from pmclient.config import ClientConfig, load_config
from pmclient.endpoints import Endpoint, get_endpoint
from pmclient.errors import ApiError, CUSTOM_ERROR
from pmclient.models import AuthUser, Project, SearchResults, Status, Task, Team, User
from pmclient.session import SessionStore
from pmclient.tags import Tag, TagCache

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class QueryResult(Generic[T]):
    """Outcome of a query: either ``data`` or ``error`` is set."""

    data: T | None = None
    error: ApiError | None = None
    from_cache: bool = False

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.data


@dataclass
class MutationResult(Generic[T]):
    """Outcome of a mutation, with the tags it invalidated on success."""

    data: T | None = None
    error: ApiError | None = None
    invalidated_tags: list[Tag] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.data


def cache_key(name: str, arg: Any) -> Hashable:
    if isinstance(arg, dict):
        arg = tuple(sorted(arg.items()))
    return (name, arg)


class ApiClient:
    """Typed client with one coroutine per endpoint.

    Query results are cached by (endpoint, argument) and reused until a
    mutation invalidates one of their tags. Every call is a single attempt.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: SessionStore | None = None,
        cache: TagCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or load_config()
        self.session = session or SessionStore()
        self.cache = cache or TagCache()
        self.base_url = self.config.base_url.rstrip("/")
        self.timeout = self.config.timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_headers(self, skip_auth: bool = False) -> dict[str, str]:
        """Headers for the next request, with the bearer token when signed in."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if not skip_auth:
            session = await self.session.fetch_auth_session()
            if session.tokens and session.tokens.access_token:
                headers["Authorization"] = f"Bearer {session.tokens.access_token}"
        logger.debug(f"Headers prepared for {self.base_url}: auth={'Authorization' in headers}")
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        skip_auth: bool = False,
    ) -> Any:
        """Send one request and return the decoded body; raise ApiError on failure."""
        client = self._get_client()
        url = path if path.startswith("/") else f"/{path}"
        headers = await self._get_headers(skip_auth=skip_auth)

        try:
            response = await client.request(method, url, json=json, params=params, headers=headers)
        except httpx.RequestError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ApiError.from_request_error(e) from e

        if response.is_error:
            error = ApiError.from_response(response)
            logger.error(f"{method} {url} returned {response.status_code}: {error.message}")
            raise error

        if not response.content:
            return None
        if "application/json" in response.headers.get("content-type", ""):
            return response.json()
        return response.text

    async def _execute(self, endpoint: Endpoint, arg: Any) -> Any:
        payload = None
        try:
            if endpoint.query_fn is not None:
                return await endpoint.query_fn(self, arg)

            body = endpoint.body(arg) if endpoint.body else None
            params = endpoint.params(arg) if endpoint.params else None
            payload = await self.request(endpoint.method, endpoint.url(arg), json=body, params=params)
            return endpoint.parse(payload) if endpoint.parse else payload
        except ValueError as e:
            # pydantic.ValidationError is a ValueError
            raise ApiError(CUSTOM_ERROR, f"Unexpected response from {endpoint.name}: {e}", payload) from e

    async def query(self, name: str, arg: Any = None, *, force: bool = False) -> QueryResult:
        """Run a query endpoint, serving a fresh cached result when there is one."""
        endpoint = get_endpoint(name)
        key = cache_key(name, arg)
        if not force and self.cache.is_fresh(key):
            return QueryResult(data=self.cache.get(key).data, from_cache=True)

        fetch_id = self.cache.begin_fetch()
        try:
            data = await self._execute(endpoint, arg)
        except ApiError as e:
            self.cache.cancel_fetch(fetch_id)
            logger.error(f"{name} error: {e.message}")
            return QueryResult(error=e)

        self.cache.finish_fetch(fetch_id, key, data, endpoint.provided_tags(data, None, arg))
        return QueryResult(data=data)

    async def mutate(self, name: str, arg: Any = None) -> MutationResult:
        """Run a mutation endpoint and invalidate its tags if it succeeds."""
        endpoint = get_endpoint(name)
        logger.info(f"{name} with data: {arg}")
        try:
            data = await self._execute(endpoint, arg)
        except ApiError as e:
            logger.error(f"{name} error: {e.message}")
            return MutationResult(error=e)

        tags = endpoint.invalidated_tags(data, None, arg)
        self.cache.invalidate(tags)
        return MutationResult(data=data, invalidated_tags=tags)

    def subscribe(self, name: str, arg: Any, callback: Callable[[Hashable], None]) -> Callable[[], None]:
        """Be told when the cached result of ``name(arg)`` is invalidated."""
        get_endpoint(name)
        return self.cache.subscribe(cache_key(name, arg), callback)

    # Queries

    async def get_auth_user(self, *, force: bool = False) -> QueryResult[AuthUser]:
        return await self.query("getAuthUser", force=force)

    async def get_projects(self, *, force: bool = False) -> QueryResult[list[Project]]:
        return await self.query("getProjects", force=force)

    async def get_tasks(self, project_id: int, *, force: bool = False) -> QueryResult[list[Task]]:
        return await self.query("getTasks", {"project_id": project_id}, force=force)

    async def get_tasks_by_user(self, user_id: int, *, force: bool = False) -> QueryResult[list[Task]]:
        return await self.query("getTasksByUser", user_id, force=force)

    async def get_users(self, *, force: bool = False) -> QueryResult[list[User]]:
        return await self.query("getUsers", force=force)

    async def get_teams(self, *, force: bool = False) -> QueryResult[list[Team]]:
        return await self.query("getTeams", force=force)

    async def search(self, text: str, *, force: bool = False) -> QueryResult[SearchResults]:
        return await self.query("search", text, force=force)

    # Mutations

    async def create_project(self, project: dict[str, Any]) -> MutationResult[Project]:
        return await self.mutate("createProject", project)

    async def create_task(self, task: dict[str, Any]) -> MutationResult[Task]:
        return await self.mutate("createTask", task)

    async def update_task_status(self, task_id: int, status: Status | str) -> MutationResult[Task]:
        value = status.value if isinstance(status, Status) else status
        return await self.mutate("updateTaskStatus", {"task_id": task_id, "status": value})

    async def create_user(self, user: dict[str, Any]) -> MutationResult[User]:
        return await self.mutate("createUser", user)
