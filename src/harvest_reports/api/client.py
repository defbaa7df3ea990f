"""HTTP client for the Harvest REST API."""

import logging
from json import JSONDecodeError
from typing import Any, Callable, Optional, TypeVar

import httpx

from harvest_reports import __version__
from harvest_reports.api.base import HarvestAccessor
from harvest_reports.core.config import ConfigManager
from harvest_reports.core.exceptions import HarvestConnectionError, HarvestError
from harvest_reports.core.models import Client, Project, Record, Task, TaskAssignment, TimeEntry, User
from harvest_reports.core.ranges import DateRange
from harvest_reports.core.result import Result

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)

DEFAULT_TIMEOUT = 30.0


class HarvestApi(HarvestAccessor):
    """Blocking Harvest API client.

    Each method issues exactly one request and returns a `Result`. Non-2xx
    responses are returned, not raised: their payload is the response body.
    """

    def __init__(
        self,
        account: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize API client.

        Args:
            account: Harvest account subdomain
            username: Login email
            password: Login password
            base_url: Full service URL. Derived from account if None.
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
            transport: Custom httpx transport (for testing)

        Raises:
            ValueError: If neither account nor base_url is given
        """
        if base_url is None:
            if not account:
                raise ValueError("Either account or base_url is required")
            base_url = f"https://{account}.harvestapp.com"

        self.base_url = base_url.rstrip("/")
        auth = httpx.BasicAuth(username, password or "") if username else None
        self.client = httpx.Client(
            base_url=self.base_url,
            auth=auth,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
                "User-Agent": user_agent or f"harvest-reports/{__version__}",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls, config: ConfigManager, transport: Optional[httpx.BaseTransport] = None
    ) -> "HarvestApi":
        """Create a client from the ``connection`` config section."""
        return cls(
            config.get("connection.account"),
            config.get("connection.username"),
            config.get("connection.password"),
            base_url=config.get("connection.base_url"),
            timeout=float(config.get("connection.timeout", DEFAULT_TIMEOUT)),
            user_agent=config.get("connection.user_agent"),
            transport=transport,
        )

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self.client.close()

    def _request(
        self, method: str, path: str, params: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Send a request.

        Raises:
            HarvestConnectionError: If the service could not be reached
        """
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = self.client.request(method, path, params=params)
        except httpx.TransportError as e:
            raise HarvestConnectionError(f"Request to {path} failed: {e}") from e

        if not response.is_success:
            logger.warning("%s %s returned %s", method, path, response.status_code)
        return response

    def _decode(self, response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except JSONDecodeError as e:
            raise HarvestError(f"Invalid JSON in response from {response.url}") from e

    def _failure(self, response: httpx.Response) -> Result:
        return Result(str(response.status_code), response.text or None, response.headers)

    def _get_collection(
        self,
        path: str,
        plural: str,
        factory: Callable[[dict[str, Any]], R],
        params: Optional[dict[str, Any]] = None,
        keyed: bool = True,
    ) -> Result:
        """Fetch a list endpoint and build records.

        Args:
            path: Endpoint path
            plural: Key wrapping the list in object-shaped responses
            factory: Record constructor
            params: Query parameters
            keyed: Return a mapping of id to record instead of a list

        Returns:
            Result with records as payload
        """
        response = self._request("GET", path, params)
        if not response.is_success:
            return self._failure(response)

        data = self._decode(response)
        if isinstance(data, dict):
            data = data.get(plural, [])
        records = [factory(item) for item in data or []]

        payload: Any = {r.id: r for r in records} if keyed else records
        return Result(str(response.status_code), payload, response.headers)

    def _get_item(self, path: str, factory: Callable[[dict[str, Any]], R]) -> Result:
        """Fetch a single-record endpoint."""
        response = self._request("GET", path)
        if not response.is_success:
            return self._failure(response)

        data = self._decode(response)
        payload = factory(data) if data else None
        return Result(str(response.status_code), payload, response.headers)

    def list_clients(self) -> Result:
        return self._get_collection("/clients", "clients", Client.from_dict)

    def get_client(self, client_id: int) -> Result:
        return self._get_item(f"/clients/{client_id}", Client.from_dict)

    def list_projects(self) -> Result:
        return self._get_collection("/projects", "projects", Project.from_dict)

    def list_client_projects(self, client_id: int) -> Result:
        return self._get_collection(
            "/projects", "projects", Project.from_dict, params={"client": client_id}
        )

    def get_project(self, project_id: int) -> Result:
        return self._get_item(f"/projects/{project_id}", Project.from_dict)

    def list_users(self) -> Result:
        return self._get_collection("/people", "users", User.from_dict)

    def get_user(self, user_id: int) -> Result:
        return self._get_item(f"/people/{user_id}", User.from_dict)

    def list_user_entries(self, user_id: int, date_range: DateRange) -> Result:
        return self._get_collection(
            f"/people/{user_id}/entries",
            "day_entries",
            TimeEntry.from_dict,
            params=date_range.to_params(),
            keyed=False,
        )

    def list_project_task_assignments(self, project_id: int) -> Result:
        return self._get_collection(
            f"/projects/{project_id}/task_assignments",
            "task_assignments",
            TaskAssignment.from_dict,
            keyed=False,
        )

    def list_tasks(self) -> Result:
        return self._get_collection("/tasks", "tasks", Task.from_dict)

    def get_task(self, task_id: int) -> Result:
        return self._get_item(f"/tasks/{task_id}", Task.from_dict)
