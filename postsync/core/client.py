"""HTTP client wrapper for the Postman API."""

import logging
from typing import Any

import requests

from ..models.config import ResourceKind
from .auth import PostmanAuth

logger = logging.getLogger("postsync.client")


class PostmanAPIError(Exception):
    """Exception raised for any transport or HTTP failure."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class PostmanClient:
    """HTTP client for the Postman REST API."""

    TIMEOUT = 30

    def __init__(self, auth: PostmanAuth | None = None) -> None:
        """Initialize client with authentication.

        Args:
            auth: PostmanAuth instance (creates one from env if not provided)
        """
        self.auth = auth or PostmanAuth()
        self.session = requests.Session()

    def _request(
        self,
        method: str,
        path: str,
        json_data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make an authenticated request to the Postman API.

        Args:
            method: HTTP method
            path: API path (without base URL)
            json_data: Optional JSON body data

        Returns:
            Parsed JSON response

        Raises:
            PostmanAPIError: On API errors
        """
        has_body = method in ("POST", "PUT", "PATCH")
        headers = self.auth.get_headers("application/json" if has_body else None)
        url = self.auth.get_full_url(path)

        logger.debug("%s %s", method, url)

        try:
            response = self.session.request(
                method=method,
                url=url,
                headers=headers,
                json=json_data if has_body else None,
                timeout=self.TIMEOUT,
            )

            if response.status_code >= 400:
                error_msg = f"API error {response.status_code}: {response.text[:500]}"
                raise PostmanAPIError(error_msg, response.status_code, response)

            if not response.content:
                return {}

            return response.json()  # type: ignore[no-any-return]

        except requests.RequestException as e:
            raise PostmanAPIError(f"Request failed: {e}") from e
        except ValueError as e:
            # requests raises a ValueError subclass on undecodable JSON
            raise PostmanAPIError(f"Invalid JSON response from {path}: {e}") from e

    def get(self, path: str) -> dict[str, Any]:
        """Make a GET request."""
        return self._request("GET", path)

    def post(
        self,
        path: str,
        json_data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make a POST request."""
        return self._request("POST", path, json_data=json_data)

    def put(
        self,
        path: str,
        json_data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make a PUT request."""
        return self._request("PUT", path, json_data=json_data)

    # -------------------------------------------------------------------------
    # Resource Operations
    # -------------------------------------------------------------------------

    def list_resources(self, kind: ResourceKind) -> list[dict[str, Any]]:
        """List summaries for a resource kind.

        Returns:
            List of summaries, each with at least 'name' and 'uid'
        """
        response = self.get(kind.endpoint)
        return response.get(kind.list_key) or []

    def get_resource(self, kind: ResourceKind, uid: str) -> Any:
        """Fetch the full document for a resource, unwrapped from its envelope."""
        response = self.get(kind.item_endpoint(uid))
        if kind.key not in response:
            raise PostmanAPIError(f"Response for {kind} {uid} has no '{kind.key}' key")
        return response[kind.key]

    def create_resource(self, kind: ResourceKind, body: Any) -> dict[str, Any]:
        """Create a new resource from a document."""
        return self.post(kind.endpoint, json_data={kind.key: body})

    def replace_resource(self, kind: ResourceKind, uid: str, body: Any) -> dict[str, Any]:
        """Replace an existing resource with a document."""
        return self.put(kind.item_endpoint(uid), json_data={kind.key: body})
