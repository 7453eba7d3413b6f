"""API-key authentication for the Postman API."""

import os

from dotenv import load_dotenv

from ..models.config import DEFAULT_BASE_URL


class PostmanAuth:
    """Builds request headers and URLs for the Postman API."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
    ) -> None:
        """Initialize authentication with credentials.

        Args:
            api_key: Postman API key (or load from POSTMAN_API_KEY env)
            base_url: Postman API base URL (or load from POSTMAN_BASE_URL env)
        """
        load_dotenv()

        self.api_key = api_key or os.getenv("POSTMAN_API_KEY", "")
        self.base_url = (base_url or os.getenv("POSTMAN_BASE_URL", DEFAULT_BASE_URL)).rstrip("/")

        if not self.api_key:
            raise ValueError(
                "Missing Postman API key. Set POSTMAN_API_KEY or add api_key "
                "to the user config file."
            )

    def get_headers(self, content_type: str | None = None) -> dict[str, str]:
        """Generate headers for an API request.

        Args:
            content_type: Content-Type header value, set for requests with a body

        Returns:
            Dictionary of headers including X-Api-Key
        """
        headers = {
            "X-Api-Key": self.api_key,
            "Accept": "application/json",
        }
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    def get_full_url(self, path: str) -> str:
        """Build full URL from base URL and path."""
        return f"{self.base_url}{path}"
