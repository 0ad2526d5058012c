"""
Minimal async GraphQL client over httpx.
"""
import logging
import httpx
from typing import Dict, Any, Optional

from app.clients.errors import UpstreamError

# Set up logging
logger = logging.getLogger(__name__)


class GraphQLClient:
    """Posts GraphQL documents to one endpoint using a shared httpx.AsyncClient."""

    def __init__(self, http: httpx.AsyncClient, url: str, headers: Optional[Dict[str, str]] = None):
        self.http = http
        self.url = url
        self.headers = headers or {}

    async def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a query and return its `data` object.

        Raises:
            UpstreamError: on transport failure, a non-2xx status, or a
                response carrying GraphQL `errors`.
        """
        payload = {"query": query, "variables": variables or {}}
        try:
            response = await self.http.post(
                self.url,
                json=payload,
                headers={"Content-Type": "application/json", **self.headers},
            )
        except httpx.HTTPError as e:
            logger.error(f"GraphQL request to {self.url} failed: {str(e)}")
            raise UpstreamError(f"Request to {self.url} failed: {str(e)}") from e

        if response.status_code < 200 or response.status_code >= 300:
            logger.error(f"GraphQL error status from {self.url}: {response.status_code} - {response.text}")
            raise UpstreamError(
                f"HTTP {response.status_code} from {self.url}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from {self.url}") from e

        if body.get("errors"):
            messages = "; ".join(err.get("message", "unknown error") for err in body["errors"])
            logger.error(f"GraphQL errors from {self.url}: {messages}")
            raise UpstreamError(f"GraphQL errors: {messages}", status_code=response.status_code)

        return body.get("data") or {}
