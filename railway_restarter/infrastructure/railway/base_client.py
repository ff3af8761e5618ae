"""Base Railway client with common GraphQL transport functionality."""
import json
import logging
from typing import Any, Dict, Optional

import httpx

from railway_restarter.config import Settings

logger = logging.getLogger(__name__)


class RailwayClientError(Exception):
    """Base class for failures talking to the Railway API."""


class RailwayTransportError(RailwayClientError):
    """The request never produced a usable HTTP response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RailwayAPIError(RailwayClientError):
    """The API answered with a GraphQL ``errors`` array."""

    def __init__(self, errors: list):
        self.errors = errors
        messages = [str(error.get("message", error)) if isinstance(error, dict) else str(error) for error in errors]
        super().__init__("; ".join(messages) or "unknown GraphQL error")


class RailwayResponseError(RailwayClientError):
    """The response body did not have the expected shape."""


class BaseRailwayClient:
    """Sends authenticated GraphQL documents to the Railway endpoint."""

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None, timeout: float = 30.0):
        self.client = client or httpx.AsyncClient(timeout=timeout)
        self._endpoint = settings.RAILWAY_API_ENDPOINT
        self._api_token = settings.RAILWAY_API_TOKEN

    def _get_headers(self) -> Dict[str, str]:
        """Get standard Railway API headers."""
        return {
            "Authorization": f"Bearer {self._api_token}",
            "Content-Type": "application/json",
        }

    async def _make_request(self, query: str, variables: Dict[str, Any]) -> httpx.Response:
        """POST a GraphQL document, mapping transport failures to RailwayTransportError."""
        try:
            response = await self.client.post(
                self._endpoint,
                headers=self._get_headers(),
                json={"query": query, "variables": variables},
            )
        except httpx.HTTPError as e:
            logger.error(f"❌ Railway request failed: {e}")
            raise RailwayTransportError(f"Railway request failed: {e}") from e

        if response.status_code >= 400:
            # GraphQL servers may report errors with a 4xx status and a JSON body.
            errors = self._extract_errors(response)
            if errors:
                logger.error(f"❌ Railway API error (HTTP {response.status_code}): {errors}")
                raise RailwayAPIError(errors)
            logger.error(f"❌ Railway API returned HTTP {response.status_code}")
            raise RailwayTransportError(
                f"Railway API returned HTTP {response.status_code}", status_code=response.status_code
            )
        return response

    @staticmethod
    def _extract_errors(response: httpx.Response) -> Optional[list]:
        try:
            body = response.json()
        except (json.JSONDecodeError, ValueError):
            return None
        if isinstance(body, dict) and body.get("errors"):
            return body["errors"]
        return None

    async def execute(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """Run a query or mutation and return its ``data`` object."""
        response = await self._make_request(query, variables)

        try:
            body = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            logger.error(f"❌ Railway API returned a non-JSON body: {e}")
            raise RailwayResponseError("Railway API returned a non-JSON body") from e

        if not isinstance(body, dict):
            raise RailwayResponseError("Railway API returned an unexpected body")

        if body.get("errors"):
            logger.error(f"❌ Railway API error: {body['errors']}")
            raise RailwayAPIError(body["errors"])

        data = body.get("data")
        if not isinstance(data, dict):
            logger.error("❌ Railway API response has no data")
            raise RailwayResponseError("Railway API response has no data")
        return data

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
