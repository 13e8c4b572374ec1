"""
Base HTTP service for Learnify API communication.

Tool services subclass BaseApiService and call the ``_get``/``_post``/
``_put``/``_delete`` helpers. Requests run on a worker thread so tool
coroutines never block the event loop.
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Dict, Optional, Sequence

import requests
from pydantic import BaseModel, ValidationError

from ..config.settings import ApiSettings
from ..registry.markers import CancellationToken
from ..utils.response import error_payload, success_payload
from .models import ApiResponse

logger = logging.getLogger(__name__)

NOT_FOUND = 404


class ApiRequestError(Exception):
    """A call to the Learnify API failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BaseApiService:
    """
    Shared plumbing for services that proxy the Learnify API.

    Args:
        session: HTTP session used for every request
        settings: Base URL and timeout of the API
        service_name: Name used in log lines
    """

    def __init__(self, session: requests.Session, settings: ApiSettings, service_name: str):
        self._session = session
        self._settings = settings
        self._base_url = settings.base_url.rstrip("/")
        self.service_name = service_name

        logger.info(f"Initialized {service_name} with base URL: {self._base_url}")

    # ========================================================================
    # HTTP verbs
    # ========================================================================

    async def _get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> Optional[Any]:
        """GET an endpoint and unwrap its data; None when it returns 404."""
        response = await self._send("GET", endpoint, params=params, cancellation_token=cancellation_token)
        if response.status_code == NOT_FOUND:
            logger.warning(f"Resource not found: {response.url}")
            return None
        return self._unwrap(response, endpoint)

    async def _post(
        self,
        endpoint: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> Any:
        """POST a body and unwrap the created resource.

        Raises:
            ApiRequestError: If the response carries no data
        """
        response = await self._send("POST", endpoint, params=params, body=body,
                                    cancellation_token=cancellation_token)
        data = self._unwrap(response, endpoint)
        if data is None:
            raise ApiRequestError(f"Failed to deserialize response from {endpoint}")
        return data

    async def _put(
        self,
        endpoint: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> Optional[Any]:
        """PUT a body and unwrap the updated resource; None when it returns 404."""
        response = await self._send("PUT", endpoint, params=params, body=body,
                                    cancellation_token=cancellation_token)
        if response.status_code == NOT_FOUND:
            logger.warning(f"Resource not found for PUT: {response.url}")
            return None
        return self._unwrap(response, endpoint)

    async def _delete(
        self,
        endpoint: str,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> bool:
        """DELETE an endpoint. Returns False when the resource did not exist."""
        response = await self._send("DELETE", endpoint, cancellation_token=cancellation_token)
        if response.status_code == NOT_FOUND:
            logger.warning(f"Resource not found for DELETE: {response.url}")
            return False
        self._raise_for_status(response, endpoint)
        return True

    # ========================================================================
    # Tool helpers
    # ========================================================================

    async def _tool_result(
        self,
        operation: str,
        call: Awaitable[Any],
        success_message: str,
        not_found_message: Optional[str] = None,
    ) -> str:
        """
        Await an API call and wrap its outcome in the tool response envelope.

        Args:
            operation: Short description used in the error log line
            call: Pending API call
            success_message: Message for the success payload
            not_found_message: When given, a None result becomes this error

        Returns:
            JSON payload string
        """
        try:
            data = await call
        except Exception as e:
            logger.error(f"Error {operation} ({self.service_name}): {e}")
            return error_payload(str(e))

        if data is None and not_found_message is not None:
            return error_payload(not_found_message)
        return success_payload(data, success_message)

    async def _deletion_result(
        self,
        operation: str,
        call: Awaitable[bool],
        success_message: str,
        failure_message: str,
    ) -> str:
        """Wrap a DELETE outcome as ``{"success", "message"}``."""
        try:
            deleted = await call
        except Exception as e:
            logger.error(f"Error {operation} ({self.service_name}): {e}")
            return error_payload(str(e))

        return json.dumps({
            "success": deleted,
            "message": success_message if deleted else failure_message,
        })

    async def _exists_result(self, operation: str, call: Awaitable[Any], resource: str) -> str:
        """Report whether a lookup found anything as ``{"success", "exists", "message"}``."""
        try:
            data = await call
        except Exception as e:
            logger.error(f"Error {operation} ({self.service_name}): {e}")
            return error_payload(str(e))

        exists = data is not None
        return json.dumps({
            "success": True,
            "exists": exists,
            "message": f"{resource} exists" if exists else f"{resource} does not exist",
        })

    @staticmethod
    async def _select(call: Awaitable[Any], fields: Sequence[str]) -> Optional[Dict[str, Any]]:
        """Await a lookup and keep only ``fields`` of the resource."""
        data = await call
        if data is None:
            return None
        return {name: data.get(name) for name in fields}

    # ========================================================================
    # Internal Helpers
    # ========================================================================

    def _build_url(self, endpoint: str) -> str:
        if endpoint.startswith("http"):
            return endpoint
        return f"{self._base_url}{endpoint}"

    @staticmethod
    def _query_params(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Drop unset filters; booleans go out as true/false."""
        query: Dict[str, Any] = {}
        for key, value in (params or {}).items():
            if value is None or value == "":
                continue
            query[key] = str(value).lower() if isinstance(value, bool) else value
        return query

    @staticmethod
    def _serialize_body(body: Any) -> Any:
        if isinstance(body, BaseModel):
            return body.model_dump(mode="json", by_alias=True)
        return body

    async def _send(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        body: Any = None,
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> requests.Response:
        cancellation_token.raise_if_cancelled()
        url = self._build_url(endpoint)
        logger.debug(f"{method} request to: {url}")

        try:
            return await asyncio.to_thread(
                self._session.request,
                method,
                url,
                params=self._query_params(params),
                json=self._serialize_body(body),
                timeout=self._settings.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"HTTP error during {method} request to {endpoint}: {e}")
            raise ApiRequestError(f"Failed to {method} {endpoint}: {e}") from e

    def _raise_for_status(self, response: requests.Response, endpoint: str) -> None:
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.error(f"HTTP error for {endpoint}: {e}")
            raise ApiRequestError(
                f"Request to {endpoint} failed with status {response.status_code}",
                status_code=response.status_code,
            ) from e

    def _unwrap(self, response: requests.Response, endpoint: str) -> Any:
        self._raise_for_status(response, endpoint)
        try:
            envelope = ApiResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"JSON deserialization error for {endpoint}: {e}")
            raise ApiRequestError(f"Failed to deserialize response from {endpoint}: {e}") from e
        return envelope.data
