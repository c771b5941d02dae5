"""Backend Client - HTTP binding of the generative backend operations."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import ClientConfig, get_config
from ..exceptions import BackendError, BackendHTTPError, BackendResponseError

logger = logging.getLogger(__name__)


class BackendClient:
    """Async client for the three backend operations.

    Every call is a JSON POST. Transport problems (network errors, non-2xx
    statuses, bodies that are not a JSON object) raise ``BackendError``; the
    content of a successful reply is returned untouched for the extractor to
    judge. No retries are attempted.

    Example:
        >>> async with BackendClient.from_config() as client:
        ...     reply = await client.generate_content("system", "Generate...", "Role: ...")
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            config: Endpoint paths, base URL and timeout (defaults to get_config())
            http_client: Pre-built httpx client, e.g. one with a mock transport
        """
        self.config = config or get_config()
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=self.config.api_base,
            timeout=httpx.Timeout(self.config.timeout),
        )

    @classmethod
    def from_config(cls, config: ClientConfig | None = None) -> "BackendClient":
        return cls(config=config)

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._http.post(path, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Request to {path} failed: {e!r}")
            raise BackendError(
                message="Could not reach the content service",
                details={"path": path, "error": str(e)},
            ) from e

        if response.status_code >= 400:
            logger.error(f"Request to {path} returned HTTP {response.status_code}")
            raise BackendHTTPError(
                message=f"Content service returned HTTP {response.status_code}",
                status_code=response.status_code,
                details={"path": path, "body": response.text[:200]},
            )

        try:
            body = response.json()
        except ValueError as e:
            raise BackendResponseError(
                message="Content service returned a non-JSON body",
                details={"path": path, "body": response.text[:200]},
            ) from e

        if not isinstance(body, dict):
            raise BackendResponseError(
                message="Content service returned an unexpected body",
                details={"path": path, "type": type(body).__name__},
            )
        return body

    async def generate_content(self, role: str, message: str, context: str) -> str:
        """GenerateContent: free-form reply text.

        Args:
            role: Voice of the request (e.g. "system")
            message: Instruction for the model
            context: Extra context (role, topics, ...)

        Returns:
            The ``reply`` string

        Raises:
            BackendError: On transport failure or a body without a text reply
        """
        body = await self._post(
            self.config.chat_path,
            {"role": role, "message": message, "context": context},
        )
        reply = body.get("reply")
        if not isinstance(reply, str):
            raise BackendResponseError(
                message="Content service response has no reply text",
                details={"path": self.config.chat_path, "keys": sorted(body)[:10]},
            )
        return reply

    async def generate_workflow(self, role: str, custom_tools: str) -> dict[str, Any]:
        """GenerateWorkflow: ``{success, data?: {workflow, role?}}``."""
        return await self._post(
            self.config.workflow_path,
            {"role": role, "customTools": custom_tools},
        )

    async def get_stage_detail(self, role: str, stage: str, tools: list[str]) -> dict[str, Any]:
        """GetStageDetail: ``{success, data?: StageDetail}``."""
        return await self._post(
            self.config.stage_detail_path,
            {"role": role, "stage": stage, "tools": list(tools)},
        )
