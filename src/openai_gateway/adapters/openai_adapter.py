"""
Direct OpenAI API adapter.

Issues the chat completion and audio transcription calls the gateway
operations are built on. Each call is a single POST; there are no retries.
"""

import logging
from typing import Optional, Dict, Any, Union
import httpx

from ..core.config import DEFAULT_TIMEOUT, ProviderConfig
from ..core.errors import (
    ConfigurationError,
    TransportError,
    HttpStatusError,
    GatewayAuthenticationError,
    GatewayRateLimitError,
)
from ..models.request import ChatRequest, ImageChatRequest, AudioForm

logger = logging.getLogger(__name__)


class OpenAIAdapter:
    """
    Direct OpenAI API adapter.

    Holds one pooled HTTP client carrying the bearer credential.
    """

    OPENAI_BASE_URL = "https://api.openai.com/v1"

    def __init__(
        self,
        name: str = "openai",
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize OpenAI adapter.

        Args:
            name: Name used in errors and logs
            base_url: OpenAI API URL (defaults to api.openai.com)
            api_key: OpenAI API key
            timeout: Request timeout in seconds
            transport: Optional custom transport (used by tests)
        """
        self._name = name
        self._base_url = (base_url or self.OPENAI_BASE_URL).rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_config(
        cls,
        config: ProviderConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "OpenAIAdapter":
        return cls(
            name=config.name,
            base_url=config.base_url,
            api_key=config.api_key,
            timeout=config.timeout,
            transport=transport,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Initialize HTTP client for OpenAI."""
        if self._client is not None:
            return

        if not self._api_key:
            raise ConfigurationError("API key required", gateway=self._name)

        kwargs: Dict[str, Any] = {
            "base_url": self._base_url,
            "headers": {"Authorization": f"Bearer {self._api_key}"},
            "timeout": self._timeout,
        }
        if self._transport is not None:
            kwargs["transport"] = self._transport

        self._client = httpx.AsyncClient(**kwargs)
        logger.info(f"Connected to OpenAI at {self._base_url}")

    async def disconnect(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Disconnected from OpenAI")

    async def chat_completion(self, request: Union[ChatRequest, ImageChatRequest]) -> str:
        """
        POST a chat completion request.

        Returns:
            The raw response body text
        """
        if not self._client:
            await self.connect()

        logger.debug(f"POST /chat/completions model={self._model_of(request)}")
        try:
            response = await self._client.post(
                "/chat/completions",
                json=request.to_openai_format(),
            )
        except httpx.RequestError as e:
            raise TransportError(f"{type(e).__name__}: {e}", gateway=self._name) from e

        self._check_response_errors(response)
        return response.text

    async def transcribe(self, form: AudioForm) -> str:
        """
        POST audio to the transcription endpoint.

        Returns:
            The raw response body text
        """
        if not self._client:
            await self.connect()

        files, data = form.to_httpx()
        logger.debug(f"POST /audio/transcriptions model={form.model} bytes={len(form.content)}")
        try:
            response = await self._client.post(
                "/audio/transcriptions",
                files=files,
                data=data,
            )
        except httpx.RequestError as e:
            raise TransportError(f"{type(e).__name__}: {e}", gateway=self._name) from e

        self._check_response_errors(response)
        return response.text

    def _check_response_errors(self, response: httpx.Response) -> None:
        """Check response for errors and raise appropriate exceptions."""
        if response.is_success:
            return

        body = response.text
        status = response.status_code

        if status == 401:
            raise GatewayAuthenticationError(
                "Invalid API key",
                gateway=self._name,
                status_code=status,
                body=body,
            )

        if status == 429:
            retry_after = response.headers.get("Retry-After")
            try:
                retry_after_value = float(retry_after) if retry_after else None
            except ValueError:
                retry_after_value = None
            raise GatewayRateLimitError(
                "Rate limit exceeded",
                gateway=self._name,
                body=body,
                retry_after=retry_after_value,
            )

        raise HttpStatusError(
            f"Request failed: {status} - {body}",
            gateway=self._name,
            status_code=status,
            body=body,
        )

    @staticmethod
    def _model_of(request: Union[ChatRequest, ImageChatRequest]) -> str:
        if isinstance(request, ImageChatRequest):
            return request.request.model
        return request.model

    async def health_check(self) -> Dict[str, Any]:
        """Report whether the adapter can issue calls."""
        return {
            "healthy": bool(self._api_key),
            "connected": self.is_connected,
            "base_url": self._base_url,
        }
