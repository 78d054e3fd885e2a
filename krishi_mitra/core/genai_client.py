import asyncio
import logging
from typing import Callable, Optional

from google.genai.client import Client

from .config import settings

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], Client]


def _default_client_factory(api_key: str) -> Client:
    return Client(api_key=api_key)


class GenAIClientProvider:
    """
    Owns the Gemini client for the lifetime of the process.

    The credential is read and the client is built on first use only. When no
    API key is configured, that outcome is cached too, so later calls report
    the service as unavailable without touching the network or re-reading
    the environment.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        client_factory: Optional[ClientFactory] = None,
    ) -> None:
        self._api_key = api_key
        self._client_factory = client_factory or _default_client_factory
        self._client: Optional[Client] = None
        self._resolved = False
        self._lock = asyncio.Lock()

    @property
    def resolved(self) -> bool:
        return self._resolved

    @property
    def available(self) -> bool:
        """True once a client has been built. False before resolution."""
        return self._client is not None

    async def get_client(self) -> Optional[Client]:
        if self._resolved:
            return self._client

        async with self._lock:
            if not self._resolved:
                api_key = (
                    self._api_key
                    if self._api_key is not None
                    else settings.GEMINI_API_KEY
                )
                if api_key:
                    self._client = self._client_factory(api_key)
                else:
                    logger.error(
                        "GEMINI_API_KEY environment variable not set. "
                        "Please add it to your .env file."
                    )
                self._resolved = True
        return self._client


_default_provider: Optional[GenAIClientProvider] = None


def get_client_provider() -> GenAIClientProvider:
    global _default_provider
    if _default_provider is None:
        _default_provider = GenAIClientProvider()
    return _default_provider
