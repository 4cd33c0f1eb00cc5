"""
Remote configuration module.

Holds the process-wide settings for the chat platform endpoint. The bot
token and target chat are read from the environment once at startup and
are never part of the source.
"""
from dataclasses import dataclass, field
from typing import Optional, Mapping
import os

import aiohttp
from dotenv import find_dotenv, load_dotenv

from .exceptions import ConfigurationError
from .logging import get_logger, mask_token

logger = get_logger('filemitra.config')

DEFAULT_ENDPOINT = 'https://api.telegram.org'

# Maximum accepted file size (10 MiB)
MAX_FILE_SIZE = 10 * 1024 * 1024

TOKEN_ENV = 'TELEGRAM_BOT_TOKEN'
CHAT_ID_ENV = 'TELEGRAM_CHAT_ID'
ENDPOINT_ENV = 'TELEGRAM_API_URL'


@dataclass(frozen=True)
class TimeoutConfig:
    """
    Timeout configuration.

    Timeouts belong to the transport; the upload pipeline itself never
    cancels an attempt.
    """
    total: float = 300.0  # Total request timeout
    connect: float = 30.0  # Connection timeout
    sock_read: float = 60.0  # Socket read timeout
    sock_connect: float = 30.0  # Socket connect timeout

    def to_aiohttp_timeout(self) -> aiohttp.ClientTimeout:
        """Convert to aiohttp ClientTimeout."""
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass(frozen=True)
class RemoteConfig:
    """
    Chat platform endpoint configuration.

    Attributes:
        auth_token: Bot authentication token (hidden from repr)
        target_chat_id: Chat or channel the documents are sent to
        endpoint_base_url: API base URL, without trailing slash
        timeout: Transport timeouts

    Example:
        >>> config = RemoteConfig.from_env()
        >>> config.document_url
        'https://api.telegram.org/bot<token>/sendDocument'
    """
    auth_token: str = field(repr=False)
    target_chat_id: str
    endpoint_base_url: str = DEFAULT_ENDPOINT
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)

    def __post_init__(self):
        if not self.auth_token:
            raise ConfigurationError("Bot token must not be empty")
        if not str(self.target_chat_id):
            raise ConfigurationError("Target chat id must not be empty")
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, 'target_chat_id', str(self.target_chat_id))
        object.__setattr__(self, 'endpoint_base_url', self.endpoint_base_url.rstrip('/'))

    @property
    def document_url(self) -> str:
        """URL of the document endpoint."""
        return f"{self.endpoint_base_url}/bot{self.auth_token}/sendDocument"

    def masked_url(self) -> str:
        """Document URL safe for logging."""
        return mask_token(self.document_url, self.auth_token)

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        dotenv: bool = True,
        timeout: Optional[TimeoutConfig] = None
    ) -> 'RemoteConfig':
        """
        Load configuration from environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)
            dotenv: Load the nearest .env above the working directory first (ignored when env is given)
            timeout: Optional transport timeouts

        Returns:
            Immutable RemoteConfig

        Raises:
            ConfigurationError: If the token or the chat id is missing
        """
        if env is None:
            if dotenv:
                load_dotenv(find_dotenv(usecwd=True))
            env = os.environ

        token = env.get(TOKEN_ENV)
        chat_id = env.get(CHAT_ID_ENV)

        missing = [name for name, value in ((TOKEN_ENV, token), (CHAT_ID_ENV, chat_id)) if not value]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variable(s): {', '.join(missing)}"
            )

        config = cls(
            auth_token=token,
            target_chat_id=chat_id,
            endpoint_base_url=env.get(ENDPOINT_ENV) or DEFAULT_ENDPOINT,
            timeout=timeout or TimeoutConfig()
        )
        logger.debug(f"Remote config loaded: {config.masked_url()} chat={config.target_chat_id}")
        return config
