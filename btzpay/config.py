from dataclasses import dataclass
from os import getenv
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://web.btzpay.my.id"
DEFAULT_TIMEOUT_MS = 30000


@dataclass(frozen=True)
class ClientConfig:
    apikey: str
    base_url: str = DEFAULT_BASE_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self):
        if not self.apikey:
            raise ConfigurationError("API Key is required")
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "base_url", (self.base_url or DEFAULT_BASE_URL).rstrip("/"))
        object.__setattr__(self, "timeout_ms", int(self.timeout_ms or DEFAULT_TIMEOUT_MS))

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000


class Config:
    BTZPAY_APIKEY = ""
    BTZPAY_BASE_URL = DEFAULT_BASE_URL
    BTZPAY_TIMEOUT_MS = DEFAULT_TIMEOUT_MS

    @classmethod
    def load(cls, env_file: Optional[str] = None) -> None:
        """Read settings from a .env file and the process environment.

        Without ``env_file``, the nearest .env from the working directory up is used.
        """
        load_dotenv(env_file or find_dotenv(usecwd=True))
        cls.BTZPAY_APIKEY = getenv("BTZPAY_APIKEY", "").strip()
        cls.BTZPAY_BASE_URL = getenv("BTZPAY_BASE_URL", "").strip() or DEFAULT_BASE_URL
        timeout = getenv("BTZPAY_TIMEOUT_MS", "").strip()
        try:
            cls.BTZPAY_TIMEOUT_MS = int(timeout) if timeout else DEFAULT_TIMEOUT_MS
        except ValueError as e:
            raise ConfigurationError(f"BTZPAY_TIMEOUT_MS must be an integer, got {timeout!r}") from e

    @classmethod
    def client_config(cls) -> ClientConfig:
        return ClientConfig(
            apikey=cls.BTZPAY_APIKEY,
            base_url=cls.BTZPAY_BASE_URL or DEFAULT_BASE_URL,
            timeout_ms=cls.BTZPAY_TIMEOUT_MS or DEFAULT_TIMEOUT_MS,
        )
