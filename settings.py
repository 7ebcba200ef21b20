import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_UPSTREAM_URL = "http://music-proxy.dc1.de5.net/"

# desktop Chrome, some upstreams reject unknown clients
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class ProxyConfig:
    base_url: str = DEFAULT_UPSTREAM_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "ProxyConfig":
        """Build a config from ``MUSIC_PROXY_*`` variables, reading ``.env`` first."""
        load_dotenv(override=False)
        return cls(
            base_url=os.getenv("MUSIC_PROXY_UPSTREAM_URL", DEFAULT_UPSTREAM_URL),
            user_agent=os.getenv("MUSIC_PROXY_USER_AGENT", DEFAULT_USER_AGENT),
            timeout=float(os.getenv("MUSIC_PROXY_TIMEOUT", DEFAULT_TIMEOUT)),
        )


@dataclass(frozen=True)
class ServerSettings:
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServerSettings":
        load_dotenv(override=False)
        return cls(
            host=os.getenv("MUSIC_PROXY_HOST", "0.0.0.0"),
            port=int(os.getenv("MUSIC_PROXY_PORT", 5000)),
            log_level=os.getenv("MUSIC_PROXY_LOG_LEVEL", "INFO").upper(),
        )
