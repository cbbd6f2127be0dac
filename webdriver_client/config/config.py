from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ClientConfig:
    """Connection and session settings for the WebDriver client."""
    host: str = "localhost"
    port: int = 4444
    browser: str = "firefox"
    capabilities: dict[str, Any] = field(default_factory=dict)
    timeout: float | None = None  # seconds per request, None waits indefinitely
    server_wait: float = 60  # seconds to wait for the server to become ready at startup
    verbose: bool = False
    log_level: str = "INFO"
    start_url: str | None = None

    def __post_init__(self):
        if not 0 < self.port < 65536:
            raise ValueError(f"port must be between 1 and 65535, got: {self.port}")
        if self.timeout is not None and self.timeout < 0:
            raise ValueError(f"timeout must be non-negative, got: {self.timeout}")
        if self.server_wait < 0:
            raise ValueError(f"server_wait must be non-negative, got: {self.server_wait}")

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"
