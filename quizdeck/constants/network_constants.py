"""Network configuration constants for the quiz player."""

DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 8000
FETCH_TIMEOUT_SECONDS: float = 10.0
