"""Network configuration constants for the escape room backend and client."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 5050
DEFAULT_BACKEND_URL: str = "http://127.0.0.1:5050"
BACKEND_TIMEOUT_SECONDS: float = 10.0
ADMIN_TOKEN_TTL_SECONDS: int = 2 * 60 * 60
DEFAULT_ADMIN_USERNAME: str = "admin"
DEFAULT_ADMIN_PASSWORD: str = "admin"
