"""Token image resolution constants."""

from typing import Final

# Cache keys
TOKEN_LIST_KEY: Final[str] = "tokenList"
TOKEN_IMAGE_KEY_PREFIX: Final[str] = "tokenImage"

# API endpoints
COINGECKO_SERVICE_NAME: Final[str] = "coingecko"
COINGECKO_COIN_LIST_PATH: Final[str] = "/coins/list"
COINGECKO_COIN_DETAILS_PATH: Final[str] = "/coins/{coin_id}"
COINGECKO_API_KEY_HEADER: Final[str] = "x-cg-demo-api-key"
COINGECKO_USER_AGENT: Final[str] = "TokenImage/0.1"

# Redis connection
REDIS_CONNECT_ATTEMPTS: Final[int] = 3
REDIS_SOCKET_TIMEOUT_SECONDS: Final[float] = 5.0
