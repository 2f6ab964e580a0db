import os
from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class ResolverMode(str, Enum):
    """Where border lookups go during a search."""
    LIVE = "live"              # every lookup is its own API request
    PREFETCHED = "prefetched"  # one bulk request, then in-memory lookups


class BorderRoutesConfig(BaseModel):
    """Configuration shared by the CLI and the FastAPI backend."""

    # Countries API
    api_base_url: str = Field("https://restcountries.com/v3.1", description="REST Countries API root")
    request_timeout: float = Field(10.0, gt=0, description="Timeout for a single API request in seconds")
    resolver_mode: ResolverMode = Field(ResolverMode.PREFETCHED, description="Default border lookup mode")
    cache_ttl_seconds: float = Field(300.0, ge=0, description="Lifetime of cached border lookups in the backend")

    log_level: str = "INFO"

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS settings
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    @classmethod
    def from_env(cls) -> "BorderRoutesConfig":
        """Create config from environment variables."""
        return cls(
            api_base_url=os.getenv("BORDER_ROUTES_API_URL", "https://restcountries.com/v3.1"),
            request_timeout=float(os.getenv("BORDER_ROUTES_TIMEOUT", "10.0")),
            resolver_mode=ResolverMode(os.getenv("BORDER_ROUTES_MODE", ResolverMode.PREFETCHED.value)),
            cache_ttl_seconds=float(os.getenv("BORDER_ROUTES_CACHE_TTL", "300")),
            log_level=os.getenv("BORDER_ROUTES_LOG_LEVEL", "INFO"),
            host=os.getenv("BACKEND_HOST", "0.0.0.0"),
            port=int(os.getenv("BACKEND_PORT", "8000")),
            cors_origins=os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(","),
        )
