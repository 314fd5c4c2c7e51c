"""Server infrastructure settings."""

from typing import List

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class ServerSettings(InfrastructureSettings):
    """HTTP server runtime configuration.

    Environment Variables:
        BACKEND_URL: Public base URL of this service (default: http://127.0.0.1:8000)
        CORS_ALLOW_ORIGINS: Comma separated origins allowed outside production

    Example:
        ```python
        from infrastructure.services import get_settings

        backend_url = get_settings().server.BACKEND_URL
        origins = get_settings().server.cors_origins
        ```
    """

    BACKEND_URL: str = Field(default="http://127.0.0.1:8000", alias="BACKEND_URL")
    CORS_ALLOW_ORIGINS: str = Field(
        default="http://localhost:8000,http://127.0.0.1:8000",
        alias="CORS_ALLOW_ORIGINS",
    )

    @property
    def cors_origins(self) -> List[str]:
        """CORS_ALLOW_ORIGINS split into a list."""
        return [
            origin.strip()
            for origin in self.CORS_ALLOW_ORIGINS.split(",")
            if origin.strip()
        ]
