"""Matrix client-server API configuration."""

from __future__ import annotations

from pydantic import BaseModel, SecretStr


class MatrixConfig(BaseModel):
    """Credentials for posting into Matrix rooms."""

    homeserver_url: str
    access_token: SecretStr
    timeout: float = 30.0

    @property
    def base_url(self) -> str:
        return f"{self.homeserver_url.rstrip('/')}/_matrix/client/v3"
