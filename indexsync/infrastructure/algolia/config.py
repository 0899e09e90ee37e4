"""Configuration for the Algolia REST backend."""

from pydantic import BaseModel


class AlgoliaConfig(BaseModel):
    """Algolia application credentials and HTTP settings."""

    app_id: str = ""
    api_key: str = ""  # Admin key; needed for writes and settings
    host: str | None = None  # None = https://{app_id}.algolia.net
    timeout: float = 30.0  # Seconds, per request

    @property
    def base_url(self) -> str:
        return self.host or f"https://{self.app_id}.algolia.net"
