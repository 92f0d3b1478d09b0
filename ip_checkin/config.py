from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Table Storage (absent -> every request answers 500)
    AzureTableConnectionString: Optional[str] = None
    IP_CHECKIN_TABLE_NAME: str = "IpCheckin"

    # Upper bound for a single table call, in seconds
    IP_CHECKIN_STORE_TIMEOUT_SECONDS: float = 10.0

    # Legacy callers still check in with GET
    IP_CHECKIN_ALLOW_GET: bool = False

    # Logging
    IP_CHECKIN_DEBUG: bool = False
    # Colored stdout output for local runs; the Functions host logs via root
    IP_CHECKIN_CONSOLE_LOG: bool = False

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def connection_string(self) -> Optional[str]:
        """Connection string with blank values treated as unset."""
        value = (self.AzureTableConnectionString or "").strip()
        return value or None


settings = Settings()
