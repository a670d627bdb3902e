"""Application configuration using Pydantic settings."""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str

    # Runtime
    environment: str = "development"

    # CORS
    allowed_origins: str = "http://localhost:5173,http://localhost:3000"

    # Supabase Storage
    supabase_url: Optional[str] = None
    supabase_service_role_key: Optional[str] = None  # Service role key for server-side uploads

    # Monday.com board
    monday_api_url: str = "https://api.monday.com/v2"
    monday_api_key: Optional[str] = None
    monday_board_id: Optional[str] = None
    monday_group_id: Optional[str] = None
    monday_timeout_seconds: float = 15.0

    # Monday.com column IDs (one per synced project field)
    monday_name_col_id: str
    monday_status_col_id: str
    monday_priority_col_id: str
    monday_file_col_id: str
    monday_duedate_col_id: str
    monday_grant_access_col_id: str
    monday_feedback_col_id: str

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def monday_enabled(self) -> bool:
        return bool(self.monday_api_key and self.monday_board_id and self.monday_group_id)

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
