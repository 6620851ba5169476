'''
Holds all the configurations
'''
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """
    Manages application configuration using environment variables.
    """
    # Application Metadata
    APP_NAME: str = "Availability Manager Backend"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "The backend API for publishing service availability and bookable slots."
    TEST_MODE: bool = False

    # Database URL
    DATABASE_URL_PROD: str
    DATABASE_URL_TEST: str
    CREATE_TABLES_ON_STARTUP: bool = False
    @property
    def database_url(self) -> str:
        """
        Dynamically returns the correct database URL based on the test_mode flag.
        """
        if self.TEST_MODE:
            return self.DATABASE_URL_TEST
        return self.DATABASE_URL_PROD

    # Frontend
    BACKEND_CORS_ORIGINS: list[str] = []
    FRONTEND_BASE_URL: str = "http://localhost:4200"

    # Slot generation
    SLOT_GENERATION_MONTHS: int = 3  # horizon for patterns without an end date
    PUBLIC_VIEW_DAYS: int = 30
    YEARLY_EXCEPTION_WRAPAROUND: bool = False

    class Config:
        env_file = ".env" # automatically loads the .env

# Create a single, importable instance of the settings
settings = Settings()
