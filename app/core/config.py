from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "PlacePicker"
    PROJECT_DESCRIPTION: str = "Personal collection of places, sorted by proximity"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"

    LOG_LEVEL: str = "INFO"

    # Places store settings
    PLACES_API_URL: str = "http://localhost:3000"
    PLACES_API_TIMEOUT: float = 10.0

    # Device position settings
    DEVICE_LATITUDE: Optional[float] = None
    DEVICE_LONGITUDE: Optional[float] = None
    GEOLOCATION_API_URL: Optional[str] = None
    GEOLOCATION_API_TIMEOUT: float = 5.0

    class ConfigDict:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
