from enum import Enum
from pathlib import Path
from functools import lru_cache
from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent.parent


#  Working modes
class AppEnvironment(str, Enum):
    """Working modes"""
    DEV = "development"
    PROD = "production"
    TEST = "testing"


#  Control API
class ApiConfig(BaseModel):
    """Control API bind address"""
    host: str = Field(default="127.0.0.1", description="IP address to bind")
    port: int = Field(default=8000, description="Control API port")


#  Remote telemetry server
class PublisherConfig(BaseModel):
    """Remote telemetry server"""
    url: str = Field(default="http://localhost:3000", description="Base URL of the telemetry server")
    channel: str = Field(default="", description="Channel to publish to on startup (empty: wait for the API)")
    password: SecretStr = Field(default=SecretStr(""), description="Channel password")
    timeout: float = Field(default=5.0, gt=0, description="Per-request timeout in seconds")


#  Sampling loop
class SamplingConfig(BaseModel):
    """Sampling loop"""
    period: float = Field(default=1.0, gt=0, description="Target cycle length in seconds")
    idle: float = Field(default=1.0, gt=0, description="Poll interval while the player is not driving")
    ready: float = Field(default=5.0, gt=0, description="Seconds to wait for the worker to initialise")
    join: float = Field(default=2.0, gt=0, description="Seconds to wait for the worker to exit")


#  Shared memory segment names
class MemoryConfig(BaseModel):
    """Shared memory segment names"""
    graphics: str = Field(default="Local\\acpmf_graphics")
    physics: str = Field(default="Local\\acpmf_physics")
    static: str = Field(default="Local\\acpmf_static")


#  Main Settings
class Settings(BaseSettings):
    """
    Main Settings class.
    Reads configuration from .env file or environment variables,
    e.g. PUBLISHER_URL, PUBLISHER_CHANNEL, SAMPLING_PERIOD.
    """
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="_",
        extra="ignore",
    )

    env: AppEnvironment = Field(default=AppEnvironment.DEV, alias="APP_ENV")

    # Compose configs
    api: ApiConfig = Field(default_factory=ApiConfig)
    publisher: PublisherConfig = Field(default_factory=PublisherConfig)
    sampling: SamplingConfig = Field(default_factory=SamplingConfig)
    memory: MemoryConfig = Field(default_factory=MemoryConfig)


@lru_cache
def get_settings() -> Settings:
    """
    Creates and returns a (cached) instance of settings.
    Used for Dependency Injection.
    """
    return Settings()
