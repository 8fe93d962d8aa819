# config/settings.py
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from enum import Enum
from dotenv import load_dotenv

# Load .env file explicitly
load_dotenv()

class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EstimatorSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ESTIMATOR_")
    
    default_region: str = Field("eastus", description="Azure region used when none is given")
    pricing_file: Optional[str] = Field(None, description="YAML file overriding the built-in pricing snapshot")
    currency: str = Field("USD", description="Currency used when displaying amounts")

    @field_validator('default_region', mode='before')
    @classmethod
    def validate_default_region(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    debug: bool = Field(False, description="Debug mode")
    log_level: LogLevel = Field(LogLevel.WARNING, description="Log level")
    log_format: str = Field("text", description="Log format (json or text)")
    
    estimator: EstimatorSettings = Field(default_factory=lambda: EstimatorSettings())

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @field_validator('log_format', mode='before')
    @classmethod
    def validate_log_format(cls, v):
        if isinstance(v, str):
            v = v.lower()
            if v not in ("json", "text"):
                raise ValueError("log_format must be 'json' or 'text'")
        return v

    @property
    def json_logs(self) -> bool:
        return self.log_format == "json"

    @classmethod
    def create_from_env(cls) -> "Settings":
        """Create settings instance from environment variables."""
        return cls()
