from pydantic_settings import BaseSettings, SettingsConfigDict, NoDecode
from pydantic import field_validator, Field, AliasChoices
from typing import Annotated, Optional, List
import json


class Settings(BaseSettings):
    # Pydantic v2 settings config
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")
    # Supabase Configuration
    supabase_url: str
    supabase_key: str

    # JWT Configuration
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 43200  # 30 days

    # Email Configuration
    smtp_server: Optional[str] = None
    smtp_port: int = 587
    # Support both SMTP_USERNAME and the older EMAIL_USER / EMAIL_PASSWORD names
    smtp_username: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SMTP_USERNAME", "EMAIL_USER"),
    )
    smtp_password: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SMTP_PASSWORD", "EMAIL_PASSWORD"),
    )
    smtp_use_tls: bool = True
    from_email: Optional[str] = None
    from_name: str = "EmpowHer Mentorship"
    support_email: str = "support@empowher.com"

    # Frontend URL used in email links
    frontend_url: str = "http://localhost:5173"

    # Mentor access: when non-empty only these emails pass the mentor check
    mentor_email_allowlist: Annotated[List[str], NoDecode] = []

    # Quizzes
    default_passing_score: int = 70

    # App Configuration
    app_name: str = "EmpowerHerEd Backend"
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV"),
    )
    debug: bool = True

    @field_validator('smtp_use_tls', 'debug', mode='before')
    @classmethod
    def parse_bool(cls, v):
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() in ('true', '1', 'yes', 'on')
        return bool(v)

    @field_validator('mentor_email_allowlist', mode='before')
    @classmethod
    def parse_email_list(cls, v):
        # Accept a comma separated string from .env as well as a JSON list
        if isinstance(v, str):
            if not v.strip().startswith('['):
                return [item.strip().lower() for item in v.split(',') if item.strip()]
            v = json.loads(v)
        return [item.lower() for item in v] if v else []

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


# Create settings instance
settings = Settings()
