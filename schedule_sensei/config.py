# schedule_sensei/config.py
import os
from typing import Optional

from pydantic import BaseModel, Field

ENV_PREFIX = "SCHEDULE_SENSEI_"


class Settings(BaseModel):
    """
    Request parameters for the chat-completion call plus the log level.
    The API key is deliberately not a setting; it is supplied per request.
    """
    model: str = "gpt-4"
    base_url: str = "https://api.openai.com/v1"
    max_tokens: int = Field(default=1200, gt=0)
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    timeout: Optional[float] = Field(default=600.0, gt=0)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None and raw != "":
                values[name] = raw
        return cls(**values)


def get_settings() -> Settings:
    return Settings.from_env()
