from __future__ import annotations

import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from utils.env_loader import env_flag, env_int, load_environments
from utils.errors import ValidationError

DEFAULT_DRIVER = "mysql"
DEFAULT_CHARSET = "utf8"


class ConnectionSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = Field(default="localhost", max_length=255)
    username: str = Field(default="", max_length=128)
    password: str = Field(default="", repr=False)
    dbname: str = Field(..., min_length=1, description="Database name, or file path for sqlite")
    driver: str = Field(default=DEFAULT_DRIVER, min_length=1, max_length=30)
    charset: str = Field(default=DEFAULT_CHARSET, min_length=1, max_length=30)
    persistent: bool = True
    port: Optional[int] = Field(default=None, ge=1, le=65535)
    stringify_params: bool = Field(default=True, description="Bind every value as text")

    @field_validator("driver")
    @classmethod
    def _normalize_driver(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def dsn(self) -> str:
        return f"{self.driver}:host={self.host};dbname={self.dbname};charset={self.charset}"

    @classmethod
    def build(cls, **values: Any) -> "ConnectionSettings":
        try:
            return cls(**values)
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid connection parameters: {exc}") from exc

    @classmethod
    def from_env(cls, prefix: str = "DB_", **overrides: Any) -> "ConnectionSettings":
        load_environments()
        try:
            values: Dict[str, Any] = {
                "host": os.getenv(f"{prefix}HOST", "localhost"),
                "username": os.getenv(f"{prefix}USER", ""),
                "password": os.getenv(f"{prefix}PASSWORD", ""),
                "dbname": os.getenv(f"{prefix}NAME", ""),
                "driver": os.getenv(f"{prefix}DRIVER", DEFAULT_DRIVER),
                "charset": os.getenv(f"{prefix}CHARSET", DEFAULT_CHARSET),
                "persistent": env_flag(f"{prefix}PERSISTENT", True),
                "port": env_int(f"{prefix}PORT"),
            }
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        values.update({k: v for k, v in overrides.items() if v is not None})
        if not values["dbname"]:
            raise ValidationError(f"{prefix}NAME is required")
        return cls.build(**values)
