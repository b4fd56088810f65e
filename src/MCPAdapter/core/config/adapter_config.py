import os
import logging
from typing import List
from pydantic import BaseModel, Field, field_validator

from MCPAdapter.core.config._utils import getenv_str_list


# ------------------------
# Adapter configuration
# ------------------------

class AdapterConfig(BaseModel):
    disallowed_tools: List[str] = Field(default_factory=list)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AdapterConfig":
        return cls(
            disallowed_tools=getenv_str_list("DISALLOWED_TOOLS"),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
        )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Unknown log level: {v}")
        return v
