import os
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_INCLUDE = ".txt,.md,.log,.rst,.json,.yaml,.yml,.toml,.go,.py,.js,.ts"
DEFAULT_MAX_BYTES = 64 * 1024
DEFAULT_TIMEOUT = 30.0
PROVIDERS = ("openai", "ollama", "noop")

# Environment variable -> config field.
ENV_KEYS = {
    "LLM_PROVIDER": "provider",
    "LLM_MODEL": "model",
    "LLM_API_KEY": "api_key",
    "OPENAI_BASE": "openai_base",
    "OLLAMA_BASE": "ollama_base",
}


class IndexerConfig(BaseModel):
    dir: str = "."
    out: str = "index.json"
    max_bytes: int = Field(default=DEFAULT_MAX_BYTES, gt=0)
    include: str = DEFAULT_INCLUDE
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    provider: str = "openai"
    model: Optional[str] = None
    api_key: Optional[str] = None
    openai_base: str = "https://api.openai.com"
    ollama_base: str = "http://localhost:11434"
    temperature: float = 0.2

    show_progress: bool = False
    log_level: str = "INFO"

    @field_validator("provider")
    @classmethod
    def _check_provider(cls, value: str) -> str:
        value = (value or "").strip().lower()
        if value not in PROVIDERS:
            raise ValueError(f"provider must be one of {', '.join(PROVIDERS)}, got {value!r}")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "IndexerConfig":
        """Build a config from LLM_* / *_BASE variables; ``overrides`` win.

        Empty variables and ``None`` overrides count as unset.
        """
        environ = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        for env_key, field_name in ENV_KEYS.items():
            value = environ.get(env_key)
            if value:
                data[field_name] = value
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)


def load_yaml_config(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}
    if not isinstance(config_data, dict):
        raise ValueError("Config file must be a YAML mapping at top level.")
    return config_data
