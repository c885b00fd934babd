"""
Configuration loading and validation for SiteSage.

The configuration is an explicit, frozen Pydantic model handed to the engine;
nothing reads credentials or target URLs from module globals. Values come from
a YAML or JSON file (optional) and the model-service key from the environment.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Optional, Union, get_args

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

API_KEY_ENV = "OPENAI_API_KEY"

LogLevelT = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVELS = get_args(LogLevelT)

CRAWLED_URLS_FILE = "crawled_urls.csv"
CONTENTS_FILE = "contents.csv"


class SageConfig(BaseModel):
    """Settings for one question-answering run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    domain: str = Field("ai-wiki.fintakers.com", min_length=1, description="Domain that bounds the crawl.")
    start_url: str = Field("https://ai-wiki.fintakers.com", min_length=1, description="Seed URL of the crawl.")
    openai_api_key: Optional[SecretStr] = Field(None, description="Credential for the model services.")
    completion_model: str = Field("gpt-3.5-turbo-instruct", min_length=1)
    embedding_model: str = Field("text-embedding-ada-002", min_length=1)
    timeout: float = Field(30.0, gt=0, description="Per-request timeout (seconds), HTTP and model calls.")
    user_agent: str = Field("SiteSageBot/1.0", min_length=1, description="User-Agent header.")
    cache_dir: Path = Field(Path("."), description="Directory holding the crawl cache CSV files.")
    log_level: LogLevelT = Field("INFO", description="Default logging level.")

    @field_validator("start_url")
    def _require_web_scheme(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("start_url must be an absolute http(s) URL")
        return v

    @field_validator("log_level", mode="before")
    def _upper_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @property
    def crawled_urls_path(self) -> Path:
        return self.cache_dir / CRAWLED_URLS_FILE

    @property
    def contents_path(self) -> Path:
        return self.cache_dir / CONTENTS_FILE

    def api_key(self) -> str:
        if self.openai_api_key is None:
            raise ValueError(f"No API key configured; set {API_KEY_ENV}")
        return self.openai_api_key.get_secret_value()


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def _read_file(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path)
    if suffix == ".json":
        return _read_json(path)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None] = None, *, use_env: bool = True) -> SageConfig:
    """
    Build a validated SageConfig.

    An explicit *path* must exist. Without one, ``configs/default.yaml`` is used
    when present and built-in defaults otherwise. With *use_env*, ``.env`` is
    loaded and ``OPENAI_API_KEY`` fills in a missing key.
    """
    data: dict[str, Any] = {}
    if path is not None:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)
    elif _DEFAULT_CFG.is_file():
        data = _read_file(_DEFAULT_CFG)

    if use_env:
        load_dotenv()
        env_key = os.getenv(API_KEY_ENV)
        if env_key and not data.get("openai_api_key"):
            data["openai_api_key"] = env_key

    return SageConfig(**data)


__all__ = ["SageConfig", "load_config", "API_KEY_ENV", "LOG_LEVELS", "CRAWLED_URLS_FILE", "CONTENTS_FILE"]
