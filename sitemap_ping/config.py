# === FILE: sitemap_ping/config.py ===
"""
Resolution of the hook configuration.

Inputs come from the orchestrator's plugin configuration (or a YAML/JSON
inputs file), with the ``URL`` environment variable as the site URL fallback.
Pydantic describes the schema and checks the data.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sitemap_ping.logger import logger
from sitemap_ping.models import PhaseOutcome, Proceed, Stop

DEFAULT_SITEMAP_PATH = "/sitemap-index.xml"
DEFAULT_TIMEOUT = 10.0
SITE_URL_ENV = "URL"


class PluginInputs(BaseModel):
    """Optional values from the plugin configuration block."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    site_url: Optional[str] = Field(None, alias="siteUrl")
    sitemap_path: Optional[str] = Field(None, alias="sitemapPath")

    @field_validator("site_url", "sitemap_path", mode="before")
    def _blank_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v


class RunConfig(BaseModel):
    """Configuration for one run of the hook. Immutable once built."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    site_url: str = Field(..., min_length=1, description="Public site URL without trailing slash.")
    sitemap_path: str = Field(DEFAULT_SITEMAP_PATH, description="Sitemap path relative to the site root.")
    publish_dir: Path = Field(..., description="Directory holding the finished build.")
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Per-request timeout (seconds).")
    concurrent: bool = Field(False, description="Send all pings at once instead of one by one.")

    @field_validator("site_url", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    @field_validator("sitemap_path", mode="before")
    def _leading_slash(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.startswith("/"):
            return "/" + v
        return v

    @property
    def sitemap_url(self) -> str:
        return f"{self.site_url}{self.sitemap_path}"


def resolve_config(
    inputs: Union[PluginInputs, Mapping[str, Any], None],
    publish_dir: Union[str, Path, Callable[[], Union[str, Path]]],
    env: Optional[Mapping[str, str]] = None,
    *,
    timeout: Optional[float] = None,
    concurrent: Optional[bool] = None,
) -> PhaseOutcome[RunConfig]:
    """Build the RunConfig, or ``Stop`` when no site URL can be found.

    The site URL comes from ``inputs.siteUrl``, then the ``URL`` environment
    variable. An unresolved URL is logged as a warning and is not an error.
    *publish_dir* may be a callable; it is only called once the site URL is known.
    """
    if not isinstance(inputs, PluginInputs):
        inputs = PluginInputs.model_validate(dict(inputs or {}))
    env = os.environ if env is None else env

    site_url = (inputs.site_url or env.get(SITE_URL_ENV) or "").strip().rstrip("/")
    if not site_url:
        logger.warning(
            "Sitemap ping: no site URL found. Set siteUrl in the plugin inputs "
            "or make sure the %s environment variable is set.",
            SITE_URL_ENV,
        )
        return Stop("site URL unresolved")

    extra: dict[str, Any] = {}
    if timeout is not None:
        extra["timeout"] = timeout
    if concurrent is not None:
        extra["concurrent"] = concurrent

    config = RunConfig(
        site_url=site_url,
        sitemap_path=inputs.sitemap_path or DEFAULT_SITEMAP_PATH,
        publish_dir=Path(publish_dir() if callable(publish_dir) else publish_dir),
        **extra,
    )
    logger.debug("Resolved config: %s", config.model_dump_json())
    return Proceed(config)


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


def load_inputs(path: Union[str, Path]) -> PluginInputs:
    """
    Read plugin inputs from a YAML or JSON file.
    Raises FileNotFoundError when the file does not exist.
    """
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported inputs format: {suffix}")

    # plugin block form: {"inputs": {...}}
    if isinstance(data.get("inputs"), dict):
        data = data["inputs"]
    return PluginInputs.model_validate(data)


__all__ = [
    "DEFAULT_SITEMAP_PATH",
    "DEFAULT_TIMEOUT",
    "SITE_URL_ENV",
    "PluginInputs",
    "RunConfig",
    "ValidationError",
    "resolve_config",
    "load_inputs",
]
