from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from .errors import ScriptError
from .exit_codes import ERR_CONFIG

SCHEMAS_DIR = Path(__file__).resolve().parent / "schemas"
CONFIG_SCHEMA = SCHEMAS_DIR / "site-config.schema.json"
CONFIG_ENV = "GEN_P5_CONFIG"


@dataclass(frozen=True)
class SiteConfig:
    upstream_repo: str = "https://github.com/go-p5/p5"
    clone_dir: str = "p5"
    site_url: str = "https://go-p5.github.io"
    title_prefix: str = "Go-P5: "
    excludes: frozenset[str] = field(default_factory=lambda: frozenset({"sketch", "wasm-p5-ex"}))
    bootstrap_name: str = "wasm_exec.js"
    artifact_ext: str = "wasm"
    tmp_prefix: str = "go-p5-gen-"

    def artifact_name(self, name: str) -> str:
        return f"{name}.{self.artifact_ext}"

    def artifact_url(self, name: str) -> str:
        return f"{self.site_url}/example/{name}/{self.artifact_name(name)}"

    def page_url(self, name: str) -> str:
        return f"{self.site_url}/example/{name}/index.html"

    def bootstrap_url(self) -> str:
        return f"{self.site_url}/assets/{self.bootstrap_name}"


def _load_schema() -> dict[str, Any]:
    return json.loads(CONFIG_SCHEMA.read_text(encoding="utf-8"))


def _read_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle)
    except OSError as exc:
        raise ScriptError(f"could not read config {path}: {exc}", ERR_CONFIG, kind="invalid_config") from exc
    except yaml.YAMLError as exc:
        raise ScriptError(f"invalid YAML in config {path}: {exc}", ERR_CONFIG, kind="invalid_config") from exc


def config_from_mapping(data: dict[str, Any], base: SiteConfig | None = None) -> SiteConfig:
    try:
        jsonschema.validate(data, _load_schema())
    except jsonschema.ValidationError as exc:
        raise ScriptError(f"invalid config: {exc.message}", ERR_CONFIG, kind="invalid_config") from exc
    overrides: dict[str, Any] = dict(data)
    if "excludes" in overrides:
        overrides["excludes"] = frozenset(overrides["excludes"])
    if "site_url" in overrides:
        overrides["site_url"] = str(overrides["site_url"]).rstrip("/")
    return replace(base or SiteConfig(), **overrides)


def load_config(path: str | Path | None = None) -> SiteConfig:
    """Build the site configuration.

    Without a path (and without ``GEN_P5_CONFIG`` set) the built-in defaults
    are returned. An empty YAML document also yields the defaults.
    """
    raw = path or os.environ.get(CONFIG_ENV)
    if not raw:
        return SiteConfig()
    data = _read_yaml(Path(raw))
    if data is None:
        return SiteConfig()
    if not isinstance(data, dict):
        raise ScriptError(f"invalid config {raw}: root must be a mapping", ERR_CONFIG, kind="invalid_config")
    return config_from_mapping(data)
