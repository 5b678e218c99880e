"""Run configuration for SNPHub ingestion."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from jsonschema import Draft202012Validator

from snphub.errors import ConfigError

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "database": {"type": "string", "minLength": 1},
        "genotype_id": {"type": ["string", "integer"]},
        "temp_file": {"type": "string", "minLength": 1},
        "root_path": {"type": "string"},
        "log_level": {"enum": list(LOG_LEVELS)},
        "create_schema": {"type": "boolean"},
        "maintenance": {"type": "boolean"},
    },
}

_VALIDATOR = Draft202012Validator(CONFIG_SCHEMA)


@dataclass(frozen=True)
class IngestSettings:
    """Everything a single ingestion run needs, resolved and validated."""

    db_path: Path
    genotype_id: str
    input_path: Path
    root_path: Path | None = None
    log_level: str = "INFO"
    create_schema: bool = False
    maintenance: bool = True

    @property
    def log_file(self) -> Path | None:
        if self.root_path is None:
            return None
        return self.root_path / "log" / "genotype_parser.log"


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Load and schema-check a JSON run config."""

    config_path = Path(path)
    try:
        payload = json.loads(config_path.read_text())
    except OSError as exc:
        raise ConfigError(f"Could not read config file {config_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file {config_path} is not valid JSON: {exc}") from exc

    errors = sorted(_VALIDATOR.iter_errors(payload), key=lambda error: list(error.path))
    if errors:
        details = "; ".join(
            f"{'/'.join(str(part) for part in error.path) or '<root>'}: {error.message}"
            for error in errors
        )
        raise ConfigError(f"Invalid config file {config_path}: {details}")
    return payload


def build_settings(
    overrides: Mapping[str, Any],
    *,
    config_path: str | Path | None = None,
) -> IngestSettings:
    """Merge a config file (if given) with explicit overrides.

    Override values of ``None`` leave the config file value in place.
    """

    values: dict[str, Any] = dict(load_config_file(config_path)) if config_path else {}
    values.update({key: value for key, value in overrides.items() if value is not None})

    missing = [key for key in ("database", "genotype_id", "temp_file") if not values.get(key)]
    if missing:
        raise ConfigError(f"Missing required settings: {', '.join(missing)}")

    input_path = Path(str(values["temp_file"])).expanduser()
    if not input_path.is_file():
        raise ConfigError(f"Genotype file not found: {input_path}")

    log_level = str(values.get("log_level", "INFO")).upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"Unknown log level: {log_level}")

    root_path = values.get("root_path")
    return IngestSettings(
        db_path=Path(str(values["database"])).expanduser(),
        genotype_id=str(values["genotype_id"]),
        input_path=input_path,
        root_path=Path(str(root_path)).expanduser() if root_path else None,
        log_level=log_level,
        create_schema=bool(values.get("create_schema", False)),
        maintenance=bool(values.get("maintenance", True)),
    )
