from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DatabaseConfig, ImportConfig
from ..models.vocabulary import DEFAULT_VOCABULARIES, VocabularySet

"""Config loader.

Responsibilities:
- load the YAML file (config/import.yml by default)
- validate it against config_schema.json
- apply defaults for every missing key
- merge configured aliases / blank markers onto the default vocabularies
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/import.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or not JSON, or the data violates
            the schema (unknown key, wrong type, bad enum value ...)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _build_vocabularies(data: dict[str, Any]) -> VocabularySet:
    vocabs = DEFAULT_VOCABULARIES
    aliases = data.get("aliases") or {}
    try:
        for name, extra in aliases.items():
            vocabs = replace(vocabs, **{name: getattr(vocabs, name).with_aliases(extra)})
    except ValueError as e:
        raise ConfigError(f"invalid aliases: {e}") from e
    if data.get("blank_markers"):
        vocabs = vocabs.with_blank_markers(data["blank_markers"])
    return vocabs


def config_from_dict(data: dict[str, Any]) -> ImportConfig:
    """Validate an already parsed mapping and build ImportConfig."""
    _validate_config_schema(data)

    digits = data.get("phone_digits") or {}
    phone_min = digits.get("min", 7)
    phone_max = digits.get("max", 15)
    if phone_min > phone_max:
        raise ConfigError(f"config validation failed: phone_digits.min ({phone_min}) > max ({phone_max})")

    db_raw = data.get("database") or {}
    db = DatabaseConfig(
        host=db_raw.get("host"),
        port=db_raw.get("port"),
        user=db_raw.get("user"),
        password=db_raw.get("password"),
        database=db_raw.get("database"),
        dsn=db_raw.get("dsn"),
    )
    sentinels = data.get("null_sentinels")
    return ImportConfig(
        vocabularies=_build_vocabularies(data),
        parent_match=data.get("parent_match", "normalized"),
        phone_min_digits=phone_min,
        phone_max_digits=phone_max,
        sheet_name=data.get("sheet_name"),
        null_sentinels=frozenset(s.strip().upper() for s in sentinels) if sentinels else None,
        guests_table=data.get("guests_table", "guests"),
        database=db,
    )


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config validation failed: top level must be a mapping, got {type(data).__name__}")
    return config_from_dict(data)
