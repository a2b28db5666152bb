"""Load, validate, and select model presets from JSON files."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from roicalc.catalog.schema import ModelPreset

logger = logging.getLogger(__name__)

# Default directory for preset config files
_CONFIG_DIR = Path(__file__).parent / "configs"

DEFAULT_PRESET_ID = "marketing"


def load_preset(file_path: Path) -> ModelPreset:
    """Load and validate a single preset from a JSON file."""
    if not file_path.exists():
        raise FileNotFoundError(f"Preset config not found: {file_path}")

    with open(file_path, "r") as f:
        raw = json.load(f)

    return ModelPreset.model_validate(raw)


def load_catalog(config_dir: Path | None = None) -> dict[str, ModelPreset]:
    """Load every ``*.json`` preset in ``config_dir``, ordered by file name."""
    config_dir = config_dir or _CONFIG_DIR
    catalog: dict[str, ModelPreset] = {}
    for path in sorted(config_dir.glob("*.json")):
        preset = load_preset(path)
        if preset.id in catalog:
            raise ValueError(f"Duplicate preset id '{preset.id}' in {path}")
        catalog[preset.id] = preset
    logger.info("Loaded %d model presets from %s", len(catalog), config_dir)
    return catalog


@lru_cache(maxsize=1)
def get_catalog() -> dict[str, ModelPreset]:
    """The bundled catalog, loaded once."""
    return load_catalog()


def get_preset(preset_id: str) -> Optional[ModelPreset]:
    """Look up a bundled preset by id."""
    return get_catalog().get(preset_id)


def get_default_preset() -> ModelPreset:
    return get_catalog()[DEFAULT_PRESET_ID]
