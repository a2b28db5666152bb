from .loader import get_catalog, get_default_preset, get_preset, load_catalog, load_preset
from .schema import ModelPreset, PresetSummary

__all__ = [
    "ModelPreset",
    "PresetSummary",
    "get_catalog",
    "get_default_preset",
    "get_preset",
    "load_catalog",
    "load_preset",
]
