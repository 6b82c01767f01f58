"""
Bundled sweep presets.

Presets live as JSON files under ``testsweep/input/config_file``. A preset
name is its file name without the ``.json`` extension.
"""

import os

PRESET_DIR = os.path.join(os.path.dirname(__file__), "config_file")


def list_presets(preset_dir=PRESET_DIR):
    """Return the sorted preset names available in ``preset_dir``."""
    if not os.path.isdir(preset_dir):
        return []
    return sorted(os.path.splitext(f)[0] for f in os.listdir(preset_dir) if f.endswith(".json"))


def find_preset(name, preset_dir=PRESET_DIR):
    """Return the path of preset ``name``, or None if it does not exist."""
    candidate = os.path.join(preset_dir, f"{name}.json")
    if os.path.isfile(candidate):
        return candidate
    return None


def resolve_config(name_or_path, preset_dir=PRESET_DIR):
    """Accept either an existing file path or a preset name."""
    if os.path.isfile(name_or_path):
        return name_or_path
    return find_preset(name_or_path, preset_dir)
