""" Mask Map Generator settings. """

import json
import os
from typing import Dict, List, Tuple


def _as_bool(v) -> bool:
# Converts .json input (bool/int/str/None) to a real bool;
# Avoids the case where a non-empty string like "False" is treated as True.

    if isinstance(v, bool): return v
    if isinstance(v, str):
        input_str = v.strip().lower()
        if input_str == "": return False
        return input_str in ("1","true","yes","on")
    return bool(v)


def _as_float(v, default: float) -> float:
# Converts .json input to float, falling back to the default for empty or malformed values.
    try:
        return float(v)
    except (TypeError, ValueError):
        return default


def _as_int(v, default: int) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return default



#                                           === Loading JSON file ===

_config_path = os.path.join(os.path.dirname(__file__), "config.json")
_config_data: dict = {}
if os.path.isfile(_config_path):
    with open(_config_path, "r", encoding="utf-8") as f:
        _config_data = json.load(f)
# Without a config file every value falls back to its default.


# Assigning config values:
INPUT_FOLDER: str = (_config_data.get("INPUT_FOLDER") or "").strip() # Folder searched for source maps when none are passed via CLI.
FILE_TYPE: str = _config_data.get("FILE_TYPE", "png") # File type of the generated mask map.
OUTPUT_NAME: str = (_config_data.get("OUTPUT_NAME") or "mask_map").strip() # File name of the generated mask map, without extension.
TARGET_FOLDER_NAME: str = _config_data.get("DEST_FOLDER_NAME", "") # If provided, places generated maps into a custom subfolder.
BRIGHTNESS: float = _as_float(_config_data.get("BRIGHTNESS", 1.0), 1.0) # Multiplies every sampled pixel before channel extraction; results are not clamped.
PREVIEW_SIZE: int = _as_int(_config_data.get("PREVIEW_SIZE", 128), 128) # Edge length of the square preview image.
WORKERS: int = _as_int(_config_data.get("WORKERS", 0), 0) # Worker threads used per composition; 0 uses the CPU count.

SHOW_DETAILS: bool = _as_bool(_config_data.get("SHOW_DETAILS", False)) # Shows details like exact resolution and timing when printing logs.




#                                           === Constants ===

ALLOWED_FILE_TYPES: Tuple[str, ...] = ("png", "tga")
# The mask map always carries data in alpha, so only formats with an alpha channel are allowed.
SOURCE_FILE_TYPES: Tuple[str, ...] = (".png", ".jpg", ".jpeg", ".tga")

TEXTURE_SLOTS: Tuple[str, ...] = ("albedo", "normal", "metallic", "roughness", "ao")

SLOT_SUFFIXES: Dict[str, List[str]] = {
    "albedo": ["basecolor", "base_color", "diffuse", "albedo", "color", "diff", "base"],
    "normal": ["normal_dx", "normal_gl", "normaldx", "normalgl", "normal", "norm", "nrm", "nor"],
    "metallic": ["metalness", "metallic", "metal"],
    "roughness": ["roughness", "rough"],
    "ao": ["ambientocclusion", "occlusion", "ambient", "ao"]}
# Filename suffixes recognized per texture slot when scanning a folder, e.g., "Rock_BaseColor.png" > albedo.
