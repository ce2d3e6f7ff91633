""" Texture utilities shared by the I/O backend and the generator pipeline. """

import os
import re
from typing import Dict, Iterable, List, Optional, Tuple

from settings import SLOT_SUFFIXES


LOG_TYPES: list[str] = ["info", "warn", "error", "skip", "complete"]
# Defines log types; printed with a prefix per type.

def log(message: str, message_kind: LOG_TYPES = "info") -> None:
# Maps different log types.

    if message == "":
        print("")
        return

    if message_kind not in LOG_TYPES:
        message_kind = "info"

    if message_kind == "info":
        print(f"   {message}")
    elif message_kind == "warn":
        print(f"⚠️ {message}")
    elif message_kind == "error":
        print(f"⛔ {message}")
    elif message_kind == "skip":
        print(f"❌ {message}")
    elif message_kind == "complete":
        print(f"✅ {message}")
    else:
        print(message)  # fallback

    # Print styles:
    # info: 3 whitespaces + message
    # warn: ⚠️ + message
    # error: ⛔ + message
    # skip: ❌ + message
    # complete: ✅ + message


def detect_texture_slot(filename: str) -> Optional[Tuple[str, str]]:
# Matches the end of a file name against SLOT_SUFFIXES, e.g., "Rock_BaseColor_2K.png" > ("albedo", "Rock").
# Returns the slot and the texture set name in front of the suffix, or None.

    file_name, _ = os.path.splitext(os.path.basename(filename))
    file_name_lower: str = file_name.lower()
    separator: str = r"[\_\-\.]"
    size_suffix: str = rf"(?:{separator}(?:512|1k|2k|4k|8k))?"

    candidates: List[Tuple[str, str]] = [(slot, suffix) for slot, suffixes in SLOT_SUFFIXES.items() for suffix in suffixes]
    candidates.sort(key=lambda candidate: len(candidate[1]), reverse=True)
    # Longer suffixes first, so "normal_gl" is not matched as "gl" or "basecolor" as "color".

    for slot, type_suffix in candidates:
        match = re.search(rf"{separator}{re.escape(type_suffix)}{size_suffix}$", file_name_lower)
        if match:
            return slot, file_name[:match.start()]
    return None


def group_by_texture_set(filenames: Iterable[str]) -> Dict[str, Dict[str, List[str]]]:
# Groups file names by texture set name (case-insensitive), then by recognized texture slot.
# E.g., {"rock": {"albedo": ["Rock_Albedo.png"], "normal": ["Rock_Normal.png"]}}; unrecognized names are dropped.

    files_by_set: Dict[str, Dict[str, List[str]]] = {}
    for filename in sorted(filenames):
        detected = detect_texture_slot(filename)
        if detected is None:
            continue
        slot, texture_set_name = detected
        files_by_set.setdefault(texture_set_name.lower(), {}).setdefault(slot, []).append(filename)
    return files_by_set


def make_output_dir(base_directory: str, *, target_folder_name: Optional[str]) -> str:
# Creates/returns the output directory for a given base path.

    base_directory = os.path.abspath(base_directory or ".")

    target_folder_name = (target_folder_name or "").strip()
    target_folder_directory = os.path.join(base_directory, target_folder_name) if target_folder_name else base_directory
    os.makedirs(target_folder_directory, exist_ok=True)
    return target_folder_directory


def validate_safe_folder_name(raw_folder_name: Optional[str]) -> None:
# Validates that the custom folder or file name doesn't include unsupported characters.

    folder_name: str = (raw_folder_name or "")
    if folder_name.strip() == "":
        return

    if any(invalid_character in folder_name for invalid_character in '\\/:*?"<>|'):
        log(f"Aborted: invalid name '{raw_folder_name}'. It cannot contain \\ / : * ? \" < > |", "error")
        # Prints error.
        raise SystemExit(1)
    return
