""" Input/output backend: loads source maps into pixel buffers and writes finished mask maps, so the engine never touches files. """

import os
from typing import Dict, List, Optional

from backend.image_lib import (ImageObject, close_image, get_size, image_to_rgba_floats, open_image,
                               rgba_floats_to_image, save_image as save_image_file)
from backend.texture_classes import MASK_MAP_CHANNELS, PixelBuffer, TextureSources

from settings import ALLOWED_FILE_TYPES, FILE_TYPE, SHOW_DETAILS, SOURCE_FILE_TYPES, TEXTURE_SLOTS
from utils import group_by_texture_set, log


FILE_FORMATS: Dict[str, str] = {"png": "PNG", "tga": "TGA"} # Export extension > Pillow format name.




#                                     === Mask Map Generator core interface ===


def validate_export_extension(file_type: Optional[str] = None) -> str:
# Validates the extension input by the user (CLI or config) and returns it without the dot.

    allowed_file_types: set[str] = set(ALLOWED_FILE_TYPES)
    raw_file_type: str = FILE_TYPE if file_type is None else file_type
    file_extension: str = (raw_file_type or "").strip().lower().lstrip(".")

    if file_extension in ("jpg", "jpeg", "jfif"):
        log(f"Aborted: Mask map uses the Alpha channel, but selected file type '{raw_file_type}' does not support alpha. Change FILE_TYPE to 'png' or 'tga' and retry.", "error")
        raise SystemExit(1)

    if not file_extension or file_extension not in allowed_file_types:
        sorted_allowed_file_types = ", ".join(sorted(allowed_file_types))
        log(f"Aborted: Invalid FILE_TYPE '{raw_file_type}'. Supported: {sorted_allowed_file_types}", "error")
        raise SystemExit(1)

    return file_extension


def find_source_maps(input_folder: str, texture_set_name: Optional[str] = None) -> TextureSources:
# Scans a folder (non-recursive) for supported images and assigns them to texture slots by filename suffix.
# All slots come from a single texture set: the requested one, or else the set with the most packed slots present.
# Within the set, the first file per slot in sorted order wins; the rest are reported.

    root_directory: str = os.path.abspath(input_folder)
    filenames: List[str] = [
        filename for filename in os.listdir(root_directory)
        if filename.lower().endswith(SOURCE_FILE_TYPES) and os.path.isfile(os.path.join(root_directory, filename))
    ]

    sources = TextureSources()
    files_by_set: Dict[str, Dict[str, List[str]]] = group_by_texture_set(filenames)
    if not files_by_set:
        return sources

    if texture_set_name:
        selected_set: str = texture_set_name.strip().lower()
        if selected_set not in files_by_set:
            log(f"Aborted: texture set '{texture_set_name}' not found in: {root_directory}", "error")
            raise SystemExit(1)
    else:
        packed_slots: List[str] = [channel_source.slot for channel_source in MASK_MAP_CHANNELS]
        selected_set = max(sorted(files_by_set), key=lambda set_name: sum(slot in files_by_set[set_name] for slot in packed_slots))
        # max() keeps the first set in sorted order on ties.
        ignored_sets: List[str] = [set_name for set_name in sorted(files_by_set) if set_name != selected_set]
        if ignored_sets:
            log(f"Warning: multiple texture sets found, using '{selected_set}' (ignored: {', '.join(ignored_sets)}). Pass --set to choose one.", "warn")

    for slot, slot_files in files_by_set[selected_set].items():
        setattr(sources, slot, os.path.join(root_directory, slot_files[0]))
        if len(slot_files) > 1:
            log(f"Warning: multiple {slot} maps found, using '{slot_files[0]}' (ignored: {', '.join(slot_files[1:])})", "warn")
    return sources


def load_texture(path: str) -> PixelBuffer:
# Opens an image and decodes it into a readable RGBA float buffer.

    image: Optional[ImageObject] = None
    try:
        image = open_image(path)
        buffer = PixelBuffer(image_to_rgba_floats(image))
        if SHOW_DETAILS:
            width, height = get_size(image)
            log(f"Loaded '{os.path.basename(path)}' ({width}x{height}, {image.mode})", "info")
        return buffer
    finally:
        if image is not None:
            close_image(image)


def load_texture_sources(sources: TextureSources) -> Dict[str, Optional[PixelBuffer]]:
# Loads every assigned slot; unassigned slots map to None and are left for the engine to reject.

    paths = sources.as_dict()
    return {slot: (load_texture(paths[slot]) if paths[slot] else None) for slot in TEXTURE_SLOTS}


def save_mask_map(buffer: PixelBuffer, output_directory: str, filename: str, file_extension: str) -> str:
# Encodes the buffer to an 8bit RGBA image and saves it. Returns the absolute output path.

    file_extension = validate_export_extension(file_extension)
    os.makedirs(output_directory, exist_ok=True)
    output_path = os.path.abspath(os.path.join(output_directory, f"{filename}.{file_extension}"))
    image = rgba_floats_to_image(buffer.pixels)
    try:
        save_image_file(image, output_path, FILE_FORMATS[file_extension])
    finally:
        close_image(image)
    return output_path.replace("\\", "/")
