""" Generates a mask map (albedo R, normal G, metallic B, roughness R as alpha) and its preview from source maps. """

import argparse
import os
import sys
import time
from typing import Dict, List, Optional, Tuple

from backend.io_backend import (find_source_maps, load_texture_sources, save_mask_map, validate_export_extension)
from backend.texture_classes import MaskMapResult, PixelBuffer, TextureSources

from core import MaskMapError, NullInputError, compose, resample_and_compose

from settings import (BRIGHTNESS, INPUT_FOLDER, OUTPUT_NAME, PREVIEW_SIZE, SHOW_DETAILS,
                      TARGET_FOLDER_NAME, WORKERS)

from utils import log, make_output_dir, validate_safe_folder_name




#                                           === Pipeline ===


def generate_mask_map(
    sources: TextureSources,
    output_directory: str,
    *,
    brightness: float = BRIGHTNESS,
    file_extension: Optional[str] = None,
    output_name: str = OUTPUT_NAME,
    preview_size: Optional[int] = PREVIEW_SIZE,
    workers: Optional[int] = WORKERS,
) -> MaskMapResult:
# Loads the source maps, composes the full resolution mask map and saves it next to an optional preview.
# A preview_size of None or 0 skips the preview.
# Engine errors (missing maps, mismatched sizes) propagate as MaskMapError; main() reports them.

    start_time = time.time()
    file_extension = validate_export_extension(file_extension)
    validate_safe_folder_name(output_name)
    if preview_size and preview_size < 1:
        raise ValueError(f"Preview size must be at least 1, got {preview_size}")
    # Nothing is written when the preview size is invalid.

    if not sources.ao:
        log("No AO texture assigned; it is not packed into the mask map.", "info")


# Loading texture maps:
    buffers: Dict[str, Optional[PixelBuffer]] = load_texture_sources(sources)
    source_resolutions: Dict[str, Tuple[int, int]] = {slot: buffer.size for slot, buffer in buffers.items() if buffer is not None}
    if SHOW_DETAILS:
        for slot, (width, height) in source_resolutions.items():
            log(f"{slot}: {width}x{height}", "info")


# Generating the full resolution mask map:
    mask_map: PixelBuffer = compose(
        buffers["albedo"], buffers["normal"], buffers["metallic"], buffers["roughness"],
        brightness=brightness, ao=buffers["ao"], workers=workers,
    )
    mask_map_path = save_mask_map(mask_map, output_directory, output_name, file_extension)
    log(f"Mask map saved at {mask_map_path}", "complete")


# Generating the preview:
    preview_path: Optional[str] = None
    if preview_size:
        preview: PixelBuffer = resample_and_compose(
            buffers["albedo"], buffers["normal"], buffers["metallic"], buffers["roughness"],
            preview_size, preview_size, brightness=brightness, ao=buffers["ao"], workers=workers,
        )
        preview_path = save_mask_map(preview, output_directory, f"{output_name}_preview", file_extension)
        log(f"Preview saved at {preview_path}", "info")


    if SHOW_DETAILS:
        elapsed_time = time.time() - start_time
        log(f"Execution time: {elapsed_time:.2f} seconds", "info")
        # Prints info.

    return MaskMapResult(
        mask_map_path=mask_map_path,
        resolution=mask_map.size,
        preview_path=preview_path,
        source_resolutions=source_resolutions,
    )




#                                         === CLI entry point ===

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mask-map-generator",
        description="Pack albedo R, normal G, metallic B and roughness R (as alpha) into one RGBA mask map.",
    )
    parser.add_argument("input_folder", nargs="?", default=None, help="Folder scanned for source maps by filename suffix.")
    parser.add_argument("--albedo", help="Albedo map; its red channel is used.")
    parser.add_argument("--normal", help="Normal map; its green channel is used.")
    parser.add_argument("--metallic", help="Metallic map; its blue channel is used.")
    parser.add_argument("--roughness", help="Roughness map; its red channel goes to alpha.")
    parser.add_argument("--ao", help="Ambient occlusion map (accepted, not packed).")
    parser.add_argument("--set", dest="texture_set", help="Texture set name to use when the input folder holds several sets, e.g., Rock.")
    parser.add_argument("--out", help="Output directory. Defaults to the input folder or the albedo map's folder.")
    parser.add_argument("--name", default=OUTPUT_NAME, help=f"Output file name without extension (default: {OUTPUT_NAME}).")
    parser.add_argument("--brightness", type=float, default=BRIGHTNESS, help="Multiplier applied to every sampled pixel; not clamped.")
    parser.add_argument("--file-type", default=None, help="Output file type: png or tga.")
    parser.add_argument("--preview", dest="preview", action="store_true", default=True, help="Save a preview next to the mask map (default).")
    parser.add_argument("--no-preview", dest="preview", action="store_false", help="Skip the preview.")
    parser.add_argument("--preview-size", type=int, default=PREVIEW_SIZE, help=f"Preview edge length (default: {PREVIEW_SIZE}).")
    parser.add_argument("--workers", type=int, default=WORKERS, help="Worker threads; 0 uses the CPU count.")
    return parser


def _resolve_sources(args: argparse.Namespace) -> Tuple[TextureSources, Optional[str]]:
# Explicit slot paths override files found in the input folder.

    input_folder: str = (args.input_folder or INPUT_FOLDER or "").strip()
    if input_folder and not os.path.isdir(input_folder):
        log(f"Aborted: Input folder does not exist: {input_folder}", "error")
        raise SystemExit(1)

    sources = find_source_maps(input_folder, args.texture_set) if input_folder else TextureSources()
    for slot, path in vars(args).items():
        if slot in sources.as_dict() and path:
            if not os.path.isfile(path):
                log(f"Aborted: {slot} texture not found: {path}", "error")
                raise SystemExit(1)
            setattr(sources, slot, os.path.abspath(path))
    return sources, (os.path.abspath(input_folder) if input_folder else None)


def main(argv: Optional[List[str]] = None) -> None:
    args = _build_parser().parse_args(argv)
    sources, input_folder = _resolve_sources(args)

    base_directory: str = args.out or input_folder or (os.path.dirname(sources.albedo) if sources.albedo else ".")
    validate_safe_folder_name(TARGET_FOLDER_NAME)
    output_directory = make_output_dir(base_directory, target_folder_name=TARGET_FOLDER_NAME)

    try:
        generate_mask_map(
            sources,
            output_directory,
            brightness=args.brightness,
            file_extension=args.file_type,
            output_name=args.name,
            preview_size=args.preview_size if args.preview else None,
            workers=args.workers,
        )
    except NullInputError as error:
        log(f"Please assign all textures before generating the mask map. {error}", "error")
        sys.exit(1)
    except (MaskMapError, ValueError) as error:
        log(f"Aborted: {error}", "error")
        # Prints error.
        sys.exit(1)
    except OSError as error:
        log(f"Aborted: cannot read or write image file – {error}", "error")
        sys.exit(1)

    log("", "info")  # Visual separator
    log("All processing done.", "complete")


if __name__ == "__main__":
    main()
