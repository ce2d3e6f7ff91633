import os

import pytest
from PIL import Image

from backend.texture_classes import TextureSources
from core import DimensionMismatchError, NullInputError
from mask_map_generator import generate_mask_map, main


@pytest.fixture
def source_maps(write_image):
    return TextureSources(
        albedo=write_image("Rock_Albedo.png", (255, 10, 20, 255)),
        normal=write_image("Rock_Normal.png", (30, 255, 40, 255)),
        metallic=write_image("Rock_Metallic.png", (50, 60, 255, 255)),
        roughness=write_image("Rock_Roughness.png", 128, mode="L"),
        ao=write_image("Rock_AO.png", 200, size=(2, 2), mode="L"),
    )


def test_generate_mask_map_saves_full_resolution_and_preview(tmp_path, source_maps):
    result = generate_mask_map(source_maps, str(tmp_path / "out"), brightness=1.0, file_extension="png",
                               output_name="mask_map", preview_size=8, workers=2)

    assert result.resolution == (4, 4)
    assert result.source_resolutions["ao"] == (2, 2)
    assert os.path.basename(result.mask_map_path) == "mask_map.png"
    assert os.path.basename(result.preview_path) == "mask_map_preview.png"

    with Image.open(result.mask_map_path) as mask_map:
        assert mask_map.size == (4, 4)
        assert mask_map.getpixel((3, 3)) == (255, 255, 255, 128)
    with Image.open(result.preview_path) as preview:
        assert preview.size == (8, 8)
        assert preview.getpixel((0, 7)) == (255, 255, 255, 128)


def test_generate_mask_map_applies_brightness(tmp_path, source_maps):
    result = generate_mask_map(source_maps, str(tmp_path), brightness=0.5, file_extension="png", preview_size=None)

    assert result.preview_path is None
    with Image.open(result.mask_map_path) as mask_map:
        assert mask_map.getpixel((0, 0)) == (128, 128, 128, 64)


def test_generate_mask_map_without_ao(tmp_path, source_maps, capsys):
    source_maps.ao = None

    result = generate_mask_map(source_maps, str(tmp_path), file_extension="png", preview_size=None)

    assert os.path.isfile(result.mask_map_path)
    assert "No AO texture assigned" in capsys.readouterr().out


def test_generate_mask_map_rejects_mismatched_sizes(tmp_path, source_maps, write_image):
    source_maps.normal = write_image("Rock_Normal_Large.png", (0, 255, 0, 255), size=(8, 8))

    with pytest.raises(DimensionMismatchError):
        generate_mask_map(source_maps, str(tmp_path / "out"), file_extension="png")

    assert not os.path.exists(tmp_path / "out" / "mask_map.png")


def test_generate_mask_map_rejects_missing_maps(tmp_path, source_maps):
    source_maps.metallic = None

    with pytest.raises(NullInputError):
        generate_mask_map(source_maps, str(tmp_path), file_extension="png")


def test_main_scans_input_folder(tmp_path, source_maps, capsys):
    main([str(tmp_path), "--no-preview", "--name", "Rock_MaskMap"])

    output_path = tmp_path / "Rock_MaskMap.png"
    assert output_path.is_file()
    assert not (tmp_path / "Rock_MaskMap_preview.png").exists()
    assert "All processing done." in capsys.readouterr().out


def test_main_explicit_paths_override_folder(tmp_path, source_maps, write_image):
    brighter_albedo = write_image("Other.png", (100, 0, 0, 255))

    main([str(tmp_path), "--albedo", brighter_albedo, "--out", str(tmp_path / "packed"), "--preview-size", "2"])

    with Image.open(tmp_path / "packed" / "mask_map.png") as mask_map:
        assert mask_map.getpixel((1, 1))[0] == 100
    with Image.open(tmp_path / "packed" / "mask_map_preview.png") as preview:
        assert preview.size == (2, 2)


def test_main_exits_when_maps_are_missing(tmp_path, write_image, capsys):
    albedo = write_image("Solo_Albedo.png", (255, 0, 0, 255))

    with pytest.raises(SystemExit) as exit_info:
        main(["--albedo", albedo, "--out", str(tmp_path)])

    assert exit_info.value.code == 1
    assert "Please assign all textures" in capsys.readouterr().out


def test_main_exits_on_size_mismatch(tmp_path, source_maps, write_image, capsys):
    large = write_image("Large.png", (0, 0, 0, 255), size=(16, 16))

    with pytest.raises(SystemExit) as exit_info:
        main([str(tmp_path), "--roughness", large])

    assert exit_info.value.code == 1
    assert "expected 4x4" in capsys.readouterr().out


def test_main_rejects_jpeg_output(tmp_path, source_maps):
    with pytest.raises(SystemExit):
        main([str(tmp_path), "--file-type", "jpg"])


@pytest.mark.parametrize("preview_size", [-4, -1])
def test_main_rejects_bad_preview_size_before_writing(tmp_path, source_maps, capsys, preview_size):
    with pytest.raises(SystemExit) as exit_info:
        main([str(tmp_path), "--preview-size", str(preview_size)])

    assert exit_info.value.code == 1
    assert not (tmp_path / "mask_map.png").exists()
    assert "Preview size must be at least 1" in capsys.readouterr().out


def test_generate_mask_map_zero_preview_size_skips_preview(tmp_path, source_maps):
    result = generate_mask_map(source_maps, str(tmp_path / "out"), file_extension="png", preview_size=0)

    assert result.preview_path is None
    assert os.listdir(tmp_path / "out") == ["mask_map.png"]


def test_main_uses_requested_texture_set(tmp_path, source_maps, write_image):
    for slot in ("Albedo", "Normal", "Metallic", "Roughness"):
        write_image(f"Wood_{slot}.png", (60, 60, 60, 255), size=(2, 2))

    main([str(tmp_path), "--set", "Wood", "--no-preview", "--name", "Wood_MaskMap"])

    with Image.open(tmp_path / "Wood_MaskMap.png") as mask_map:
        assert mask_map.size == (2, 2)
        assert mask_map.getpixel((0, 0)) == (60, 60, 60, 60)
