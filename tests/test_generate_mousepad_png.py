from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from mousepad_grid import generate_mousepad_png as cli
from mousepad_grid.utils import EXIT_CONFIG_ERROR, EXIT_GENERAL_ERROR, EXIT_SUCCESS

SMALL = ["--width", "100", "--height", "80", "--grid_pitch", "20", "--line_thickness", "3"]


def _summary(out: str) -> dict:
    lines = out.splitlines()
    start = lines.index("{")
    return json.loads("\n".join(lines[start:]))


@pytest.mark.parametrize(
    "filename, lat, lon",
    [
        ("mousepad.png", "mousepad_lat.png", "mousepad_lon.png"),
        ("a.b.png", "a_lat.b.png", "a_lon.b.png"),
        ("grid", "grid_lat", "grid_lon"),
    ],
)
def test_split_output_filename(filename, lat, lon):
    assert cli.split_output_filename(filename) == (lat, lon)


def test_split_output_paths_keep_directory():
    lat, lon = cli.split_output_paths(Path("out.d") / "pad.png")

    assert lat == Path("out.d") / "pad_lat.png"
    assert lon == Path("out.d") / "pad_lon.png"


def test_plan_outputs():
    assert cli.plan_outputs(Path("m.png"), False) == [("combined", Path("m.png"), True, True)]
    assert cli.plan_outputs(Path("m.png"), True) == [
        ("latitude", Path("m_lat.png"), True, False),
        ("longitude", Path("m_lon.png"), False, True),
    ]


def test_main_writes_combined_png(tmp_path: Path, capsys):
    out = tmp_path / "pad.png"

    code = cli.main(SMALL + ["--output", str(out), "--log_level", "fatal"])

    assert code == EXIT_SUCCESS
    with Image.open(out) as img:
        assert img.mode == "RGBA"
        assert img.size == (100, 80)
    summary = _summary(capsys.readouterr().out)
    assert summary["status"] == "success"
    assert summary["outputs"] == {"combined": str(out)}
    assert summary["geometry"]["longitude_line_count"] == 5


def test_main_separate_files(tmp_path: Path, capsys):
    out = tmp_path / "pad.png"

    code = cli.main(SMALL + ["--output", str(out), "--separate_files", "--log_level", "fatal"])

    assert code == EXIT_SUCCESS
    assert not out.exists()
    with Image.open(tmp_path / "pad_lat.png") as img:
        lat = np.array(img)
    with Image.open(tmp_path / "pad_lon.png") as img:
        lon = np.array(img)
    blue = np.array([0, 0, 255, 255], dtype=np.uint8)
    red = np.array([255, 0, 0, 255], dtype=np.uint8)
    assert (lat == blue).all(axis=-1).any()
    assert not (lat == red).all(axis=-1).any()
    assert (lon == red).all(axis=-1).any()
    assert not (lon == blue).all(axis=-1).any()


def test_main_rejects_pitch_not_above_thickness(tmp_path: Path, capsys):
    out = tmp_path / "pad.png"

    code = cli.main(["--grid_pitch", "5", "--line_thickness", "5", "--output", str(out)])

    assert code == EXIT_CONFIG_ERROR
    assert not out.exists()
    summary = _summary(capsys.readouterr().out)
    assert summary["status"] == "error"
    assert "grid_pitch" in summary["error"]


def test_main_rejects_bad_color(tmp_path: Path, capsys):
    code = cli.main(["--border_color", "00ff00", "--output", str(tmp_path / "pad.png"), "--log_level", "fatal"])

    assert code == EXIT_CONFIG_ERROR
    assert not (tmp_path / "pad.png").exists()


def test_main_reads_yaml_and_flags_win(tmp_path: Path, capsys):
    config = tmp_path / "pad.yaml"
    config.write_text(
        "width: 200\nheight: 120\ngrid_pitch: 30\nline_thickness: 4\n"
        'horizontal_color: "000000ff"\nseparate_files: true\n'
        f"output: {tmp_path / 'from_yaml.png'}\n",
        encoding="utf-8",
    )

    code = cli.main(["--config", str(config), "--width", "150", "--log_level", "fatal"])

    assert code == EXIT_SUCCESS
    with Image.open(tmp_path / "from_yaml_lat.png") as img:
        assert img.size == (150, 120)
        pixels = np.array(img)
    assert (pixels == np.array([0, 0, 0, 255], dtype=np.uint8)).all(axis=-1).any()
    assert (tmp_path / "from_yaml_lon.png").exists()


def test_main_missing_config_file_is_a_config_error(tmp_path: Path, capsys):
    code = cli.main(["--config", str(tmp_path / "missing.yaml"), "--log_level", "fatal"])

    assert code == EXIT_CONFIG_ERROR


def test_main_density_sets_pitch(tmp_path: Path, capsys):
    code = cli.main(["--density", "coarse", "--dpi", "300", "--line_thickness", "2", "--dry_run",
                     "--output", str(tmp_path / "pad.png"), "--log_level", "fatal"])

    assert code == EXIT_SUCCESS
    summary = _summary(capsys.readouterr().out)
    assert summary["status"] == "dry_run"
    assert summary["geometry"]["longitude_line_count"] == 800 // 12
    assert not (tmp_path / "pad.png").exists()


def test_explicit_pitch_wins_over_density(tmp_path: Path):
    args = cli.build_parser().parse_args(["--density", "fine", "--grid_pitch", "40"])

    settings = cli.resolve_settings(args)

    assert settings["grid_pitch"] == 40


def test_cli_density_replaces_pitch_from_file(tmp_path: Path):
    config = tmp_path / "pad.yaml"
    config.write_text("grid_pitch: 90\n", encoding="utf-8")
    args = cli.build_parser().parse_args(["--config", str(config), "--density", "medium", "--dpi", "600"])

    settings = cli.resolve_settings(args)

    assert settings["grid_pitch"] == 10


def test_main_reports_write_failure(tmp_path: Path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    code = cli.main(SMALL + ["--output", str(blocker / "pad.png"), "--log_level", "fatal"])

    assert code == EXIT_GENERAL_ERROR
    assert _summary(capsys.readouterr().out)["status"] == "error"


def test_log_file_receives_records(tmp_path: Path, capsys):
    log_file = tmp_path / "logs" / "mousepad.log"

    code = cli.main(SMALL + ["--output", str(tmp_path / "pad.png"), "--log_file", str(log_file)])

    assert code == EXIT_SUCCESS
    assert "Wrote combined image" in log_file.read_text(encoding="utf-8")


def test_main_non_integer_dpi_in_yaml_is_a_config_error(tmp_path: Path, capsys):
    config = tmp_path / "pad.yaml"
    config.write_text('density: coarse\ndpi: "high"\n', encoding="utf-8")

    code = cli.main(["--config", str(config), "--dry_run", "--log_level", "fatal"])

    assert code == EXIT_CONFIG_ERROR
    summary = _summary(capsys.readouterr().out)
    assert summary["status"] == "error"
    assert "dpi" in summary["error"]


def test_main_quoted_false_border_is_a_config_error(tmp_path: Path, capsys):
    config = tmp_path / "pad.yaml"
    out = tmp_path / "pad.png"
    config.write_text(
        f'width: 50\nheight: 50\ninclude_border: "false"\noutput: {out}\n', encoding="utf-8"
    )

    code = cli.main(["--config", str(config), "--log_level", "fatal"])

    assert code == EXIT_CONFIG_ERROR
    assert not out.exists()
    assert "include_border" in _summary(capsys.readouterr().out)["error"]


def test_main_yaml_false_border_leaves_corner_transparent(tmp_path: Path, capsys):
    config = tmp_path / "pad.yaml"
    out = tmp_path / "pad.png"
    config.write_text(f"width: 50\nheight: 50\ninclude_border: false\noutput: {out}\n", encoding="utf-8")

    code = cli.main(["--config", str(config), "--log_level", "fatal"])

    assert code == EXIT_SUCCESS
    with Image.open(out) as img:
        assert img.getpixel((0, 0)) == (0, 0, 0, 0)


def test_main_quoted_false_separate_files_is_a_config_error(tmp_path: Path, capsys):
    config = tmp_path / "pad.yaml"
    out = tmp_path / "pad.png"
    config.write_text(f'separate_files: "false"\noutput: {out}\n', encoding="utf-8")

    code = cli.main(["--config", str(config), "--log_level", "fatal"])

    assert code == EXIT_CONFIG_ERROR
    assert not (tmp_path / "pad_lat.png").exists()
    assert "separate_files" in _summary(capsys.readouterr().out)["error"]
