from __future__ import annotations

from pathlib import Path

from conftest import copper_frame_lines, make_con_text, two_frame_text, water_frame_lines, write_text
from typer.testing import CliRunner

from readcon.cli.main import app
from readcon.codecs.con import parse_whole


def test_version() -> None:
    import readcon

    result = CliRunner().invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == readcon.__version__


def test_summary_reports_last_frame(tmp_path: Path) -> None:
    p = write_text(tmp_path / "two.con", two_frame_text())

    result = CliRunner().invoke(app, ["summary", str(p)])

    assert result.exit_code == 0, result.output
    assert "frames: 2" in result.stdout
    assert "cell: 3.610000 3.610000 12.500000" in result.stdout
    assert "Cu x2 (mass 63.546)" in result.stdout
    assert "H x1 (mass 1.008)" in result.stdout
    assert "atoms: 3" in result.stdout


def test_summary_stops_at_malformed_frame_by_default(tmp_path: Path) -> None:
    p = write_text(tmp_path / "bad.con", make_con_text(water_frame_lines(), copper_frame_lines()[:5]))

    result = CliRunner().invoke(app, ["summary", str(p)])

    assert result.exit_code == 0, result.output
    assert "frames: 1" in result.stdout
    assert "O x1 (mass 15.999)" in result.stdout


def test_summary_strict_fails_on_malformed_frame(tmp_path: Path) -> None:
    p = write_text(tmp_path / "bad.con", make_con_text(water_frame_lines(), copper_frame_lines()[:5]))

    result = CliRunner().invoke(app, ["summary", str(p), "--strict"])

    assert result.exit_code == 2


def test_summary_without_frames_exits_1(tmp_path: Path) -> None:
    p = write_text(tmp_path / "empty.con", "\n")
    result = CliRunner().invoke(app, ["summary", str(p)])
    assert result.exit_code == 1


def test_summary_missing_file_is_bad_parameter(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["summary", str(tmp_path / "missing.con")])
    assert result.exit_code == 2


def test_convert_roundtrip(tmp_path: Path) -> None:
    src = write_text(tmp_path / "in.con", two_frame_text())
    dst = tmp_path / "out.con"

    result = CliRunner().invoke(app, ["convert", str(src), str(dst)])

    assert result.exit_code == 0, result.output
    assert parse_whole(dst) == parse_whole(src)


def test_convert_skip_and_every(tmp_path: Path) -> None:
    frames_text = make_con_text(
        water_frame_lines(),
        copper_frame_lines(),
        water_frame_lines(),
        copper_frame_lines(),
        water_frame_lines(),
    )
    src = write_text(tmp_path / "in.con", frames_text)
    originals = parse_whole(src)

    dst = tmp_path / "thin.con"
    result = CliRunner().invoke(app, ["convert", str(src), str(dst), "--skip", "1", "--every", "2"])

    assert result.exit_code == 0, result.output
    assert parse_whole(dst) == [originals[1], originals[3]]


def test_convert_refuses_to_overwrite_its_input(tmp_path: Path) -> None:
    p = write_text(tmp_path / "in.con", two_frame_text())
    before = p.read_text(encoding="utf-8")

    result = CliRunner().invoke(app, ["convert", str(p), str(tmp_path / "." / "in.con")])

    assert result.exit_code == 2
    assert p.read_text(encoding="utf-8") == before
    assert len(parse_whole(p)) == 2


def test_summary_counts_frames_of_longer_trajectory(tmp_path: Path) -> None:
    p = write_text(
        tmp_path / "many.con",
        make_con_text(*([water_frame_lines()] * 4), copper_frame_lines()),
    )

    result = CliRunner().invoke(app, ["summary", str(p)])

    assert result.exit_code == 0, result.output
    assert "frames: 5" in result.stdout
    assert "Cu x2 (mass 63.546)" in result.stdout


def test_convert_malformed_input_is_bad_parameter(tmp_path: Path) -> None:
    src = write_text(tmp_path / "in.con", make_con_text(water_frame_lines()[:3]))
    result = CliRunner().invoke(app, ["convert", str(src), str(tmp_path / "out.con")])
    assert result.exit_code == 2
