import io
import json

import cairo
import pytest

import offline


def lines(*fields):
    return io.StringIO("".join(json.dumps({"field": f}) + "\n" for f in fields))


@pytest.mark.parametrize("text, points", [
    ("72", 72.0),
    ("10pt", 10.0),
    ("1in", 72.0),
    ("25.4mm", 72.0),
])
def test_parse_unit(text, points):
    assert offline.parse_unit(text) == pytest.approx(points)


def test_png_nostdin(tmp_path):
    out = tmp_path / "gauge.png"
    status = offline.main([
        "-f", "png", "-s", "1in", "1in", "-d", "160",
        "-r", "80", "-n", "-o", str(out)])
    assert status == 0
    surface = cairo.ImageSurface.create_from_png(str(out))
    assert (surface.get_width(), surface.get_height()) == (160, 160)


@pytest.mark.parametrize("fmt", ["pdf", "svg", "ps"])
def test_vector_formats(tmp_path, fmt):
    out = tmp_path / ("gauge." + fmt)
    status = offline.main(["-f", fmt, "-s", "2in", "2in", "-r", "48", "-o", str(out)])
    assert status == 0
    assert out.stat().st_size > 0


def test_oneshot_reads_stdin(tmp_path):
    out = tmp_path / "gauge.svg"
    status = offline.main(
        ["-m", "oneshot", "-f", "svg", "-s", "100", "100", "-o", str(out)],
        stdin=lines(120.5))
    assert status == 0
    assert out.stat().st_size > 0


def test_sequence_writes_only_redraw_worthy_frames(tmp_path):
    out = tmp_path / "frames"
    status = offline.main(
        ["-m", "sequence", "-f", "png", "-s", "72", "72", "-o", str(out)],
        stdin=lines(0.2, 0.7, 12.1, 12.9, 13.0, 13.4))
    assert status == 0
    # first frame, then 12.1 and 13.0
    assert sorted(p.name for p in out.iterdir()) == ["0.png", "1.png", "2.png"]


def test_png_requires_output(capsys):
    status = offline.main(["-f", "png", "-s", "72", "72"])
    assert status == -1
    assert "PNG does not support streaming" in capsys.readouterr().err


def test_sequence_needs_png(tmp_path, capsys):
    status = offline.main(
        ["-m", "sequence", "-f", "pdf", "-s", "72", "72",
         "-o", str(tmp_path / "x.pdf")],
        stdin=lines(1))
    assert status == -1
    assert "Only PNG" in capsys.readouterr().err


def test_bad_reading(tmp_path, capsys):
    status = offline.main(
        ["-m", "oneshot", "-f", "svg", "-s", "72", "72",
         "-o", str(tmp_path / "x.svg")],
        stdin=io.StringIO("{\"strength\": 3}\n"))
    assert status == -1
    assert "Bad reading" in capsys.readouterr().err


def test_build_painter_options(tmp_path):
    prefs = tmp_path / "prefs.json"
    prefs.write_text(json.dumps({"theme_color": 2}))
    args = offline.make_parser().parse_args([
        "-f", "png", "-s", "72", "72", "--max-scale", "100",
        "--unit", "nT", "--caption", "Field", "-p", str(prefs)])
    painter = offline.build_painter(args, environ={})
    assert painter.renderer.max_scale == 100
    assert not painter.renderer.circle_shown
    assert painter.style["unit"] == "nT"
    assert painter.style["caption"] == "Field"
    r, g, b, a = painter.style["field_color"].get_rgba()
    assert (r, g, b) == pytest.approx((1.0, 0.6, 0.0))


def test_north_from_environment():
    args = offline.make_parser().parse_args(["-f", "png", "-s", "72", "72"])
    painter = offline.build_painter(args, environ={"GAUGE_SHOW_NORTH": "true"})
    assert painter.renderer.circle_shown


def test_mistyped_prefs_use_default_theme(tmp_path):
    prefs = tmp_path / "prefs.json"
    prefs.write_text(json.dumps({"theme_color": "2"}))
    args = offline.make_parser().parse_args(
        ["-f", "png", "-s", "72", "72", "-p", str(prefs)])
    painter = offline.build_painter(args, environ={})
    r, g, b, a = painter.style["field_color"].get_rgba()
    assert (r, g, b) == pytest.approx((0.0, 0.78, 0.63))

    out = tmp_path / "gauge.png"
    status = offline.main(
        ["-f", "png", "-s", "72", "72", "-p", str(prefs), "-o", str(out)])
    assert status == 0
    assert out.exists()


def test_bad_reading_still_finishes_vector_output(tmp_path):
    out = tmp_path / "x.svg"
    status = offline.main(
        ["-m", "oneshot", "-f", "svg", "-s", "72", "72", "-o", str(out)],
        stdin=io.StringIO("not json\n"))
    assert status == -1
    assert out.read_text().rstrip().endswith("</svg>")


@pytest.mark.parametrize("dpi", ["0", "-72"])
def test_non_positive_dpi(tmp_path, capsys, dpi):
    status = offline.main(
        ["-f", "png", "-s", "72", "72", "-d", dpi,
         "-o", str(tmp_path / "x.png")])
    assert status == -1
    assert "DPI must be positive" in capsys.readouterr().err
