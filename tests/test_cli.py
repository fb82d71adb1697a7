import json
from pathlib import Path

import pytest
from PIL import Image

import calcomp_dump
import calcomp_pack
import calcomp_to_png
from calcomp.framer import BIAS, EOM, SYNC
from calcomp.instructions import Delta, PenChange, PenDown
from calcomp.reader import read_plot


def _write_spec(tmp_path, spec) -> Path:
    path = tmp_path / "spec.json"
    path.write_text(json.dumps(spec), encoding="utf-8")
    return path


SPEC = {
    "radix": 95,
    "records": [
        [{"op": "pen", "pen": 2}, {"op": "delta", "dx": 0, "dy": 40}, {"op": "pen_down"}, {"op": "delta", "dx": 60, "dy": 0}],
    ],
}


def test_pack_builds_a_decodable_plot(tmp_path, capsys) -> None:
    output = tmp_path / "drawing.plt"
    assert calcomp_pack.main([str(_write_spec(tmp_path, SPEC)), "-o", str(output)]) == 0
    assert "[+] Plot written to" in capsys.readouterr().out

    plot = read_plot(output)
    assert plot.errors == []
    assert plot.instructions == [PenChange(2), Delta(0, 40), PenDown(), Delta(60, 0)]


def test_pack_radix_override(tmp_path) -> None:
    output = tmp_path / "drawing.plt"
    calcomp_pack.main([str(_write_spec(tmp_path, SPEC)), "-o", str(output), "--radix", "50"])
    plot = read_plot(output, debug=True)
    assert "Radix: 50" in plot.trace
    assert plot.instructions[-1] == Delta(60, 0)


def test_to_png_with_instructions(tmp_path, capsys) -> None:
    plot_path = tmp_path / "drawing.plt"
    plot_path.write_bytes(calcomp_pack.build_from_spec(SPEC))
    png_path = tmp_path / "drawing.png"

    assert calcomp_to_png.main([str(plot_path), str(png_path), "--scale", "0.5", "--instructions"]) == 0

    with Image.open(png_path) as image:
        assert image.size == (30, 20)
    listing = (tmp_path / "drawing.txt").read_text(encoding="utf-8").splitlines()
    assert listing[0] == "Header record:"
    assert "Delta: DX 60, DY 0" in listing
    out = capsys.readouterr().out
    assert "[+] Plot written to" in out
    assert "[+] Plot instructions written to" in out


def test_to_png_reports_decode_errors(tmp_path, capsys) -> None:
    plot_path = tmp_path / "broken.plt"
    plot_path.write_bytes(calcomp_pack.build_from_spec(SPEC) + bytes([SYNC, 0x21, EOM]))
    png_path = tmp_path / "broken.png"

    assert calcomp_to_png.main([str(plot_path), str(png_path)]) == 0
    out = capsys.readouterr().out
    assert "1 error found when reading plot file:" in out
    assert png_path.exists()
    assert not (tmp_path / "broken.txt").exists()


def test_to_png_missing_input(tmp_path, capsys) -> None:
    assert calcomp_to_png.main([str(tmp_path / "nope.plt"), str(tmp_path / "nope.png")]) == 1
    assert "[error] File error" in capsys.readouterr().err


def test_dump_prints_trace(tmp_path, capsys) -> None:
    plot_path = tmp_path / "drawing.plt"
    plot_path.write_bytes(calcomp_pack.build_from_spec(SPEC))

    assert calcomp_dump.main([str(plot_path)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Header record:"
    assert "Pen change: 2" in out
    assert out[-1] == "[i] 4 instructions, extent 60 x 40"


def test_dump_limit_and_errors(tmp_path, capsys) -> None:
    plot_path = tmp_path / "broken.plt"
    plot_path.write_bytes(bytes([SYNC, BIAS, 0x22, 0x2F, EOM]))

    assert calcomp_dump.main([str(plot_path), "--limit", "1"]) == 1
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["Header record:", "[i] 1 instructions, extent 0 x 0"]
    assert "Unhandled value: 0x0f (record: 1)" in captured.err


def test_dump_errors_only(tmp_path, capsys) -> None:
    plot_path = tmp_path / "drawing.plt"
    plot_path.write_bytes(calcomp_pack.build_from_spec(SPEC))

    assert calcomp_dump.main([str(plot_path), "--errors-only"]) == 0
    assert capsys.readouterr().out.splitlines() == ["[i] 4 instructions, extent 60 x 40"]


@pytest.mark.parametrize(
    "text",
    ["[1]", "not json", json.dumps({"records": [["pen_down"]]}), json.dumps({"records": [], "radix": 1})],
)
def test_pack_rejects_malformed_spec(tmp_path, text) -> None:
    spec_path = tmp_path / "spec.json"
    spec_path.write_text(text, encoding="utf-8")
    output = tmp_path / "drawing.plt"

    with pytest.raises(SystemExit) as excinfo:
        calcomp_pack.main([str(spec_path), "-o", str(output)])
    assert str(excinfo.value.code).startswith("[error] ")
    assert not output.exists()


def test_dump_rejects_negative_limit(tmp_path, capsys) -> None:
    plot_path = tmp_path / "drawing.plt"
    plot_path.write_bytes(calcomp_pack.build_from_spec(SPEC))

    with pytest.raises(SystemExit) as excinfo:
        calcomp_dump.main([str(plot_path), "--limit", "-1"])
    assert excinfo.value.code == 2
    assert "Invalid limit: -1" in capsys.readouterr().err
