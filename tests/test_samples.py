"""Testsuite for svg2vd.

This module tests conversion of the sample SVG files in `samples/` into
VectorDrawable files, comparing against the expected `.xml` next to each
sample, and the command-line interface.

Run with one of these lines from inside the project directory:

    $ pytest -v -s tests/test_samples.py
"""

import glob
import io
import logging
import pathlib
import sys
from os.path import basename, dirname, exists, join, splitext

import pytest

import svg2vd as package
from svg2vd import svg2vd

TEST_ROOT = dirname(__file__)
SAMPLES = join(TEST_ROOT, "samples")


def sample_paths():
    "Return the sample SVG files having an expected drawable."

    paths = sorted(glob.glob(join(SAMPLES, "*.svg")))
    return [p for p in paths if exists(splitext(p)[0] + ".xml")]


def expected_for(path: str) -> str:
    with open(splitext(path)[0] + ".xml", encoding="utf-8") as fp:
        return fp.read()


def run_main(monkeypatch, args, stdin=b""):
    "Run the command-line entry point with the given arguments and stdin."

    monkeypatch.setattr(sys, "argv", ["svg2vd"] + list(args))
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(stdin)))
    package.main()


class TestSamples:
    "Tests on the bundled sample files."

    @pytest.mark.parametrize("path", sample_paths(), ids=basename)
    def test_convert_file(self, path):
        drawable = svg2vd.svg2vd(path)
        assert drawable + "\n" == expected_for(path)

    @pytest.mark.parametrize("path", sample_paths(), ids=basename)
    def test_convert_pathlib(self, path):
        drawable = svg2vd.svg2vd(pathlib.Path(path))
        assert drawable + "\n" == expected_for(path)

    def test_convert_filelike(self):
        path = join(SAMPLES, "square.svg")
        with open(path, "rb") as fp:
            drawable = svg2vd.svg2vd(fp)
        assert drawable + "\n" == expected_for(path)

    @pytest.mark.parametrize("path", sample_paths(), ids=basename)
    def test_deterministic(self, path):
        with open(path, encoding="utf-8") as fp:
            text = fp.read()
        assert svg2vd.svgstring2vd(text) == svg2vd.svgstring2vd(text)

    def test_width_height_fallback(self):
        drawable = svg2vd.svg2vd(join(SAMPLES, "no-viewbox.svg"))
        assert 'android:width="10dp"' in drawable
        assert 'android:viewportHeight="10"' in drawable
        assert 'android:fillColor="#FF0000ff"' in drawable

    def test_missing_file(self, caplog):
        assert svg2vd.svg2vd(join(SAMPLES, "missing.svg")) is None
        assert "Failed to load input file!" in caplog.text


class TestOutputPath:
    def test_default_pattern(self):
        assert package.output_path("res/icon.svg") == "res/icon.xml"
        assert package.output_path("icon.svg") == "./icon.xml"

    def test_patterns(self):
        path = "in/ic_home.svg"
        assert package.output_path(path, "out/%(base)s.xml") == "out/ic_home.xml"
        assert package.output_path(path, "{dirname}/{base}-vd.xml") == (
            "in/ic_home-vd.xml"
        )
        assert package.output_path(path, "%(basename)s%(ext)s.xml") == (
            "ic_home.svg.svg.xml"
        )


class TestCommandLine:
    "Tests of the `svg2vd` command."

    def test_stdin_to_stdout(self, monkeypatch, capsys):
        path = join(SAMPLES, "square.svg")
        with open(path, "rb") as fp:
            run_main(monkeypatch, [], stdin=fp.read())
        assert capsys.readouterr().out == expected_for(path)

    def test_utf8_stdin(self, monkeypatch, capsys):
        svg = '<svg viewBox="0 0 8 8"><title>Größe</title><path d="M0 0h8"/></svg>'
        run_main(monkeypatch, [], stdin=svg.encode("utf-8"))
        out = capsys.readouterr().out
        assert out.endswith("</vector>\n")
        assert 'android:pathData="M0 0h8"' in out

    def test_stdin_to_output_file(self, monkeypatch, capsys, tmp_path):
        path = join(SAMPLES, "icon.svg")
        out_path = tmp_path / "icon.xml"
        with open(path, "rb") as fp:
            run_main(monkeypatch, ["-o", str(out_path)], stdin=fp.read())
        assert capsys.readouterr().out == ""
        assert out_path.read_text(encoding="utf-8") == expected_for(path)

    def test_input_files(self, monkeypatch, tmp_path):
        pattern = str(tmp_path / "%(base)s.xml")
        paths = sample_paths()
        run_main(monkeypatch, ["-o", pattern] + paths)
        for path in paths:
            out_path = tmp_path / (splitext(basename(path))[0] + ".xml")
            assert out_path.read_text(encoding="utf-8") == expected_for(path)

    def test_missing_viewbox(self, monkeypatch, capsys, caplog):
        svg = b'<svg><rect width="1" height="1"/></svg>'
        with pytest.raises(SystemExit) as exc_info:
            run_main(monkeypatch, [], stdin=svg)
        assert exc_info.value.code == 1
        assert capsys.readouterr().out == ""
        assert "viewBox" in caplog.text

    def test_invalid_utf8_stdin(self, monkeypatch, capsys):
        svg = b'<svg viewBox="0 0 4 4"><title>\xe9t\xe9</title>'
        svg += b'<rect width="1" height="1"/></svg>'
        run_main(monkeypatch, [], stdin=svg)
        out = capsys.readouterr().out
        assert 'android:pathData="M0,0 h1 v1 h-1 Z"' in out
        assert out.endswith("</vector>\n")

    def test_batch_continues_after_bad_file(self, monkeypatch, caplog, tmp_path):
        bad = tmp_path / "bad.svg"
        bad.write_text('<svg><rect width="1" height="1"/></svg>', encoding="utf-8")
        good = tmp_path / "good.svg"
        good.write_text(
            '<svg viewBox="0 0 2 2"><rect width="1" height="1"/></svg>',
            encoding="utf-8",
        )
        with pytest.raises(SystemExit) as exc_info:
            run_main(monkeypatch, [str(bad), str(good)])
        assert exc_info.value.code == 1
        assert not (tmp_path / "bad.xml").exists()
        assert "M0,0 h1 v1 h-1 Z" in (tmp_path / "good.xml").read_text(
            encoding="utf-8"
        )
        assert "bad.svg" in caplog.text

    def test_unparsable_input(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_main(monkeypatch, [], stdin=b"")
        assert exc_info.value.code == 1
        assert capsys.readouterr().out == ""

    def test_missing_input_file(self, monkeypatch, caplog, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            run_main(monkeypatch, [str(tmp_path / "nope.svg")])
        assert exc_info.value.code == 1
        assert "No such file" in caplog.text

    def test_version(self, monkeypatch, capsys):
        with pytest.raises(SystemExit):
            run_main(monkeypatch, ["--version"])
        assert capsys.readouterr().out.strip() == package.__version__

    def test_debug_logging(self, monkeypatch, capsys, caplog):
        caplog.set_level(logging.DEBUG, logger="svg2vd.svg2vd")
        run_main(
            monkeypatch,
            ["--debug"],
            stdin=b'<svg viewBox="0 0 4 4"><rect width="0" height="1"/></svg>',
        )
        assert "Ignoring node: rect" in caplog.text
        assert capsys.readouterr().out.endswith("</vector>\n")
