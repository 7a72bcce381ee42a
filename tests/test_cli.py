import io
import sys

import pytest
from PIL import Image

from asciiview.cli import main
from tests.conftest import encode, gradient_image


def _run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["asciiview", *argv])
    main()


def test_renders_image_for_default_terminal(monkeypatch, capsys, tmp_path):
    path = tmp_path / "gradient.png"
    gradient_image(30, 20).save(path)
    _run(monkeypatch, str(path))
    out = capsys.readouterr().out
    assert out.startswith("┌─ Image: 30x20 (png) ─┐")
    assert "(term: 80x24, max: 74x16)" in out


def test_explicit_size(monkeypatch, capsys, tmp_path):
    path = tmp_path / "gradient.png"
    gradient_image(20, 10).save(path)
    _run(monkeypatch, str(path), "-W", "40", "-H", "20")
    out = capsys.readouterr().out
    assert "ASCII: 40x10 (max: 40x20)" in out


def test_blocks_ramp(monkeypatch, capsys, tmp_path):
    path = tmp_path / "black.png"
    Image.new("L", (10, 10), 0).save(path)
    _run(monkeypatch, str(path), "-r", "blocks")
    body = capsys.readouterr().out.split("\n")[4:-1]
    assert set("".join(body)) == {"█"}


def test_reads_stdin_with_name_hint(monkeypatch, capsys):
    data = encode(gradient_image(12, 12), "GIF")
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))
    _run(monkeypatch, "-", "--name", "pic.gif")
    assert "(gif)" in capsys.readouterr().out


def test_missing_file(monkeypatch, capsys, tmp_path):
    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, str(tmp_path / "nope.png"))
    assert exc.value.code == 1
    assert "File not found" in capsys.readouterr().err


def test_not_an_image(monkeypatch, capsys, tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, str(path))
    assert exc.value.code == 1
    assert "Not an image" in capsys.readouterr().err


def test_undecodable_image(monkeypatch, capsys, tmp_path):
    path = tmp_path / "fake.png"
    path.write_text("hello")
    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, str(path))
    assert exc.value.code == 1
    assert "Error converting image" in capsys.readouterr().err


def test_config_file(monkeypatch, capsys, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("asciiview:\n  margin_columns: 10\n", encoding="utf-8")
    path = tmp_path / "gradient.png"
    gradient_image(10, 10).save(path)
    _run(monkeypatch, str(path), "-c", str(config))
    assert "max: 70x16" in capsys.readouterr().out


def test_invalid_config_file(monkeypatch, capsys, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("asciiview:\n  steepness: -1\n", encoding="utf-8")
    path = tmp_path / "gradient.png"
    gradient_image(10, 10).save(path)
    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, str(path), "-c", str(config))
    assert exc.value.code == 1
    assert "Invalid configuration" in capsys.readouterr().err


def test_malformed_config_file(monkeypatch, capsys, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("asciiview: [unclosed\n", encoding="utf-8")
    path = tmp_path / "gradient.png"
    gradient_image(10, 10).save(path)
    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, str(path), "-c", str(config))
    assert exc.value.code == 1
    assert "Invalid configuration" in capsys.readouterr().err


def test_config_file_not_a_mapping(monkeypatch, capsys, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("- 1\n- 2\n", encoding="utf-8")
    path = tmp_path / "gradient.png"
    gradient_image(10, 10).save(path)
    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, str(path), "-c", str(config))
    assert exc.value.code == 1
    assert "Invalid configuration" in capsys.readouterr().err
