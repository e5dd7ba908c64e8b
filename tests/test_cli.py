import os
from types import SimpleNamespace

import pytest
from PIL import Image

from img2ascii import cli, terminal
from img2ascii.cli import build_parser, main
from img2ascii.errors import ExitCode
from img2ascii.output import OutputFormat


@pytest.fixture
def red_png(tmp_path):
    path = tmp_path / "red.png"
    Image.new("RGB", (20, 20), (255, 0, 0)).save(path)
    return path


def run_main(argv):
    with pytest.raises(SystemExit) as exc:
        main([str(a) for a in argv])
    return exc.value.code


def test_prints_plain_art(red_png, capsys):
    assert run_main([red_png, "-w", "4"]) == ExitCode.OK
    out = capsys.readouterr().out
    assert out == "####\n####\n"


def test_colour_flag(red_png, capsys):
    assert run_main([red_png, "-w", "2", "--color"]) == ExitCode.OK
    assert capsys.readouterr().out == "\033[38;2;255;0;0m#\033[0m" * 2 + "\n"


def test_height_override(red_png, capsys):
    assert run_main([red_png, "-w", "3", "-H", "5"]) == ExitCode.OK
    assert capsys.readouterr().out == "###\n" * 5


def test_writes_output_file(red_png, tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert run_main([red_png, "-w", "2", "-o", "txt"]) == ExitCode.OK
    captured = capsys.readouterr()
    assert (tmp_path / "red.txt").read_text(encoding="utf-8") == "##\n"
    assert "Saved output to red.txt" in captured.err
    assert captured.out == "##\n"


def test_writes_html_file(red_png, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert run_main([red_png, "-w", "2", "-o", "html"]) == ExitCode.OK
    assert '<span style="color: rgb(255,0,0)">#</span>' in (tmp_path / "red.html").read_text(encoding="utf-8")


def test_missing_file(tmp_path, capsys):
    assert run_main([tmp_path / "nope.png"]) == ExitCode.NOT_FOUND
    assert "File not found" in capsys.readouterr().err


def test_unsupported_format(tmp_path, capsys):
    path = tmp_path / "notes.png"
    path.write_text("not an image")
    assert run_main([path]) == ExitCode.UNSUPPORTED
    assert "Unsupported image format" in capsys.readouterr().err


def test_collapsed_height_is_zero_dimension(tmp_path, capsys):
    path = tmp_path / "strip.png"
    Image.new("RGB", (1000, 10), (0, 0, 0)).save(path)
    assert run_main([path, "-w", "5"]) == ExitCode.ZERO_DIMENSION
    assert capsys.readouterr().out == ""


def test_edges_flag(tmp_path, capsys):
    path = tmp_path / "step.png"
    img = Image.new("RGB", (12, 8), (0, 0, 0))
    img.paste((255, 255, 255), (6, 0, 12, 8))
    img.save(path)
    assert run_main([path, "-w", "12", "-H", "8", "--edges", "--edge-threshold", "50"]) == ExitCode.OK
    lines = capsys.readouterr().out.splitlines()
    assert lines[3] == "     --     "


def test_parser_defaults():
    args = build_parser().parse_args(["img.png"])
    assert args.width is None
    assert args.height is None
    assert args.colour is False
    assert args.edges is False
    assert args.edge_threshold == 100
    assert args.output is None


def test_parser_output_format():
    args = build_parser().parse_args(["img.png", "--output", "ansi", "--colour"])
    assert args.output is OutputFormat.ANSI
    assert args.colour is True


@pytest.mark.parametrize("argv", [["img.png", "--edge-threshold", "300"], ["img.png", "-w", "0"], ["img.png", "-o", "pdf"]])
def test_parser_rejects_bad_values(argv):
    with pytest.raises(SystemExit):
        build_parser().parse_args(argv)


def test_default_width_when_not_a_tty(red_png, capsys):
    assert run_main([red_png]) == ExitCode.OK
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 34  # 80 * 0.43 = 34.4
    assert all(line == "#" * 80 for line in lines)


def test_zero_terminal_width_is_zero_dimension(red_png, monkeypatch, capsys):
    monkeypatch.setattr(cli, "get_terminal_width", lambda: 0)
    assert run_main([red_png]) == ExitCode.ZERO_DIMENSION
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Error:" in captured.err


def test_terminal_width_falls_back_on_zero_columns(monkeypatch):
    monkeypatch.setattr(terminal, "sys", SimpleNamespace(stdout=SimpleNamespace(isatty=lambda: True)))
    monkeypatch.setattr(terminal.os, "get_terminal_size", lambda: os.terminal_size((0, 0)))
    assert terminal.get_terminal_width() == 80
