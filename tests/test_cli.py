"""Tests for the imgscheme command line front end."""

import signal
import threading

import pytest
from PIL import Image

import imgscheme


@pytest.fixture
def image_file(tmp_path):
    """4x1 RGB PNG: three black pixels and one white."""
    path = tmp_path / "bw.png"
    img = Image.new("RGB", (4, 1))
    img.putdata([(0, 0, 0), (0, 0, 0), (255, 255, 255), (0, 0, 0)])
    img.save(path)
    return path


@pytest.fixture
def dark_file(tmp_path):
    path = tmp_path / "dark.png"
    Image.new("RGB", (3, 2), (0x20, 0x20, 0x20)).save(path)
    return path


@pytest.fixture
def two_entry_base(tmp_path):
    path = tmp_path / "base.txt"
    path.write_text("#000000\n#FFFFFF", encoding="utf-8")
    return path


def test_custom_base_file(image_file, two_entry_base, capsys):
    code = imgscheme.main(
        [str(image_file), "--base-file", str(two_entry_base), "--any-size"]
    )
    out = capsys.readouterr().out
    assert code == 0
    assert out.splitlines() == ["#000000", "#ffffff"]


def test_default_base_has_sixteen_lines(dark_file, capsys):
    assert imgscheme.main([str(dark_file)]) == 0
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["#202020"] * 16
    assert "[scan]" in captured.err


def test_xrdb_format(dark_file, capsys):
    assert imgscheme.main([str(dark_file), "--base", "xterm", "--format", "xrdb"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "*color0: #202020"
    assert lines[15] == "*color15: #202020"


def test_output_file(dark_file, tmp_path, capsys):
    target = tmp_path / "scheme.txt"
    assert imgscheme.main([str(dark_file), "--output", str(target)]) == 0
    assert capsys.readouterr().out == ""
    assert target.read_text(encoding="utf-8") == "#202020\n" * 16


def test_list_bases(capsys):
    assert imgscheme.main(["--list-bases"]) == 0
    names = capsys.readouterr().out.split()
    assert "vga" in names
    assert "xterm" in names


def test_missing_image(tmp_path, capsys):
    assert imgscheme.main([str(tmp_path / "absent.png")]) == 2
    assert "not found" in capsys.readouterr().err


def test_unreadable_image(tmp_path, capsys):
    path = tmp_path / "not_an_image.png"
    path.write_text("hello", encoding="utf-8")
    assert imgscheme.main([str(path)]) == 2
    assert "cannot read image" in capsys.readouterr().err


def test_malformed_base_file(image_file, tmp_path, capsys):
    base = tmp_path / "bad.txt"
    base.write_text("#000000\n#12\n", encoding="utf-8")
    assert imgscheme.main([str(image_file), "--base-file", str(base)]) == 1
    assert "malformed triplet" in capsys.readouterr().err


def test_base_file_needs_sixteen_entries(image_file, two_entry_base, capsys):
    assert imgscheme.main([str(image_file), "--base-file", str(two_entry_base)]) == 1
    assert "expected 16" in capsys.readouterr().err


def test_unknown_base(image_file, capsys):
    assert imgscheme.main([str(image_file), "--base", "nope"]) == 1
    assert "unknown base scheme" in capsys.readouterr().err


def test_image_is_required():
    with pytest.raises(SystemExit) as excinfo:
        imgscheme.main([])
    assert excinfo.value.code == 2


class PresetEvent(threading.Event):
    """Event that starts out set, as if Ctrl-C arrived before the scan."""

    def __init__(self):
        super().__init__()
        self.set()


def test_cancelled_scan_prints_partial_scheme(dark_file, monkeypatch, capsys):
    monkeypatch.setattr(imgscheme.threading, "Event", PresetEvent)
    code = imgscheme.main([str(dark_file), "--block-rows", "1"])
    captured = capsys.readouterr()
    assert code == 0
    assert captured.out.splitlines() == ["#202020"] * 16
    assert "[warn] scan cancelled" in captured.err
    assert "(3 of 6 pixels counted)" in captured.err


def test_timeout_still_yields_full_scheme(dark_file, capsys):
    before = signal.getsignal(signal.SIGINT)
    code = imgscheme.main([str(dark_file), "--timeout", "0", "--block-rows", "1"])
    assert code == 0
    assert capsys.readouterr().out.splitlines() == ["#202020"] * 16
    assert signal.getsignal(signal.SIGINT) is before


def test_timer_and_sigint_set_the_token():
    before = signal.getsignal(signal.SIGINT)
    token = threading.Event()
    try:
        timer = imgscheme._install_cancellation(token, 0.0)
        assert timer is not None
        timer.join(5.0)
        assert token.is_set()

        token = threading.Event()
        assert imgscheme._install_cancellation(token, None) is None
        handler = signal.getsignal(signal.SIGINT)
        handler(signal.SIGINT, None)
        assert token.is_set()
    finally:
        signal.signal(signal.SIGINT, before)
