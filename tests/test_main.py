"""Tests for the command line entrypoint."""

import pytest

import main
from data_encoder import make_data_bits
from module_placer import walk_positions


def test_build_qr_places_encoded_bits():
    matrix, bits = main.build_qr("hi")
    assert bits == make_data_bits("hi")
    free = [(r, c) for r, c in walk_positions() if not matrix.is_function_module(r, c)]
    assert [matrix.get_module(r, c) for r, c in free[:len(bits)]] == bits
    assert not any(matrix.get_module(r, c) for r, c in free[len(bits):])


def test_build_qr_rejects_long_text():
    with pytest.raises(ValueError):
        main.build_qr("x" * 40)


def feed(monkeypatch, answers):
    replies = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(replies))


def test_main_writes_png(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    feed(monkeypatch, ["", "hi", "n", "n"])
    main.main()
    assert (tmp_path / main.OUTPUT_FILE).exists()
    assert "QR code saved as" in capsys.readouterr().out


def test_main_explain_and_customise(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    feed(monkeypatch, ["", "hi", "y", "y", "2", "y", "n", "[30m", "#ffffff", "", "", ""])
    main.main()
    out = capsys.readouterr().out
    assert "Step 1: Data bitstream." in out
    assert "Step 3: Data placement (152 bits, 238 free modules)." in out
    assert (tmp_path / main.OUTPUT_FILE).exists()


def test_main_too_long(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    feed(monkeypatch, ["", "x" * 18])
    main.main()
    assert "Cannot encode input" in capsys.readouterr().out
    assert not (tmp_path / main.OUTPUT_FILE).exists()


def test_main_bad_scale(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    feed(monkeypatch, ["text", "hi", "n", "y", "9"])
    main.main()
    assert "Scale must be 1, 2, or 3." in capsys.readouterr().out


def test_main_sms_content_type(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    feed(monkeypatch, ["sms", "12345", "yo", "y", "n", "", "", ""])
    main.main()
    out = capsys.readouterr().out
    expected = "".join(f"{b:08b}" for b in b"SMSTO:12345:yo")
    assert expected in out
    assert (tmp_path / main.OUTPUT_FILE).exists()


def test_main_unknown_content_type(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    feed(monkeypatch, ["vcard"])
    main.main()
    assert "unknown content type 'vcard'" in capsys.readouterr().out


def test_main_non_latin_text_does_not_blame_length(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    feed(monkeypatch, ["", "€", "n", "n"])
    main.main()
    out = capsys.readouterr().out
    assert "ISO-8859-1" in out
    assert "limit" not in out.split("Cannot encode input")[1]
    assert not (tmp_path / main.OUTPUT_FILE).exists()
