"""Tests for the console and image renderers."""

import io

import pytest
from PIL import Image

from qr_matrix import QRMatrix
from qr_render import image_size, matrix_to_image, print_matrix, save_matrix_as_image
from utils import parse_colour


def pixel_at(img, row, col, scale=10, quiet_zone=4):
    return img.getpixel(((col + quiet_zone) * scale + scale // 2, (row + quiet_zone) * scale + scale // 2))


def test_image_size():
    assert image_size(21) == 290
    img = matrix_to_image(QRMatrix(), scale=3, quiet_zone=2)
    assert img.size == (75, 75)


def test_image_colours():
    img = matrix_to_image(QRMatrix())
    assert img.getpixel((5, 5)) == (255, 255, 255)
    assert pixel_at(img, 0, 0) == (0, 0, 0)
    assert pixel_at(img, 1, 1) == (255, 255, 255)
    assert pixel_at(img, 13, 8) == (0, 0, 0)
    assert pixel_at(img, 10, 10) == (255, 255, 255)


def test_custom_colours():
    img = matrix_to_image(QRMatrix(), fg_colour="#102030", bg_colour="[97m")
    assert pixel_at(img, 0, 0) == (16, 32, 48)
    assert img.getpixel((0, 0)) == (255, 255, 255)


def test_bad_scale():
    with pytest.raises(ValueError):
        matrix_to_image(QRMatrix(), scale=0)


def test_save_to_buffer():
    buffer = io.BytesIO()
    save_matrix_as_image(QRMatrix(), buffer, scale=2)
    buffer.seek(0)
    img = Image.open(buffer)
    assert img.format == "PNG"
    assert img.size == (58, 58)


def test_save_to_file(tmp_path):
    path = tmp_path / "qr.png"
    save_matrix_as_image(QRMatrix(), str(path))
    with Image.open(path) as img:
        assert img.size == (290, 290)


def test_print_matrix(capsys):
    print_matrix(QRMatrix(), fg_char="#", bg_char=" ")
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 21
    assert lines[0] == "#######       #######"


def test_print_matrix_frame_and_scale(capsys):
    print_matrix(QRMatrix(), fg_char="#", bg_char=".", frame=True, scale=2)
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2 * 21 + 2
    assert lines[0] == "┌" + "─" * 42 + "┐"
    assert lines[1] == lines[2] == "│" + "#" * 14 + "." * 14 + "#" * 14 + "│"


@pytest.mark.parametrize("colour, expected", [
    ("#ff0000", (255, 0, 0)),
    ("Blue", (0, 0, 255)),
    ("\033[31m", (128, 0, 0)),
    ("[97m", (255, 255, 255)),
    ("90", (128, 128, 128)),
    (34, (0, 0, 128)),
])
def test_parse_colour(colour, expected):
    assert parse_colour(colour) == expected


@pytest.mark.parametrize("colour", ["", None, "#zzzzzz", "chartreuse", "12", 5])
def test_parse_colour_default(colour):
    assert parse_colour(colour, (1, 2, 3)) == (1, 2, 3)


def test_print_matrix_mixed_char_widths_stay_aligned(capsys):
    print_matrix(QRMatrix(), fg_char="[]", bg_char="_", frame=True)
    lines = capsys.readouterr().out.splitlines()
    assert len({len(line) for line in lines}) == 1
    assert len(lines[0]) == 21 * 2 + 2
    assert lines[1].startswith("│[][][][][][][]_ _ ")


def test_print_matrix_takes_chars_positionally(capsys):
    print_matrix(QRMatrix(), "#", " ")
    assert capsys.readouterr().out.splitlines()[0] == "#######       #######"
