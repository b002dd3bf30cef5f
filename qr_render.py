"""
QR rendering module.

Prints a matrix to the console and rasterises it to an image with Pillow.
Both renderers only read module colours.
"""

import logging

from PIL import Image, ImageDraw

from utils import parse_colour

log = logging.getLogger("qrv1.render")

# Light border around the symbol, in modules
QUIET_ZONE = 4

# Pixels per module
DEFAULT_SCALE = 10


def print_matrix(matrix,
                 fg_char='██', bg_char='  ',
                 fg_colour='', bg_colour='',
                 reset_colour='\033[0m',
                 frame=False, scale=1):
    """
    Render a QR matrix to the console with optional formatting.

    Module characters of different lengths are padded with spaces to the
    longer one so rows and the frame stay aligned.

    @param matrix: QRMatrix to display
    @param fg_char: Character(s) for dark modules
    @param bg_char: Character(s) for light modules
    @param fg_colour: ANSI colour prefix for dark modules
    @param bg_colour: ANSI colour prefix for light modules
    @param reset_colour: ANSI reset code, emitted only when a colour is set
    @param frame: Draw a box around the symbol
    @param scale: Module scaling factor
    """
    cell_width = max(len(fg_char), len(bg_char))
    fg = f"{fg_colour}{fg_char.ljust(cell_width) * scale}"
    bg = f"{bg_colour}{bg_char.ljust(cell_width) * scale}"
    reset = reset_colour if (fg_colour or bg_colour) else ''
    rows = matrix.to_rows()
    width = len(rows[0]) * scale * cell_width

    if frame:
        print('┌' + '─' * width + '┐')

    for row in rows:
        line = ''.join(fg if v else bg for v in row) + reset
        for _ in range(scale):
            print('│' + line + '│' if frame else line)

    if frame:
        print('└' + '─' * width + '┘')


def image_size(size: int, scale: int = DEFAULT_SCALE, quiet_zone: int = QUIET_ZONE) -> int:
    return (size + 2 * quiet_zone) * scale


def matrix_to_image(matrix, scale=DEFAULT_SCALE, quiet_zone=QUIET_ZONE,
                    fg_colour='', bg_colour=''):
    """
    Draw the matrix onto a new Pillow image.

    @param matrix: QRMatrix to draw
    @param scale: Pixels per module
    @param quiet_zone: Light border width in modules
    @param fg_colour: Dark module colour (hex, name or ANSI code), black by default
    @param bg_colour: Light module colour, white by default
    @return: PIL.Image.Image in RGB mode
    """
    if scale < 1:
        raise ValueError(f"scale must be at least 1, got {scale}")
    fg_rgb = parse_colour(fg_colour, (0, 0, 0))
    bg_rgb = parse_colour(bg_colour, (255, 255, 255))
    side = image_size(matrix.size, scale, quiet_zone)
    offset = quiet_zone * scale

    img = Image.new("RGB", (side, side), bg_rgb)
    draw = ImageDraw.Draw(img)
    for r in range(matrix.size):
        for c in range(matrix.size):
            if matrix.get_module(r, c):
                x = c * scale + offset
                y = r * scale + offset
                draw.rectangle([x, y, x + scale - 1, y + scale - 1], fill=fg_rgb)
    return img


def save_matrix_as_image(matrix, filename="qr_output.png",
                         scale=DEFAULT_SCALE, quiet_zone=QUIET_ZONE,
                         fg_colour='', bg_colour=''):
    """
    Save the QR matrix as a PNG image using Pillow.

    @param matrix: QRMatrix to save
    @param filename: Path of the file, or a binary file object such as BytesIO
    @param scale: Pixels per module
    @param quiet_zone: Light border width in modules
    @param fg_colour: Dark module colour
    @param bg_colour: Light module colour
    """
    img = matrix_to_image(matrix, scale=scale, quiet_zone=quiet_zone,
                          fg_colour=fg_colour, bg_colour=bg_colour)
    img.save(filename, format="PNG")
    log.info("Saved %dx%d QR image to %s", img.width, img.height, filename)
