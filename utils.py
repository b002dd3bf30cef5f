"""
Utility functions for QR code rendering.

Includes colour conversion from hex strings, colour names and ANSI codes.
"""

ANSI_RGB_MAP = {
    30: (0, 0, 0),
    31: (128, 0, 0),
    32: (0, 128, 0),
    33: (128, 128, 0),
    34: (0, 0, 128),
    35: (128, 0, 128),
    36: (0, 128, 128),
    37: (192, 192, 192),
    90: (128, 128, 128),
    91: (255, 0, 0),
    92: (0, 255, 0),
    93: (255, 255, 0),
    94: (0, 0, 255),
    95: (255, 0, 255),
    96: (0, 255, 255),
    97: (255, 255, 255),
}

NAMED_COLOURS = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 255, 0),
    "blue": (0, 0, 255),
    "grey": (128, 128, 128),
    "gray": (128, 128, 128),
}


def parse_colour(colour, default=None):
    """
    Convert a hex string, colour name or ANSI colour code to an RGB tuple.

    @param colour: '#rrggbb', a name such as 'red', or an ANSI code ('\\033[31m', '31', 31)
    @param default: Value returned when the colour is empty or not understood
    @return: Tuple of (R, G, B) or default
    """
    if colour is None or colour == '':
        return default
    if isinstance(colour, str):
        text = colour.strip()
        if text.startswith('#') and len(text) == 7:
            try:
                return tuple(int(text[i:i + 2], 16) for i in (1, 3, 5))
            except ValueError:
                return default
        if text.lower() in NAMED_COLOURS:
            return NAMED_COLOURS[text.lower()]
        text = text.replace('\033', '').strip('[m')
        if not text.isdigit():
            return default
        colour = int(text)
    return ANSI_RGB_MAP.get(colour, default)
