"""
Command line entrypoint for the Version 1 QR Code Generator.

Handles user input and ties the encoder, matrix, placer and renderers together.
"""

import logging

from data_encoder import CONTENT_TYPES, make_data_bitstream, bitstring_to_bits, format_payload, max_text_length
from module_placer import place_data
from qr_matrix import QRMatrix
from qr_render import print_matrix, save_matrix_as_image

OUTPUT_FILE = "qr_output.png"

FIELD_PROMPTS = {
    "text": "Enter text to encode: ",
    "url": "Enter the URL: ",
    "to": "Email address: ",
    "subject": "Subject (optional): ",
    "body": "Body (optional): ",
    "number": "Phone number: ",
    "message": "Message (optional): ",
    "ssid": "Network name (SSID): ",
    "password": "Password (optional): ",
    "encryption": "Encryption (WPA, WEP or nopass): ",
}


def build_qr(text: str) -> tuple[QRMatrix, list[bool]]:
    """
    Encode text and place it into a fresh Version 1 matrix.

    @param text: Input text to encode
    @return: The filled matrix and the bits that were placed
    @raise ValueError: If the text cannot be encoded
    """
    bits = bitstring_to_bits(make_data_bitstream(text))
    matrix = QRMatrix()
    place_data(matrix, bits)
    return matrix, bits


def ask_payload() -> str:
    """
    Prompt for a content type and its fields and return the payload text.

    @raise ValueError: If the content type or fields are invalid, or the payload does not fit
    """
    content_type = input(f"Content type ({', '.join(CONTENT_TYPES)}) [text]: ").strip().lower() or "text"
    if content_type not in CONTENT_TYPES:
        raise ValueError(f"unknown content type {content_type!r}")
    fields = {name: input(FIELD_PROMPTS[name]).strip() for name in CONTENT_TYPES[content_type]}
    return format_payload(content_type, **fields)


def main():
    """
    Main entry point for the QR code generation program.

    1. Content type and field collection
    2. Customisation options
    3. Data encoding
    4. Matrix construction
    5. Data placement
    6. Console and PNG output
    """
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    print(f"Version 1 holds up to {max_text_length()} characters.")
    try:
        text = ask_payload()
    except ValueError as exc:
        print(f"Cannot encode input: {exc}")
        return

    # Ask the user if they want to see the process of the QR's creation.
    explain = input("Would you like to see the step-by-step of the QR code's creation? (y/n): ").strip().lower() == 'y'

    customise = input("Would you like to customise how the QR code is displayed? (y/n): ").strip().lower() == 'y'
    scale = 1
    frame = False
    fg_char = '██'
    bg_char = '  '
    fg_colour = ''
    bg_colour = ''
    if customise:
        try:
            scale = int(input("Would you like to scale the QR code? (1-3x): ") or "1")
        except ValueError:
            scale = 0
        if not 1 <= scale <= 3:
            print("Scale must be 1, 2, or 3.")
            return
        frame = input("Would you like to add a frame? (y/n): ").strip().lower() == 'y'
        if input("Would you like to change the characters of the modules in the QR code? (y/n): ").strip().lower() == 'y':
            fg_char = input("Enter the foreground character (e.g, # or []): ") or fg_char
            bg_char = input("Enter the background character (e.g. _ or SPACE): ") or bg_char
        fg_colour = input("Foreground colour (hex, name or ANSI code, e.g. [30m): ").strip()
        bg_colour = input("Background colour (hex, name or ANSI code, e.g. [97m): ").strip()

    # Step 1. Convert the input text to a QR data bitstream.
    try:
        bitstream = make_data_bitstream(text)
    except ValueError as exc:
        print(f"Cannot encode input: {exc}")
        return
    if explain:
        print("\nStep 1: Data bitstream.")
        print(bitstream)
        input("Press Enter to continue...")

    # Step 2. Build the matrix with its function patterns.
    matrix = QRMatrix()
    if explain:
        print("\nStep 2: Function patterns (finder, separators, timing, dark module).")
        print(matrix.to_string())
        input("Press Enter to continue...")

    # Step 3. Walk the free modules and place the data bits.
    placed = place_data(matrix, bitstring_to_bits(bitstream))
    if explain:
        print(f"\nStep 3: Data placement ({placed} bits, {matrix.free_module_count()} free modules).")
        print(matrix.to_string())
        input("Press Enter to continue...")

    print_matrix(
        matrix,
        fg_char=fg_char,
        bg_char=bg_char,
        fg_colour='\033' + fg_colour if fg_colour.startswith('[') else '',
        bg_colour='\033' + bg_colour if bg_colour.startswith('[') else '',
        frame=frame,
        scale=scale,
    )

    save_matrix_as_image(matrix, OUTPUT_FILE, fg_colour=fg_colour, bg_colour=bg_colour)
    print(f"\nQR code saved as: {OUTPUT_FILE}!")


if __name__ == '__main__':
    main()
