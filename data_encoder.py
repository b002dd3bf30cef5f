"""
Data encoding module.

Turns input text into the byte-mode bit sequence that the placer writes
into the matrix. No error correction codewords are appended.
"""

import logging
from urllib.parse import quote, urlencode

from qr_matrix import VERSION, VERSION_PARAMETERS

log = logging.getLogger("qrv1.encoder")

# Byte mode indicator
MODE_INDICATOR = '0100'

COUNT_INDICATOR_BITS = 8

TERMINATOR_BITS = 4

PAD_BYTES = ['11101100', '00010001']


def to_bitstring(data: bytes) -> str:
    """
    Convert a bytes object to a continuous bit string representation.

    @param data: Binary data to convert
    @return: String of binary digits representing the input data
    """
    return ''.join(f'{b:08b}' for b in data)


def capacity_bits(version: int = VERSION) -> int:
    return VERSION_PARAMETERS[version]["data_codewords"] * 8


def max_text_length(version: int = VERSION) -> int:
    """
    Longest text (in ISO-8859-1 bytes) that fits the version's data codewords.
    """
    header = len(MODE_INDICATOR) + COUNT_INDICATOR_BITS
    return (capacity_bits(version) - header) // 8


def make_data_bitstream(text: str, version: int = VERSION) -> str:
    """
    Build the byte-mode bitstream: mode indicator, length header, payload,
    terminator, and padding up to the version's data codeword count.

    @param text: Input text to encode
    @param version: QR code version
    @return: Bitstring of exactly data_codewords * 8 characters
    @raise ValueError: If the text does not fit or is not ISO-8859-1
    """
    try:
        payload = text.encode('iso-8859-1')
    except UnicodeEncodeError as exc:
        raise ValueError(f"text contains characters outside ISO-8859-1: {text[exc.start:exc.end]!r}") from exc
    limit = max_text_length(version)
    if len(payload) > limit:
        raise ValueError(f"text is {len(payload)} bytes, version {version} holds at most {limit}")

    max_bits = capacity_bits(version)
    bitstream = MODE_INDICATOR + f'{len(payload):0{COUNT_INDICATOR_BITS}b}' + to_bitstring(payload)
    bitstream += '0' * min(TERMINATOR_BITS, max_bits - len(bitstream))
    while len(bitstream) % 8:
        bitstream += '0'
    i = 0
    while len(bitstream) < max_bits:
        bitstream += PAD_BYTES[i % 2]
        i += 1
    log.debug("Encoded %d bytes into %d bits", len(payload), len(bitstream))
    return bitstream


def bitstring_to_bits(bitstring: str) -> list[bool]:
    return [b == '1' for b in bitstring]


def make_data_bits(text: str, version: int = VERSION) -> list[bool]:
    """
    Encode text straight to the boolean sequence consumed by place_data().
    """
    return bitstring_to_bits(make_data_bitstream(text, version))


# No vcard: BEGIN:VCARD and END:VCARD alone exceed the version 1 capacity.
# Secured wifi ("WIFI:T:WPA;S:a;P:b;;", 20 bytes) cannot fit either.
CONTENT_TYPES = {
    "text": ("text",),
    "url": ("url",),
    "email": ("to", "subject", "body"),
    "sms": ("number", "message"),
    "wifi": ("ssid", "password", "encryption"),
}

WIFI_ENCRYPTIONS = ("WPA", "WEP", "nopass")


def _escape_wifi(value: str) -> str:
    for ch in '\\;,:"':
        value = value.replace(ch, '\\' + ch)
    return value


def format_payload(content_type: str, version: int = VERSION, **fields) -> str:
    """
    Build the text payload for a content type.

    text and url are used as given, email becomes a mailto: URI, sms an
    SMSTO: string and wifi a WIFI:T:..;S:..;P:..;; string (WIFI:S:..;;
    for open networks). Empty optional fields are left out.

    @param content_type: One of CONTENT_TYPES
    @param version: QR code version whose capacity the payload must fit
    @param fields: Field values for the content type
    @return: Payload text ready for make_data_bitstream()
    @raise ValueError: Unknown content type or field, missing required
        field, or a payload longer than max_text_length()
    """
    if content_type not in CONTENT_TYPES:
        raise ValueError(f"unknown content type {content_type!r}, expected one of {', '.join(CONTENT_TYPES)}")
    unknown = set(fields) - set(CONTENT_TYPES[content_type])
    if unknown:
        raise ValueError(f"unexpected fields for {content_type}: {', '.join(sorted(unknown))}")
    required = CONTENT_TYPES[content_type][0]
    if not fields.get(required):
        raise ValueError(f"{content_type} payload needs a {required}")

    if content_type in ("text", "url"):
        payload = fields[required]
    elif content_type == "email":
        query = urlencode({k: fields[k] for k in ("subject", "body") if fields.get(k)}, quote_via=quote)
        payload = f"mailto:{fields['to']}" + (f"?{query}" if query else "")
    elif content_type == "sms":
        payload = f"SMSTO:{fields['number']}:{fields.get('message') or ''}"
    else:
        encryption = fields.get("encryption") or "WPA"
        if encryption not in WIFI_ENCRYPTIONS:
            raise ValueError(f"wifi encryption must be one of {', '.join(WIFI_ENCRYPTIONS)}")
        ssid = _escape_wifi(fields['ssid'])
        if encryption == "nopass":
            # T defaults to an open network
            payload = f"WIFI:S:{ssid};;"
        else:
            payload = f"WIFI:T:{encryption};S:{ssid};P:{_escape_wifi(fields.get('password') or '')};;"

    limit = max_text_length(version)
    if len(payload.encode('iso-8859-1', errors='replace')) > limit:
        raise ValueError(f"{content_type} payload {payload!r} is over the {limit} byte limit")
    log.debug("Formatted %s payload of %d characters", content_type, len(payload))
    return payload
