"""Padding-tolerant base64 decoder for screenshot payloads.

Screenshots reach the service as ``data:image/png;base64,...`` strings. This
decoder is the single point where that text turns back into image bytes,
so it is written as an explicit bit accumulator rather than delegating to
a codec with different leniency rules:

    - surrounding and internal whitespace is ignored
    - decoding stops at the first ``=``, wherever it appears
    - any other character outside ``A-Z a-z 0-9 + /`` is an error
"""

from __future__ import annotations

from webview_automation.domain.errors import Base64DecodeError

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

_VALUES = {char: index for index, char in enumerate(ALPHABET)}


def decode_base64(text: str) -> bytes:
    """Decode base64 ``text`` into raw bytes.

    Args:
        text: Base64 text, optionally padded and wrapped.

    Returns:
        The decoded bytes. Trailing bits that do not fill a byte are dropped.

    Raises:
        Base64DecodeError: On the first character outside the alphabet.
    """
    output = bytearray()
    buffer = 0
    bits = 0

    for position, char in enumerate(text.strip()):
        if char.isspace():
            continue
        if char == "=":
            break
        value = _VALUES.get(char)
        if value is None:
            raise Base64DecodeError(char, position)

        buffer = (buffer << 6) | value
        bits += 6
        if bits >= 8:
            bits -= 8
            output.append((buffer >> bits) & 0xFF)
            # Keep only the bits not yet emitted
            buffer &= (1 << bits) - 1

    return bytes(output)
