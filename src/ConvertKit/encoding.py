# ============================================================================
# ConvertKit - Byte Encoding
#
# Purpose: Encode bytes to Base64 / hexadecimal text and decode them back
# Inputs: Bytes-like objects or encoded text
# Outputs: Encoded text or bytes
# Dependencies: base64, binascii (stdlib)
# Usage: text = to_base64(b"hello"); data = from_hex("616263")
#
# Changelog:
#   2026-03-02: Initial Base64 and hex codecs
#   2026-03-06: from_base64 ignores embedded CR/LF (line-wrapped input)
# ============================================================================

import base64
import binascii

from ConvertKit.errors import EncodingError


def to_base64(data: bytes) -> str:
    """Encode bytes as standard Base64 (with padding)."""
    return base64.b64encode(data).decode("ascii")


def from_base64(text: str) -> bytes:
    """
    Decode standard Base64 text.

    Carriage returns and newlines are ignored; every other character must
    belong to the standard alphabet.

    Args:
        text: Base64 text

    Returns:
        Decoded bytes

    Raises:
        EncodingError: On characters outside the alphabet, bad padding, or invalid length
    """
    cleaned = text.replace("\r", "").replace("\n", "")
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"from_base64: illegal base64 data: {e}") from e


def to_hex(data: bytes) -> str:
    """Encode bytes as lowercase hexadecimal."""
    return bytes(data).hex()


def from_hex(text: str) -> bytes:
    """
    Decode hexadecimal text (either case).

    Raises:
        EncodingError: On odd length or non-hex characters
    """
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"from_hex: invalid hex data: {e}") from e
