"""Hex field-element decoding.

Field elements arrive as big-endian hex strings, optionally `0x`-prefixed and
of arbitrary digit length. Decoding is the first step of public-input
flattening, so a misaligned nibble here shifts every byte that follows.
"""

from primitives.errors import InvalidHexInput

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def strip_hex_prefix(hex_str: str) -> str:
    """Remove a single leading 0x / 0X."""
    if hex_str[:2] in ("0x", "0X"):
        return hex_str[2:]
    return hex_str


def hex_to_bytes(hex_str: str) -> bytes:
    """Decode a hex field element into big-endian bytes.

    An odd digit count is left-padded with one '0', so the missing digit is
    the high nibble of the first byte and the numeric value is unchanged.

    Args:
        hex_str: Hex digits, optionally prefixed with 0x / 0X

    Returns:
        ceil(n_digits / 2) bytes, most significant byte first

    Raises:
        InvalidHexInput: On any character outside [0-9a-fA-F] after the prefix
    """
    if not isinstance(hex_str, str):
        raise InvalidHexInput(hex_str)

    digits = strip_hex_prefix(hex_str)
    prefix_len = len(hex_str) - len(digits)
    for i, c in enumerate(digits):
        if c not in HEX_DIGITS:
            raise InvalidHexInput(hex_str, i + prefix_len)

    if len(digits) % 2 != 0:
        digits = "0" + digits

    # bytes.fromhex would also accept whitespace, which the check above rejects
    return bytes.fromhex(digits)
