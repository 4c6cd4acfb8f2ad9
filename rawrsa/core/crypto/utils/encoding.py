"""Encoding utilities."""
import re

_HEX_DIGITS = re.compile(r'\+?[0-9a-fA-F]+')


class HexIntEncoder:
    """Hexadecimal encoder/decoder for non-negative integers."""

    @staticmethod
    def encode(value: int) -> str:
        """Encodes an integer as lowercase hex without prefix."""
        if value < 0:
            raise ValueError("cannot encode a negative integer")
        return format(value, 'x')

    @staticmethod
    def decode(data: str) -> int:
        """Decodes hex digits (optional leading '+', no '0x' prefix)."""
        if not isinstance(data, str) or not _HEX_DIGITS.fullmatch(data):
            raise ValueError(f"not a hex integer: {data!r}")
        return int(data, 16)
