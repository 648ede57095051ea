"""Decoding of revert reasons and emitted logs.

Payloads are classified by their leading 4-byte selector only:

- ``08c379a0`` (``Error(string)``): ABI encoded revert reason
- ``32d5ab96``: log carrying a string packed into a single bytes32 word

Anything else is shown as normalised hex.
"""

import re

from evm_test_report.styling import PIPE, connector

ERROR_SELECTOR = "08c379a0"
BYTES32_LOG_SELECTOR = "32d5ab96"
SELECTOR_HEX_LENGTH = 8
WORD_SIZE = 32

DEFAULT_REVERT_MESSAGE = "test failed"

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")


class DecodeError(Exception):
    """Raised when a payload cannot be decoded."""


class MalformedHexError(DecodeError):
    """Raised when a payload is not a valid hex byte string."""


class AbiDecodeError(DecodeError):
    """Raised when a payload does not match its declared ABI encoding."""


def format_even_bytes(hex_string: str) -> str:
    """Pad a hex string with a leading zero when its length is odd."""
    if len(hex_string) % 2:
        return f"0{hex_string}"
    return hex_string


def check_hex(hex_string: str) -> None:
    """Ensure ``hex_string`` only contains hex digits."""
    if not _HEX_DIGITS.fullmatch(hex_string):
        raise MalformedHexError(f"Invalid hex characters in {hex_string!r}")


def hex_to_bytes(hex_string: str) -> bytes:
    """Convert a hex string (no ``0x`` prefix) to bytes.

    Raises:
        MalformedHexError: If the string has non-hex characters or odd length

    """
    check_hex(hex_string)
    if len(hex_string) % 2:
        raise MalformedHexError(
            f"Odd-length hex string ({len(hex_string)} characters)"
        )
    return bytes.fromhex(hex_string)


def _read_word(data: bytes, offset: int, what: str) -> int:
    end = offset + WORD_SIZE
    if end > len(data):
        raise AbiDecodeError(
            f"Cannot read {what} at byte {offset}: payload is {len(data)} bytes"
        )
    return int.from_bytes(data[offset:end], "big")


def decode_abi_string(data: bytes) -> str:
    """Decode ``data`` as the ABI encoding of a single dynamic ``string``.

    The head is a 32-byte offset to the tail; the tail is a 32-byte length
    followed by the UTF-8 bytes.

    Raises:
        AbiDecodeError: If offsets or length overrun the data, or the bytes
            are not valid UTF-8

    """
    offset = _read_word(data, 0, "string offset")
    length = _read_word(data, offset, "string length")

    start = offset + WORD_SIZE
    end = start + length
    if end > len(data):
        raise AbiDecodeError(
            f"String length {length} overruns payload of {len(data)} bytes"
        )

    try:
        return data[start:end].decode("utf-8")
    except UnicodeDecodeError as e:
        raise AbiDecodeError(f"String is not valid UTF-8: {e}") from e


def parse_bytes32_string(data: bytes) -> str:
    """Decode a NUL padded string stored in a bytes32 word.

    At most the first 32 bytes of ``data`` are used; missing bytes count as
    padding.
    """
    word = data[:WORD_SIZE].ljust(WORD_SIZE, b"\x00")
    text, _, _ = word.partition(b"\x00")

    try:
        return text.decode("utf-8")
    except UnicodeDecodeError as e:
        raise AbiDecodeError(f"bytes32 string is not valid UTF-8: {e}") from e


def decode_revert(raw_hex: str) -> str:
    """Turn revert data into a readable message.

    ``Error(string)`` payloads yield their reason; any other payload yields
    ``"test failed"``.

    Raises:
        DecodeError: If an ``Error(string)`` payload is malformed

    """
    if not raw_hex.lower().startswith(ERROR_SELECTOR):
        return DEFAULT_REVERT_MESSAGE

    payload = hex_to_bytes(raw_hex)
    return decode_abi_string(payload[SELECTOR_HEX_LENGTH // 2 :])


def decode_log_entry(raw_hex: str, position: int, is_last: bool) -> str:
    """Render one emitted log as a tree line.

    bytes32 string logs are decoded to their text. Other logs are shown as
    ``0x`` hex with leading zeros stripped and even length restored.

    Args:
        raw_hex: Log data (hex, no ``0x`` prefix)
        position: Index of the log within its test, used in error messages
        is_last: Whether this is the final log of the test

    Raises:
        DecodeError: If the log data is malformed

    """
    try:
        if raw_hex.lower().startswith(BYTES32_LOG_SELECTOR):
            data = hex_to_bytes(raw_hex[SELECTOR_HEX_LENGTH:])
            return f"{connector(is_last)} {parse_bytes32_string(data)}"

        check_hex(raw_hex)
    except DecodeError as e:
        raise type(e)(f"log #{position}: {e}") from e

    trimmed = raw_hex.lstrip("0") or "00"
    return f"{connector(is_last, continuing=PIPE)} 0x{format_even_bytes(trimmed)}"
