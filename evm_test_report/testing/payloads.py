"""Builders for raw hex payloads as emitted by contracts."""

from evm_test_report.decoding import BYTES32_LOG_SELECTOR, ERROR_SELECTOR, WORD_SIZE


def _word(value: int) -> str:
    return value.to_bytes(WORD_SIZE, "big").hex()


def encode_revert(message: str) -> str:
    """Encode ``message`` as ``Error(string)`` revert data."""
    data = message.encode("utf-8")
    padded_length = -(-len(data) // WORD_SIZE) * WORD_SIZE
    return (
        ERROR_SELECTOR
        + _word(WORD_SIZE)
        + _word(len(data))
        + data.ljust(padded_length, b"\x00").hex()
    )


def encode_bytes32_log(message: str) -> str:
    """Encode ``message`` as a bytes32 string log."""
    data = message.encode("utf-8")
    return BYTES32_LOG_SELECTOR + data.ljust(WORD_SIZE, b"\x00").hex()
