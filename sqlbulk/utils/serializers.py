"""JSON serialization utilities for sqlbulk."""

from typing import Any, Literal, overload

import msgspec

__all__ = ("to_json",)


def _enc_hook(value: Any) -> Any:
    # msgspec handles datetimes, decimals, uuids and enums natively
    return repr(value)


_encoder = msgspec.json.Encoder(enc_hook=_enc_hook)


@overload
def to_json(data: Any, *, as_bytes: Literal[False] = ...) -> str: ...


@overload
def to_json(data: Any, *, as_bytes: Literal[True]) -> bytes: ...


def to_json(data: Any, *, as_bytes: bool = False) -> "str | bytes":
    """Encode data to JSON string or bytes.

    Args:
        data: Data to encode.
        as_bytes: Whether to return bytes instead of string.

    Returns:
        JSON string or bytes representation based on as_bytes parameter.
    """
    encoded = _encoder.encode(data)
    if as_bytes:
        return encoded
    return encoded.decode("utf-8")
