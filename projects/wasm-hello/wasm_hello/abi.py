"""
Byte-level calling convention for the exported functions.

A call is a single payload holding the encoded arguments back to back; the
reply is the encoded result. Encodings:

  * `i32`    -> 4 bytes, little endian, two's complement
  * `string` -> u32 little endian byte length, then that many UTF-8 bytes
"""

import logging
import struct
from typing import Any

from ferris_core.types import is_i32
from wasm_hello.exports import EXPORTS, Export
from wasm_hello.kinds import AbiType
from wasm_hello.settings import I32_FORMAT, STRING_ENCODING, STRING_LENGTH_FORMAT

logger = logging.getLogger("ferris")

I32_SIZE = struct.calcsize(I32_FORMAT)
STRING_LENGTH_SIZE = struct.calcsize(STRING_LENGTH_FORMAT)


class AbiError(ValueError):
    pass


class UnknownExportError(AbiError, KeyError):
    pass


# ---------------------------------------------------------------------------- #
#                                Value Encoding                                #
# ---------------------------------------------------------------------------- #


def encode_value(kind: AbiType, value: Any) -> bytes:
    match kind:
        case AbiType.I32:
            if not isinstance(value, int) or not is_i32(value):
                raise AbiError(f"{value!r} is not an i32")
            return struct.pack(I32_FORMAT, value)
        case AbiType.STRING:
            if not isinstance(value, str):
                raise AbiError(f"{value!r} is not a string")
            raw = value.encode(STRING_ENCODING)
            return struct.pack(STRING_LENGTH_FORMAT, len(raw)) + raw
    raise AbiError(f"unsupported abi type '{kind}'")


def decode_value(kind: AbiType, data: bytes, offset: int = 0) -> tuple[Any, int]:
    """Decode one value at `offset`; returns the value and the next offset."""
    match kind:
        case AbiType.I32:
            end = offset + I32_SIZE
            if end > len(data):
                raise AbiError(f"truncated i32 at offset {offset}")
            return struct.unpack_from(I32_FORMAT, data, offset)[0], end
        case AbiType.STRING:
            start = offset + STRING_LENGTH_SIZE
            if start > len(data):
                raise AbiError(f"truncated string length at offset {offset}")
            (length,) = struct.unpack_from(STRING_LENGTH_FORMAT, data, offset)
            end = start + length
            if end > len(data):
                raise AbiError(f"string of {length} bytes exceeds payload at offset {offset}")
            try:
                return data[start:end].decode(STRING_ENCODING), end
            except UnicodeDecodeError as err:
                raise AbiError(f"invalid {STRING_ENCODING} string at offset {offset}") from err
    raise AbiError(f"unsupported abi type '{kind}'")


def encode_values(kinds: tuple[AbiType, ...], values: tuple[Any, ...]) -> bytes:
    if len(kinds) != len(values):
        raise AbiError(f"expected {len(kinds)} values, got {len(values)}")
    return b"".join(encode_value(k, v) for k, v in zip(kinds, values))


def decode_values(kinds: tuple[AbiType, ...], data: bytes) -> tuple[Any, ...]:
    values = []
    offset = 0
    for kind in kinds:
        value, offset = decode_value(kind, data, offset)
        values.append(value)
    if offset != len(data):
        raise AbiError(f"{len(data) - offset} trailing bytes in payload")
    return tuple(values)


# ---------------------------------------------------------------------------- #
#                                  Entry Point                                 #
# ---------------------------------------------------------------------------- #


def resolve(name: str) -> Export:
    try:
        return EXPORTS[name]
    except KeyError:
        raise UnknownExportError(f"no export named '{name}'") from None


def encode_call(name: str, *args: Any) -> bytes:
    """Host side: build the payload for calling `name` with `args`."""
    return encode_values(resolve(name).params, args)


def decode_reply(name: str, reply: bytes) -> Any:
    """Host side: turn the reply of `name` back into a value."""
    (value,) = decode_values((resolve(name).result,), reply)
    return value


def invoke(name: str, payload: bytes) -> bytes:
    """Module side: decode the arguments, run the export and encode its result."""
    target = resolve(name)
    args = decode_values(target.params, payload)
    logger.debug(f"invoke {name}{args}")
    return encode_value(target.result, target(*args))
