"""
C ABI entry points for the exports, built with `ctypes`.

Native hosts receive the address of `FUNCTION_TABLE` (see `table_address`) and
call through its function pointers. The matching C declarations are generated
by `wasm_hello.bindings`.
"""

import ctypes
import logging

from wasm_hello.exports import add, greet
from wasm_hello.settings import STRING_ENCODING

logger = logging.getLogger("ferris")

# returned by `greet` when the name pointer is NULL or not valid UTF-8
GREET_ERROR = -1

# int32_t add(int32_t a, int32_t b)
AddFunc = ctypes.CFUNCTYPE(ctypes.c_int32, ctypes.c_int32, ctypes.c_int32)

# int64_t greet(const char *name, char *out, size_t out_len)
GreetFunc = ctypes.CFUNCTYPE(ctypes.c_int64, ctypes.c_char_p, ctypes.c_void_p, ctypes.c_size_t)


class FunctionTable(ctypes.Structure):
    _fields_ = [
        ("add", AddFunc),
        ("greet", GreetFunc),
    ]


# ---------------------------------------------------------------------------- #
#                                  Entry Points                                #
# ---------------------------------------------------------------------------- #


def _add_entry(a: int, b: int) -> int:
    return add(a, b)


def _greet_entry(name: bytes | None, out: int | None, out_len: int) -> int:
    """
    Write the greeting for `name` into `out` and return the byte length of the
    full greeting, excluding the terminating NUL. At most `out_len - 1` bytes
    are copied and the copy is always NUL terminated (snprintf convention). A
    result `>= out_len` tells the host its buffer was too small.
    """
    if name is None:
        return GREET_ERROR
    try:
        text = name.decode(STRING_ENCODING)
    except UnicodeDecodeError:
        logger.error("greet: name is not valid UTF-8")
        return GREET_ERROR

    encoded = greet(text).encode(STRING_ENCODING)
    if out and out_len > 0:
        copied = min(len(encoded), out_len - 1)
        ctypes.memmove(out, encoded, copied)
        ctypes.memset(out + copied, 0, 1)
    return len(encoded)


# thunks must stay referenced for as long as hosts may call them
_ADD_THUNK = AddFunc(_add_entry)
_GREET_THUNK = GreetFunc(_greet_entry)

FUNCTION_TABLE = FunctionTable(_ADD_THUNK, _GREET_THUNK)


def table_address() -> int:
    return ctypes.addressof(FUNCTION_TABLE)


# ---------------------------------------------------------------------------- #
#                                  Host Helpers                                #
# ---------------------------------------------------------------------------- #


def load_table(address: int) -> FunctionTable:
    """View the table at `address` the way a native host would."""
    return ctypes.cast(address, ctypes.POINTER(FunctionTable)).contents


def call_greet(table: FunctionTable, name: str) -> str:
    """
    Size the buffer with a first call, then fetch the greeting. Names cross
    the boundary as C strings, so an embedded NUL is rejected up front.
    """
    if "\x00" in name:
        raise ValueError(f"greet name contains an embedded NUL: {name!r}")
    raw_name = name.encode(STRING_ENCODING)
    required = table.greet(raw_name, None, 0)
    if required < 0:
        raise ValueError(f"greet rejected name {name!r}")
    buffer = ctypes.create_string_buffer(required + 1)
    written = table.greet(raw_name, ctypes.addressof(buffer), len(buffer))
    assert written == required, "greeting changed between calls"
    return buffer.raw[:required].decode(STRING_ENCODING)
