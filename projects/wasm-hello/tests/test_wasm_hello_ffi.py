import ctypes

import pytest

from wasm_hello.ffi import (
    FUNCTION_TABLE,
    GREET_ERROR,
    call_greet,
    load_table,
    table_address,
)


@pytest.fixture
def table():
    # go through the raw address like a native host would
    return load_table(table_address())


def test_add_through_function_pointer(table):
    assert table.add(2, 3) == 5
    assert table.add(-1, 1) == 0
    assert table.add(2**31 - 1, 1) == -(2**31)


def test_greet_through_function_pointer(table):
    assert call_greet(table, "World") == "Hello, World! From Rust WASM! 🦀"
    assert call_greet(table, "Ferris 🦀") == "Hello, Ferris 🦀! From Rust WASM! 🦀"


def test_greet_reports_required_size_without_buffer(table):
    expected = "Hello, World! From Rust WASM! 🦀".encode("utf-8")
    assert table.greet(b"World", None, 0) == len(expected)


def test_greet_truncates_within_buffer(table):
    guard = b"#" * 4
    storage = ctypes.create_string_buffer(8 + len(guard))
    ctypes.memmove(ctypes.addressof(storage) + 8, guard, len(guard))

    required = table.greet(b"World", ctypes.addressof(storage), 8)

    assert required > 8
    assert storage.raw[:8] == b"Hello, \x00"
    assert storage.raw[8:] == guard


def test_greet_rejects_null_and_invalid_names(table):
    assert table.greet(None, None, 0) == GREET_ERROR
    assert table.greet(b"\xff\xfe", None, 0) == GREET_ERROR


def test_call_greet_rejects_embedded_nul(table):
    with pytest.raises(ValueError, match="embedded NUL"):
        call_greet(table, "a\x00b")
    # the raw entry point only ever sees the bytes before the NUL
    assert table.greet(b"a\x00b", None, 0) == len(call_greet(table, "a").encode())


def test_table_address_is_stable():
    assert table_address() == ctypes.addressof(FUNCTION_TABLE)
    assert table_address() == table_address()
