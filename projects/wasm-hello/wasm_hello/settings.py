#
# Exported Module
#

MODULE_NAME = "wasm_hello"
GREETING_TEMPLATE = "Hello, {name}! From Rust WASM! 🦀"

#
# Binary Calling Convention
#

# i32 values: 4 bytes, little endian, two's complement
I32_FORMAT = "<i"
# strings: u32 little endian byte length followed by UTF-8 bytes
STRING_LENGTH_FORMAT = "<I"
STRING_ENCODING = "utf-8"

#
# Generated Host Bindings
#

BINDINGS_HEADER_NAME = f"{MODULE_NAME}.h"
BINDINGS_HOST_NAME = "host_example.c"
DEFAULT_BINDINGS_DIR = "out/wasm-hello-bindings"
