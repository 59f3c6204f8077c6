import struct

# --- 32-bit Integer Bounds ---
I32_MIN = -(2**31)
I32_MAX = 2**31 - 1
U32_MAX = 2**32 - 1


def to_i32(x: int) -> int:
    """Reinterpret the low 32 bits of `x` as a two's-complement signed integer."""
    x &= 0xFFFFFFFF
    if x & 0x80000000:
        x -= 0x100000000
    return x


def is_i32(x: int) -> bool:
    return I32_MIN <= x <= I32_MAX


def is_u32(x: int) -> bool:
    return 0 <= x <= U32_MAX


def i32_to_bytes(x: int) -> bytes:
    return struct.pack("<i", x)


def i32_from_bytes(data: bytes) -> int:
    return struct.unpack("<i", data)[0]
