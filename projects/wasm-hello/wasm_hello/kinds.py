from enum import StrEnum


class AbiType(StrEnum):
    I32 = "i32"
    STRING = "string"
