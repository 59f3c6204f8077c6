from dataclasses import dataclass
from typing import Any, Callable

from ferris_core.types import I32_MAX, I32_MIN, is_i32, to_i32
from wasm_hello.kinds import AbiType
from wasm_hello.settings import GREETING_TEMPLATE

# ---------------------------------------------------------------------------- #
#                                Export Registry                               #
# ---------------------------------------------------------------------------- #


@dataclass(frozen=True)
class Export:
    name: str
    func: Callable[..., Any]
    params: tuple[AbiType, ...]
    result: AbiType

    def __call__(self, *args: Any) -> Any:
        if len(args) != len(self.params):
            raise TypeError(f"{self.name} expects {len(self.params)} arguments, got {len(args)}")
        return self.func(*args)


EXPORTS: dict[str, Export] = {}


def export(*params: AbiType, result: AbiType):
    """Register the decorated function as callable from a foreign host."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        name = func.__name__
        assert name not in EXPORTS, f"duplicate export '{name}'"
        EXPORTS[name] = Export(name, func, params, result)
        return func

    return decorator


def get_export(name: str) -> Export:
    return EXPORTS[name]


# ---------------------------------------------------------------------------- #
#                                Exported Functions                            #
# ---------------------------------------------------------------------------- #


@export(AbiType.I32, AbiType.I32, result=AbiType.I32)
def add(a: int, b: int) -> int:
    """32-bit signed addition. Overflow wraps around."""
    for value in (a, b):
        if not is_i32(value):
            raise ValueError(f"{value} is outside the i32 range [{I32_MIN}, {I32_MAX}]")
    return to_i32(a + b)


@export(AbiType.STRING, result=AbiType.STRING)
def greet(name: str) -> str:
    return GREETING_TEMPLATE.format(name=name)
