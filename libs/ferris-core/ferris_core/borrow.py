import copy
import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

logger = logging.getLogger("ferris")

T = TypeVar("T")

# ---------------------------------------------------------------------------- #
#                                  Exceptions                                  #
# ---------------------------------------------------------------------------- #


class BorrowError(RuntimeError):
    pass


class DanglingReferenceError(BorrowError):
    """A borrow was read after one of the values it depends on went away."""


class DoubleDropError(BorrowError):
    pass


# ---------------------------------------------------------------------------- #
#                                    Owners                                    #
# ---------------------------------------------------------------------------- #


class Owner(Generic[T]):
    """
    Holds a value with an explicit lifetime. The value is released by `drop()`
    (or by the enclosing `Scope`), after which every `Borrow` taken from this
    owner refuses to hand out the value.

    `generation` is bumped whenever the owned value is mutated in a way that
    moves its contents (see `OwnedList.push`); borrows remember the generation
    they were taken at.
    """

    name: str
    generation: int

    def __init__(self, value: T, name: str = "<anonymous>"):
        self._value: T | None = value
        self._alive = True
        self.name = name
        self.generation = 0

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def value(self) -> T:
        if not self._alive:
            raise DanglingReferenceError(f"owner '{self.name}' was already dropped")
        return self._value  # type: ignore[return-value]

    def borrow(self) -> "Borrow[T]":
        return Borrow(self.value, ((self, self.generation),))

    def clone(self, name: str | None = None) -> "Owner[T]":
        """Deep copy into a new, independently dropped owner."""
        return type(self)(copy.deepcopy(self.value), name or f"{self.name}.clone")

    def drop(self):
        if not self._alive:
            raise DoubleDropError(f"owner '{self.name}' dropped twice")
        logger.debug(f"drop '{self.name}'")
        self._alive = False
        self._value = None

    def __repr__(self) -> str:
        state = "alive" if self._alive else "dropped"
        return f"{type(self).__name__}({self.name!r}, {state}, gen={self.generation})"


class OwnedList(Owner[list]):
    def __init__(self, items: list | None = None, name: str = "<anonymous>"):
        super().__init__(list(items or []), name)

    def push(self, item: Any):
        self.value.append(item)
        # outstanding element borrows may now point at moved storage
        self.generation += 1

    def item(self, index: int) -> "Borrow[Any]":
        return Borrow(self.value[index], ((self, self.generation),))

    def __len__(self) -> int:
        return len(self.value)


# ---------------------------------------------------------------------------- #
#                                    Borrows                                   #
# ---------------------------------------------------------------------------- #


@dataclass(frozen=True)
class Borrow(Generic[T]):
    """
    Non-owning view onto a value. The view stays readable only while every
    owner in `sources` is alive and unchanged, i.e. its validity window is the
    intersection of the windows of its sources.
    """

    target: T
    sources: tuple[tuple[Owner, int], ...]

    def is_valid(self) -> bool:
        return all(owner.alive and owner.generation == gen for owner, gen in self.sources)

    def get(self) -> T:
        for owner, gen in self.sources:
            if not owner.alive:
                raise DanglingReferenceError(
                    f"borrow outlived its source '{owner.name}' (dropped)"
                )
            if owner.generation != gen:
                raise DanglingReferenceError(
                    f"borrow of '{owner.name}' invalidated by mutation "
                    f"(generation {gen} -> {owner.generation})"
                )
        return self.target

    def bind(self, other: "Borrow[Any]") -> "Borrow[T]":
        """Same target, constrained additionally by the sources of `other`."""
        sources = self.sources + tuple(s for s in other.sources if s not in self.sources)
        return Borrow(self.target, sources)


# ---------------------------------------------------------------------------- #
#                                     Scope                                    #
# ---------------------------------------------------------------------------- #


class Scope:
    """
    Block-shaped lifetime. Owners created through `own()` are dropped in reverse
    creation order when the `with` block exits.
    """

    def __init__(self, name: str = "scope"):
        self.name = name
        self.owners: list[Owner] = []

    def own(self, value: Any, name: str | None = None) -> Owner:
        owner = Owner(value, name or f"{self.name}#{len(self.owners)}")
        self.owners.append(owner)
        return owner

    def __enter__(self) -> "Scope":
        logger.debug(f"enter scope '{self.name}'")
        return self

    def __exit__(self, exc_type, exc, tb):
        for owner in reversed(self.owners):
            if owner.alive:
                owner.drop()
        logger.debug(f"exit scope '{self.name}'")
        return False
