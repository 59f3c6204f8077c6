from abc import ABC, abstractmethod
from pathlib import Path

# ---------------------------------------------------------------------------- #
#                               Project Generators                             #
# ---------------------------------------------------------------------------- #


class AbstractProjectGenerator(ABC):
    __root: Path

    def __init__(self, root: Path):
        self.__root = root

    @abstractmethod
    def create(self) -> list[Path]:
        """Write the project below `root` and return the written files."""
        raise NotImplementedError()

    @property
    def root(self) -> Path:
        return self.__root
