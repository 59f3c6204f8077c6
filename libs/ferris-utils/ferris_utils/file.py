import logging
from pathlib import Path

logger = logging.getLogger("ferris")

# ---------------------------------------------------------------------------- #
#                                 File Helpers                                 #
# ---------------------------------------------------------------------------- #


def create_dir(path: Path):
    """Create `path` and all missing parents. Existing directories are kept."""
    if path.is_file():
        raise FileExistsError(f"expected a directory, found a file: {path}")
    path.mkdir(parents=True, exist_ok=True)


def create_file(path: Path, content: str):
    """Write `content` to `path`, creating parent directories as needed."""
    create_dir(path.parent)
    logger.debug(f"write {path} ({len(content)} chars)")
    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------- #
