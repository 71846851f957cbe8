"""
Resolution of resource names to files on disk.
"""

from collections.abc import Iterable
from pathlib import Path

from compass.exceptions import FileLocatorFileNotFoundError


class FileLocator:
    """
    Finds files by name.

    Absolute names are returned as-is when they exist. Relative names are
    looked up in ``current_dir`` first, then in each configured path.
    """

    def __init__(self, paths: str | Path | Iterable[str | Path] | None = None) -> None:
        if paths is None:
            paths = []
        elif isinstance(paths, (str, Path)):
            paths = [paths]
        self.paths: list[Path] = [Path(p) for p in paths]

    def locate(self, name: str | Path, current_dir: str | Path | None = None) -> Path:
        if not str(name):
            raise ValueError("An empty file name is not valid to be located.")

        candidate = Path(name)
        if candidate.is_absolute():
            if candidate.is_file():
                return candidate.resolve()
            raise FileLocatorFileNotFoundError(str(name), [])

        search: list[Path] = []
        if current_dir is not None:
            search.append(Path(current_dir))
        search.extend(self.paths)

        for directory in search:
            path = directory / candidate
            if path.is_file():
                return path.resolve()

        raise FileLocatorFileNotFoundError(str(name), [str(d) for d in search])
