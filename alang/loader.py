"""Source loaders used by the ``load`` statement.

The interpreter never touches the filesystem itself: it asks a loader for
the text behind a file name. :class:`FileLoader` reads ``<name>.al`` files
relative to the including script, :class:`MappingLoader` serves sources
from a dict for tests and embedding.


File: loader.py
Version: 0.1.0
License: MIT
"""

import logging
import os

from alang.exceptions import LoadException

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".al"


class FileLoader:
    """
    Read included source files from disk.
    """
    def __init__(self, base_dir: str | None = None, extension: str = DEFAULT_EXTENSION):
        """
        Parameters:
            base_dir (str): Directory that relative names are resolved against.
                Defaults to the current working directory.
            extension (str): Appended to names that have no extension.
        """
        self.base_dir = base_dir if base_dir is not None else os.getcwd()
        self.extension = extension

    @classmethod
    def for_script(cls, script: str, extension: str = DEFAULT_EXTENSION) -> 'FileLoader':
        """
        Create a loader resolving names next to ``script``.
        """
        if script in {"<stdin>", "<test>"}:
            return cls(os.getcwd(), extension)
        return cls(os.path.dirname(os.path.abspath(script)), extension)

    def nested(self, key: str) -> 'FileLoader':
        """
        Loader for ``load`` statements inside the file at ``key``: names
        resolve next to that file, with the same extension.
        """
        return FileLoader(os.path.dirname(key), self.extension)

    def resolve(self, name: str) -> str:
        """
        Return the absolute path that ``name`` refers to.
        """
        if not os.path.splitext(name)[1]:
            name += self.extension
        return os.path.normpath(os.path.abspath(os.path.join(self.base_dir, name)))

    def read(self, name: str) -> str:
        """
        Return the UTF-8 text of ``name``.

        Raises:
            LoadException: If the file is missing, unreadable or not UTF-8.
        """
        path = self.resolve(name)
        if not os.path.isfile(path):
            raise LoadException(name, f"file '{path}' not found")
        logger.debug("Reading %s from %s", name, path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise LoadException(name, f"file '{path}' is not valid UTF-8") from e
        except OSError as e:
            raise LoadException(name, e.strerror or str(e)) from e


class MappingLoader:
    """
    Serve included sources from memory.
    """
    def __init__(self, sources: dict[str, str]):
        self.sources = dict(sources)

    def nested(self, key: str) -> 'MappingLoader':
        # Names are flat, so every source sees the same mapping
        return self

    def resolve(self, name: str) -> str:
        return name

    def read(self, name: str) -> str:
        if name not in self.sources:
            raise LoadException(name)
        return self.sources[name]
