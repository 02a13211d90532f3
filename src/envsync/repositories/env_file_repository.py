"""
Env File Repository.

This repository is the only place that touches the file system: it loads
env files into EnvFile documents and persists rendered documents.

Write Strategy:
- The document is rendered completely before anything is written
- Content goes to a temporary file in the target directory
- os.replace() swaps it in, so readers see the old or the new file, never a mix
- An existing file keeps its permission bits

Error Handling:
- OSError (missing file, permission denied) propagates unchanged
- OutputPathError for targets that can never hold a file (directories)
- ParseError from EnvFile.parse propagates unchanged
"""

import os
import stat
import tempfile
from pathlib import Path
from typing import Optional, Union

from ..config import StorageConfig
from ..domain.env_file import EnvFile
from ..domain.errors import OutputPathError
from ..utils.logging import get_module_logger

logger = get_module_logger()

PathLike = Union[str, Path]


class EnvFileRepository:
    """
    Repository for reading and writing env files.

    Usage:
        repo = EnvFileRepository(settings.storage)
        doc = repo.load(".env.example")
        repo.save(".env", doc)
    """

    def __init__(self, config: Optional[StorageConfig] = None):
        self.config = config or StorageConfig()

    def load(self, path: PathLike) -> EnvFile:
        """
        Load and parse an env file.

        Raises:
            OSError: If the file cannot be read
            ParseError: If the content is malformed
        """
        return EnvFile.from_path(path, encoding=self.config.encoding)

    def load_optional(self, path: PathLike) -> Optional[EnvFile]:
        """Load an env file, or return None when it does not exist."""
        path = Path(path)
        self.ensure_writable_target(path)
        if not path.exists():
            logger.info("Env file not found, starting empty", path=str(path))
            return None
        return self.load(path)

    def ensure_writable_target(self, path: PathLike) -> None:
        """
        Fail early if path can never receive a file.

        Raises:
            OutputPathError: If path is an existing directory
        """
        path = Path(path)
        if path.is_dir():
            raise OutputPathError(f"{path} is a directory", details={"path": str(path)})

    def save(self, path: PathLike, document: EnvFile) -> None:
        """
        Write a document atomically.

        Args:
            path: Target file; created if missing, replaced otherwise. A symlink
                is followed and the file it points to is replaced.
            document: Document to render and write
        """
        # The temporary file must sit next to the real target for os.replace
        path = Path(path).resolve()
        self.ensure_writable_target(path)

        content = document.render()

        mode: Optional[int] = None
        if path.exists():
            mode = stat.S_IMODE(path.stat().st_mode)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            # newline="" keeps the document's own line terminators
            with os.fdopen(fd, "w", encoding=self.config.encoding, newline="") as handle:
                handle.write(content)
            if mode is not None:
                os.chmod(tmp_name, mode)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.info("Env file written", path=str(path), bytes=len(content.encode(self.config.encoding)))
