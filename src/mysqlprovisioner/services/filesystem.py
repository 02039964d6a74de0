"""Filesystem helpers for mysqlprovisioner."""

import logging
import os
import sys
import tempfile
from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console

from mysqlprovisioner.constants import DIR_MODE, FILE_MODE
from mysqlprovisioner.errors import ProvisionerError


class FileSystemService:
    """Encapsulates file and directory side effects."""

    def __init__(self, logger: logging.Logger, console: Console):
        self.logger = logger
        self.console = console

    def set_permissions(self, path: str, mode: int):
        if sys.platform == "win32":
            return

        try:
            os.chmod(path, mode)
        except OSError as exc:
            self.logger.warning("Could not set permissions on %s: %s", path, exc)

    def ensure_private_dir(self, path: str):
        os.makedirs(path, exist_ok=True)
        self.set_permissions(path, DIR_MODE)

    def write_private_file(self, path: str, content: str):
        """Atomically replaces ``path`` with ``content``, readable by the owner only."""
        directory = os.path.dirname(path) or "."
        # mkstemp creates the file with mode 0600.
        fd, temp_path = tempfile.mkstemp(prefix=".tmp-", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as file_obj:
                file_obj.write(content)
            self.set_permissions(temp_path, FILE_MODE)
            os.replace(temp_path, path)
        except OSError as exc:
            raise ProvisionerError(f"Could not write file '{path}': {exc}") from exc
        finally:
            self.remove_file(temp_path)

    def remove_file(self, path: Optional[str]):
        if path and os.path.exists(path):
            try:
                os.remove(path)
                self.logger.debug("Removed file: %s", path)
            except OSError as exc:
                message = f"Warning: Could not remove {path}: {exc}"
                self.console.print(f"[yellow]{message}[/yellow]")
                self.logger.warning(message)

    @contextmanager
    def private_temp_file(self, content: str, prefix: str, suffix: str = "") -> Iterator[str]:
        """Yields the path of a 0600 temporary file that is removed on exit."""
        fd, temp_path = tempfile.mkstemp(prefix=prefix, suffix=suffix)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as file_obj:
                file_obj.write(content)
            self.set_permissions(temp_path, FILE_MODE)
            yield temp_path
        finally:
            self.remove_file(temp_path)
