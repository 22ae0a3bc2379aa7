"""Workspace: a private temporary directory holding one source and one aux file."""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path

from playground.runtime.errors import WorkspaceError

logger = logging.getLogger(__name__)

SOURCE_FILENAME = "main.nr"
AUX_FILENAME = "Prover.toml"


class Workspace:
    """Per-request filesystem scope.

    Use :meth:`create` inside a ``with`` block; the directory is removed on
    every exit path.  :meth:`destroy` is idempotent and tolerates a
    partially-initialised workspace.

    Both files exist (empty) from creation on, so the sandbox can always
    bind-mount them even for commands that ignore their content.
    """

    def __init__(self, root: Path) -> None:
        self.root = root
        self.source_file = root / SOURCE_FILENAME
        self.aux_file = root / AUX_FILENAME
        self._destroyed = False

    @classmethod
    def create(cls, prefix: str = "playground-") -> Workspace:
        try:
            root = Path(tempfile.mkdtemp(prefix=prefix))
        except OSError as exc:
            raise WorkspaceError("create", "failed to create temporary directory") from exc

        workspace = cls(root)
        try:
            workspace.source_file.touch()
            workspace.aux_file.touch()
        except OSError as exc:
            workspace.destroy()
            raise WorkspaceError("create", "failed to create temporary directory") from exc

        logger.debug("Created workspace %s", root)
        return workspace

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def write_source(self, text: str) -> None:
        self._write(self.source_file, text, "failed to write source code")

    def write_aux(self, text: str) -> None:
        self._write(self.aux_file, text, f"failed to write {AUX_FILENAME}")

    def read_source(self) -> str:
        try:
            return self.source_file.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise WorkspaceError("read", "failed to read source code") from exc

    def destroy(self) -> None:
        """Recursively remove the directory. Safe to call more than once."""
        if self._destroyed:
            return
        self._destroyed = True
        shutil.rmtree(self.root, ignore_errors=True)
        logger.debug("Destroyed workspace %s", self.root)

    def __enter__(self) -> Workspace:
        return self

    def __exit__(self, *_: object) -> None:
        self.destroy()

    # Bytes are written as-is so a read-back is byte-identical (no newline translation).
    @staticmethod
    def _write(path: Path, text: str, message: str) -> None:
        try:
            path.write_bytes(text.encode("utf-8"))
        except (OSError, UnicodeEncodeError) as exc:
            raise WorkspaceError("write", message) from exc
