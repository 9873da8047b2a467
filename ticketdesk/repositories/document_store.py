# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: the JSON data file.
Loads and saves the whole document. NO business rules here.

Every save rewrites the full file in place; there is no temp-file-then-rename
step, so a crash mid-write can leave a truncated file behind.
"""

import threading
from pathlib import Path

import pydantic

from ticketdesk.core.errors import StorageError
from ticketdesk.core.logging import get_logger
from ticketdesk.metrics import STORAGE_FAILURES
from ticketdesk.models.domain import Document

logger = get_logger(__name__)


class DocumentStore:
    """File-backed store for the teams/users/tickets document."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        # Held by repositories across load-validate-mutate-save.
        self.lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    # ── Read ──

    def load(self) -> Document:
        try:
            raw = self._path.read_text(encoding="utf-8")
            return Document.model_validate_json(raw)
        except (OSError, UnicodeDecodeError, pydantic.ValidationError) as exc:
            STORAGE_FAILURES.labels(operation="load").inc()
            logger.error("Failed to read data file %s: %s", self._path, exc)
            raise StorageError("Error reading data from file") from exc

    # ── Write ──

    def save(self, document: Document) -> None:
        try:
            self._path.write_text(document.model_dump_json(indent=2), encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            STORAGE_FAILURES.labels(operation="save").inc()
            logger.error("Failed to write data file %s: %s", self._path, exc)
            raise StorageError("Error writing data to file") from exc

    def initialize(self) -> bool:
        """Create an empty document if the file is absent. Returns True if created."""
        with self.lock:
            if self._path.exists():
                return False
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                STORAGE_FAILURES.labels(operation="save").inc()
                raise StorageError("Error writing data to file") from exc
            self.save(Document())
            logger.info("Initialised empty data file at %s", self._path)
            return True
