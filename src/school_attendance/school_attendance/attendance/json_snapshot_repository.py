from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from ..common.json_document import read_document, write_document
from ..core.constants import JSON_STORAGE_KEY
from ..core.exceptions import ValidationError
from .model import AttendanceRecord, records_from_dicts
from .repository import AttendanceSnapshotRepository

logger = logging.getLogger(__name__)


class JsonFileSnapshotRepository(AttendanceSnapshotRepository):
    """Key-value JSON document holding the record list under one key.

    Other keys present in the document are preserved on save.
    """

    def __init__(self, path: str | Path, *, key: str = JSON_STORAGE_KEY):
        self._path = Path(path)
        self._key = key

    def load_all(self) -> Sequence[AttendanceRecord]:
        rows = read_document(self._path).get(self._key) or []
        if not isinstance(rows, list):
            raise ValidationError(f"'{self._key}' in {self._path} must be a list")
        try:
            records = records_from_dicts(rows)
        except KeyError as e:
            raise ValidationError(f"Attendance row in {self._path} is missing field {e}") from e
        except ValueError as e:
            raise ValidationError(f"Attendance row in {self._path} is malformed: {e}") from e
        logger.debug("Loaded %d attendance records from %s", len(records), self._path)
        return records

    def save_all(self, records: Sequence[AttendanceRecord]) -> None:
        document = read_document(self._path)
        document[self._key] = [r.to_dict() for r in records]
        write_document(self._path, document)
        logger.debug("Saved %d attendance records to %s", len(records), self._path)
