"""
Flat JSON file persistence shared by the file-backed stores.

Reads never raise: a missing, empty or unparsable file is logged and
reported as empty. Writes raise ``StorageError`` so the request that
triggered them can answer 500.
"""

import json
import logging
from pathlib import Path
from typing import Any

from hany_realty.core.errors import StorageError

logger = logging.getLogger(__name__)


class JsonFile:
    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> Any:
        if not self.path.exists():
            return None
        try:
            raw = self.path.read_text(encoding="utf-8")
            if not raw.strip():
                return None
            return json.loads(raw)
        except (OSError, ValueError):
            logger.exception("Failed to read %s, treating as empty", self.path)
            return None

    def read_list(self) -> list:
        data = self._read()
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("%s does not hold a JSON array, treating as empty", self.path)
            return []
        return data

    def read_dict(self) -> dict:
        data = self._read()
        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning("%s does not hold a JSON object, treating as empty", self.path)
            return {}
        return data

    def write(self, data: Any) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(data, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except (OSError, TypeError, ValueError) as exc:
            logger.exception("Failed to write %s", self.path)
            raise StorageError(f"could not write {self.path}") from exc
