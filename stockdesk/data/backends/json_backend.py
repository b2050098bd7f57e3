from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from ..exceptions import RecordSourceError
from ..interface import Record, RecordSource
from .payload_backend import COLLECTIONS, ENVELOPE_KEYS, unwrap_collection

from stockdesk.config import get_config
from stockdesk.logging import get_logger


class JsonDirRecordSource(RecordSource):
    """
    Snapshot-backed implementation.
    - Reads ``<collection>.json`` (saved REST responses) from `data_dir` once at construction.
    - A missing file is an empty collection; an unreadable one is an error.
    """

    def __init__(self, data_dir: str | Path = None) -> None:
        if data_dir is None:
            data_dir = get_config().data_dir
        self.data_dir = Path(data_dir)
        self.logger = get_logger(__name__)

        if not self.data_dir.is_absolute():
            # Resolve against the project root (first parent holding pyproject.toml)
            current = Path.cwd()
            root = next(
                (p for p in [current] + list(current.parents) if (p / "pyproject.toml").exists()),
                current,
            )
            self.data_dir = root / self.data_dir

        if not self.data_dir.exists():
            raise RecordSourceError(
                f"Data directory not found: {self.data_dir}\n"
                f"Set DATA_DIR (environment or .env) to a directory of JSON snapshots."
            )
        self._collections = self._load(self.data_dir)

    def _load(self, data_dir: Path) -> Dict[str, List[Record]]:
        collections: Dict[str, List[Record]] = {}
        for name in COLLECTIONS:
            path = data_dir / f"{name}.json"
            if not path.exists():
                self.logger.debug(f"No snapshot for {name} in {data_dir}, using an empty collection")
                collections[name] = []
                continue
            try:
                payload: Any = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                raise RecordSourceError(f"Error reading snapshot {path}: {e}") from e
            collections[name] = unwrap_collection(payload, *ENVELOPE_KEYS[name])
            self.logger.info(f"Loaded {len(collections[name])} {name} from {path.name}")
        return collections

    def get_products(self) -> List[Record]:
        return list(self._collections["products"])

    def get_sales(self) -> List[Record]:
        return list(self._collections["sales"])

    def get_purchases(self) -> List[Record]:
        return list(self._collections["purchases"])

    def get_customers(self) -> List[Record]:
        return list(self._collections["customers"])

    def get_suppliers(self) -> List[Record]:
        return list(self._collections["suppliers"])

    def get_staff(self) -> List[Record]:
        return list(self._collections["staff"])

    def get_users(self) -> List[Record]:
        return list(self._collections["users"])

    def get_notifications(self) -> List[Record]:
        return list(self._collections["notifications"])
