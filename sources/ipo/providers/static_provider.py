"""
Static IPO dataset used as the fallback source.

Reads data/ipos.json, already bucketed as {ongoing, upcoming, listed}, and
returns it as-is. Records are not re-classified, and keys beyond the model
fields are kept. A record that fails validation is skipped and logged; the
rest of the file still loads.
"""

import datetime
import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from models import IPOCollection, IPORecord, IPOStatus
from .base import IPODataProvider

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path(__file__).parent.parent.parent.parent / "data" / "ipos.json"


class StaticIPOProvider(IPODataProvider):
    """Fallback IPO provider backed by a local JSON file."""

    def __init__(self, path: Optional[str] = None):
        super().__init__()
        self.path = Path(path) if path else DEFAULT_PATH
        self.name = "static"

    def fetch(self, today: Optional[datetime.date] = None) -> IPOCollection:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading static IPO data from {self.path}: {e}")
            return IPOCollection()

        if not isinstance(raw, dict):
            logger.error(f"Static IPO data in {self.path} is not an object of status buckets")
            return IPOCollection()

        ipos = IPOCollection(**{
            status.value: self._load_bucket(status.value, raw.get(status.value, []))
            for status in IPOStatus
        })
        logger.info(f"Loaded static IPO data as fallback ({ipos.total()} records)")
        return ipos

    def _load_bucket(self, status: str, rows) -> List[IPORecord]:
        if not isinstance(rows, list):
            logger.warning(f"Static IPO bucket '{status}' is not a list, skipping")
            return []

        records = []
        for i, row in enumerate(rows):
            try:
                records.append(IPORecord.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping static IPO {status}[{i}]: {e.error_count()} validation error(s)")
        return records
