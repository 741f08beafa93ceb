from __future__ import annotations
import json
import logging
import os
from pathlib import Path
import pandas as pd

from data_io import empty_records, normalize_records, upsert_by_bl

logger = logging.getLogger(__name__)

class StoreError(RuntimeError):
    pass

class ShipmentStore:
    """Shipment documents kept as a JSON array on disk, keyed by bl_awb."""

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def fetch_all(self) -> pd.DataFrame:
        if not self.path.exists():
            return empty_records()
        try:
            docs = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        except (OSError, ValueError) as e:
            raise StoreError(f"Could not read shipments from {self.path}: {e}") from e
        if not isinstance(docs, list):
            raise StoreError(f"{self.path} does not hold a list of shipments")
        df = normalize_records(pd.DataFrame(docs))
        logger.info("Fetched %d shipment(s) from %s", len(df), self.path)
        return df

    def upsert(self, incoming: pd.DataFrame) -> pd.DataFrame:
        """Write incoming records by bl_awb, then return the refetched collection."""
        merged = upsert_by_bl(self.fetch_all(), incoming)
        self._write(merged)
        logger.info("Upserted %d shipment(s); store now holds %d", len(incoming), len(merged))
        return self.fetch_all()

    def _write(self, df: pd.DataFrame) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            tmp.write_text(df.to_json(orient="records", date_format="iso"), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            raise StoreError(f"Could not write shipments to {self.path}: {e}") from e
