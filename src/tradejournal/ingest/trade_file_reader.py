# src/tradejournal/ingest/trade_file_reader.py
"""Reader for trade exports in JSON or CSV form."""
import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)


class TradeFileReader:
    """Loads raw trade records from a file.

    JSON files hold either a list of records or an object with a "trades"
    list. CSV files have one record per row with the trade field names as
    headers; empty cells become None. Records are returned unparsed; the
    analytics normalizer decides which ones are valid.
    """

    def read(self, path: Path) -> list[dict[str, Any]]:
        """Read trade records from a file.

        Args:
            path: Path to a .json or .csv file.

        Returns:
            Raw trade records in file order.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the extension or JSON layout is unsupported.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Trade file not found: {path}")

        suffix = path.suffix.lower()
        if suffix == ".json":
            records = self._read_json(path)
        elif suffix == ".csv":
            records = self._read_csv(path)
        else:
            raise ValueError(f"Unsupported trade file type: {path.suffix}")

        logger.info(f"Read {len(records)} trade records from {path}")
        return records

    def _read_json(self, path: Path) -> list[dict[str, Any]]:
        data = json.loads(path.read_text())
        if isinstance(data, dict):
            data = data.get("trades")
        if not isinstance(data, list):
            raise ValueError(f"{path} must contain a list of trades or a 'trades' list")
        return data

    def _read_csv(self, path: Path) -> list[dict[str, Any]]:
        frame = pd.read_csv(path, dtype=str, keep_default_na=False)
        records = frame.to_dict(orient="records")
        return [
            {key: (value if value != "" else None) for key, value in record.items()}
            for record in records
        ]
