# src/tradejournal/export/report_exporter.py
"""Exporter that flattens analytics reports into CSV and JSON files."""
import json
import logging
from dataclasses import asdict, fields
from pathlib import Path

import pandas as pd

from tradejournal.analytics.models import (
    AnalyticsReport,
    DistributionBucket,
    EquityPoint,
    GroupedPerformance,
    HeatmapCell,
)
from tradejournal.export.settings import ExportSettings

logger = logging.getLogger(__name__)

SECTIONS = {
    "equity_curve": EquityPoint,
    "distribution": DistributionBucket,
    "monthly": GroupedPerformance,
    "by_strategy": GroupedPerformance,
    "by_symbol": GroupedPerformance,
    "by_trade_type": GroupedPerformance,
    "by_time_of_day": GroupedPerformance,
    "heatmap": HeatmapCell,
}


class ReportExporter:
    """Writes an AnalyticsReport as one CSV per section and/or a JSON document.

    CSV files are named {prefix}_{section}.csv; the JSON file {prefix}.json.
    """

    def __init__(self, settings: ExportSettings | None = None) -> None:
        """Initialize the exporter.

        Args:
            settings: Export configuration settings.
        """
        self._settings = settings or ExportSettings()
        self._output_dir = Path(self._settings.output_dir)

    def to_dict(self, report: AnalyticsReport) -> dict:
        """Convert a report to plain dictionaries and lists."""
        return asdict(report)

    def to_json(self, report: AnalyticsReport) -> str:
        """Serialize a report to a JSON document."""
        return json.dumps(self.to_dict(report), indent=2, default=str)

    def to_frames(self, report: AnalyticsReport) -> dict[str, pd.DataFrame]:
        """Flatten a report into one DataFrame per section.

        Args:
            report: The report to flatten.

        Returns:
            Dict of section name to DataFrame, starting with a one-row
            "metrics" frame. Empty sections keep their columns.
        """
        data = self.to_dict(report)

        metrics = dict(data["metrics"])
        metrics["skipped_trades"] = report.skipped_trades
        frames = {"metrics": pd.DataFrame([metrics])}

        for section, model in SECTIONS.items():
            columns = [f.name for f in fields(model)]
            frames[section] = pd.DataFrame(data[section], columns=columns)

        return frames

    def write(self, report: AnalyticsReport, prefix: str = "report") -> list[Path]:
        """Write the report in every configured format.

        Args:
            report: The report to export.
            prefix: File name prefix.

        Returns:
            Paths of the files written, empty when exporting is disabled.
        """
        if not self._settings.enabled:
            logger.info("Report export disabled, nothing written")
            return []

        self._output_dir.mkdir(parents=True, exist_ok=True)

        written: list[Path] = []
        if "csv" in self._settings.formats:
            written.extend(self.write_csv(report, prefix))
        if "json" in self._settings.formats:
            written.append(self.write_json(report, prefix))

        logger.info(f"Exported report to {len(written)} files in {self._output_dir}")
        return written

    def write_csv(self, report: AnalyticsReport, prefix: str = "report") -> list[Path]:
        """Write one CSV file per report section."""
        self._output_dir.mkdir(parents=True, exist_ok=True)
        float_format = f"%.{self._settings.float_precision}f"

        paths: list[Path] = []
        for section, frame in self.to_frames(report).items():
            path = self._output_dir / f"{prefix}_{section}.csv"
            frame.to_csv(path, index=False, float_format=float_format)
            paths.append(path)

        return paths

    def write_json(self, report: AnalyticsReport, prefix: str = "report") -> Path:
        """Write the whole report as one JSON file."""
        self._output_dir.mkdir(parents=True, exist_ok=True)
        path = self._output_dir / f"{prefix}.json"
        path.write_text(self.to_json(report))
        return path
