"""Export of analytics reports to flat file formats."""

from .report_exporter import ReportExporter
from .settings import ExportSettings

__all__ = ["ExportSettings", "ReportExporter"]
