"""Report exporters for reconciliation results."""

from .csv_exporter import CSVReportExporter, safe_filename
from .excel_generator import ExcelReportGenerator

__all__ = ["CSVReportExporter", "ExcelReportGenerator", "safe_filename"]
