"""Export modules for price tables."""

from .excel_exporter import build_excel_bytes, export_to_excel
from .price_table import CHANNEL_TITLES, build_export_sheets, build_price_table
from .print_exporter import export_to_print, generate_print_html

__all__ = [
    "CHANNEL_TITLES",
    "build_excel_bytes",
    "build_export_sheets",
    "build_price_table",
    "export_to_excel",
    "export_to_print",
    "generate_print_html",
]
