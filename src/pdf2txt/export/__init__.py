from .page_data import deserialize_pages, serialize_pages
from .report import format_layout_report

__all__ = ["deserialize_pages", "format_layout_report", "serialize_pages"]
