"""ZONECHECK: commercial zone polygon parsing and overlap detection."""

__version__ = "1.0.0"
