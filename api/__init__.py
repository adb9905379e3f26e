"""ZONECHECK HTTP API and command-line tools."""
