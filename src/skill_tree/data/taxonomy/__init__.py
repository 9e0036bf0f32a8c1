"""Bundled taxonomy sources, one JSON file per source."""
