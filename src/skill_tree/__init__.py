"""Skill tree: taxonomy-driven skill inference and radial layout."""

__version__ = "0.1.0"
