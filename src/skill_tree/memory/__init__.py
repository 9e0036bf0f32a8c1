"""Memory package."""

from skill_tree.memory.taxonomy_cache import TaxonomyCache
from skill_tree.memory.taxonomy_catalog import TaxonomyCatalog
from skill_tree.memory.taxonomy_graph import TaxonomyCycleError, TaxonomyGraph
from skill_tree.memory.taxonomy_store import TaxonomySource, TaxonomyStore

__all__ = [
    "TaxonomyCache",
    "TaxonomyCatalog",
    "TaxonomyCycleError",
    "TaxonomyGraph",
    "TaxonomySource",
    "TaxonomyStore",
]
