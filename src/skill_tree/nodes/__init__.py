"""Processing nodes: ingestion, matching, layout, rendering."""
