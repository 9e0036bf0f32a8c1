"""FastMCP server exposing skill tree generation tools."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING

from fastmcp import FastMCP

from skill_tree.mcp.schemas import (
    ConnectionOutput,
    NodeOutput,
    SkillSummary,
    SkillTreeInput,
    SkillTreeOutput,
    TaxonomySourceInfo,
    TaxonomySourcesOutput,
)
from skill_tree.nodes.rendering.svg import render_error_svg, render_svg

if TYPE_CHECKING:
    from skill_tree.memory.taxonomy_store import TaxonomyStore
    from skill_tree.workflows.models import SkillTreeResult
    from skill_tree.workflows.pipeline import SkillTreePipeline

logger = logging.getLogger(__name__)

# Create FastMCP server instance
mcp = FastMCP("skill-tree")

# Global state (lazy initialized)
_pipeline: SkillTreePipeline | None = None
_store: TaxonomyStore | None = None
_init_lock = asyncio.Lock()


async def get_pipeline() -> SkillTreePipeline:
    """Get or initialize the skill tree pipeline."""
    global _pipeline, _store

    async with _init_lock:
        if _pipeline is None:
            from skill_tree.memory.taxonomy_store import TaxonomyStore
            from skill_tree.workflows.pipeline import SkillTreePipeline

            logger.info("Initializing skill tree pipeline...")
            _store = TaxonomyStore.default()
            _pipeline = SkillTreePipeline(_store)
            logger.info("Pipeline initialized")

        return _pipeline


async def get_store() -> TaxonomyStore:
    """Get the taxonomy store, initializing if needed."""
    await get_pipeline()  # Ensures store is initialized
    assert _store is not None
    return _store


def result_to_output(result: SkillTreeResult, include_svg: bool = True) -> SkillTreeOutput:
    """Flatten a pipeline result into the tool's output model."""
    layout = result.layout
    return SkillTreeOutput(
        center_label=result.center_label,
        skills=[
            SkillSummary(
                name=s.name,
                category=s.category,
                level=s.level,
                parent=s.parent_name,
                depth=s.tree_depth,
                repo_count=s.repo_count,
                inferred=s.inferred,
            )
            for s in result.hierarchy
        ],
        nodes=[
            NodeOutput(
                id=n.id,
                label=n.label,
                type=n.node_type.value,
                x=n.position.x,
                y=n.position.y,
                width=n.bounding_box.w,
                height=n.bounding_box.h,
            )
            for n in layout.nodes
        ],
        connections=[
            ConnectionOutput(
                source=c.source_id,
                target=c.target_id,
                x1=c.from_point.x,
                y1=c.from_point.y,
                x2=c.to_point.x,
                y2=c.to_point.y,
            )
            for c in layout.connections
        ],
        width=layout.canvas_width,
        height=layout.canvas_height,
        sources=result.sources,
        svg=render_svg(layout) if include_svg else None,
    )


def build_skill_tree(input: SkillTreeInput, pipeline: SkillTreePipeline) -> SkillTreeOutput:
    """Run the pipeline for a tool request, reporting configuration errors inline."""
    try:
        result = pipeline.run_for_repos(
            input.repos,
            center_label=input.center_label,
            include_forks=input.include_forks,
            sources=input.sources,
        )
    except (ValueError, LookupError, OSError) as e:
        # Taxonomy configuration defects surface as an error payload
        logger.exception("Skill tree generation failed for %s", input.center_label)
        message = str(e)
        return SkillTreeOutput(
            center_label=input.center_label,
            skills=[],
            nodes=[],
            connections=[],
            width=0.0,
            height=0.0,
            svg=render_error_svg(message) if input.include_svg else None,
            error=message,
        )
    return result_to_output(result, include_svg=input.include_svg)


def describe_sources(store: TaxonomyStore) -> TaxonomySourcesOutput:
    """Summarize every registered taxonomy source."""
    infos: list[TaxonomySourceInfo] = []
    for name in store.source_names():
        catalog = store.load([name])
        infos.append(
            TaxonomySourceInfo(
                name=name,
                entry_count=len(catalog),
                categories=sorted(catalog.categories()),
            )
        )
    return TaxonomySourcesOutput(sources=infos)


@mcp.tool
async def generate_skill_tree(input: SkillTreeInput) -> SkillTreeOutput:
    """Infer skills from repos and lay out a skill tree."""
    pipeline = await get_pipeline()
    return build_skill_tree(input, pipeline)


@mcp.tool
async def list_taxonomy_sources() -> TaxonomySourcesOutput:
    """List available taxonomy sources."""
    store = await get_store()
    return describe_sources(store)


def main() -> None:
    """Run the MCP server over stdio."""
    # Configure logging to stderr (never print to stdout for MCP)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    mcp.run()


if __name__ == "__main__":
    main()
