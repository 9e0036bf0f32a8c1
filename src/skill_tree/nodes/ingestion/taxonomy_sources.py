"""Taxonomy sources: bundled JSON, files on disk, and roadmap.sh."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any

import httpx

from skill_tree.config import TAXONOMY_CONFIG

logger = logging.getLogger(__name__)

ROADMAP_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

# Tried in order; the first usable payload wins
ROADMAP_URL_STRATEGIES: tuple[str, ...] = (
    "https://raw.githubusercontent.com/kamranahmedse/developer-roadmap/master/src/data/roadmaps/{name}/{name}.json",
    "https://raw.githubusercontent.com/kamranahmedse/developer-roadmap/master/public/roadmaps/{name}/{name}.json",
    "https://roadmap.sh/api/roadmaps/{name}",
    "https://raw.githubusercontent.com/kamranahmedse/developer-roadmap/master/src/data/roadmaps/{name}/content.json",
)

ROLE_BASED_ROADMAPS: tuple[str, ...] = (
    "frontend", "backend", "full-stack", "devops", "software-architect",
    "android", "ios", "react-native", "flutter",
    "python", "java", "javascript", "typescript", "golang", "rust", "cpp",
    "csharp", "php", "ruby", "scala", "kotlin", "swift",
    "react", "vue", "angular", "nodejs", "spring-boot", "laravel",
    "aspnet-core", "nestjs", "nextjs",
    "postgresql-dba", "mongodb", "sql",
    "docker", "kubernetes", "linux", "aws", "terraform", "ansible",
    "ai-data-scientist", "mlops", "data-analyst", "prompt-engineering", "ai-engineer",
    "cyber-security", "qa", "api-security",
    "blockchain", "game-developer", "ux-design", "system-design",
    "computer-science", "datastructures-and-algorithms", "git-github",
    "graphql", "api-design",
)


def bundled_source_names() -> list[str]:
    """Names of the taxonomy JSON files shipped with the package, sorted."""
    root = resources.files(TAXONOMY_CONFIG.package_data)
    return sorted(
        item.name.removesuffix(".json")
        for item in root.iterdir()
        if item.name.endswith(".json")
    )


@dataclass(frozen=True)
class PackagedSource:
    """A taxonomy bundled under ``skill_tree/data/taxonomy``."""

    name: str

    def load(self) -> Any:
        resource = resources.files(TAXONOMY_CONFIG.package_data) / f"{self.name}.json"
        if not resource.is_file():
            msg = f"No bundled taxonomy named '{self.name}'"
            raise FileNotFoundError(msg)
        return json.loads(resource.read_text(encoding="utf-8"))


@dataclass(frozen=True)
class JsonFileSource:
    """A taxonomy read from a JSON file; named after the file stem by default."""

    path: Path
    source_name: str | None = None

    @property
    def name(self) -> str:
        return self.source_name or self.path.stem

    def load(self) -> Any:
        return json.loads(self.path.read_text(encoding="utf-8"))


def _has_roadmap_shape(data: Any) -> bool:
    if isinstance(data, list):
        return True
    return isinstance(data, dict) and bool(data.get("nodes") or data.get("content"))


@dataclass
class RoadmapSource:
    """A roadmap.sh roadmap fetched over HTTP.

    Each URL strategy is attempted once with a fixed timeout; there is no
    retry loop here.
    """

    name: str
    timeout: float = TAXONOMY_CONFIG.request_timeout
    strategies: tuple[str, ...] = ROADMAP_URL_STRATEGIES
    client_factory: Callable[[], httpx.Client] | None = field(default=None, repr=False)

    def _client(self) -> httpx.Client:
        if self.client_factory is not None:
            return self.client_factory()
        return httpx.Client(
            timeout=self.timeout,
            headers={"User-Agent": ROADMAP_USER_AGENT, "Accept": "application/json"},
            follow_redirects=True,
        )

    def load(self) -> Any:
        with self._client() as client:
            for template in self.strategies:
                url = template.format(name=self.name)
                try:
                    response = client.get(url)
                    response.raise_for_status()
                    data = response.json()
                except (httpx.HTTPError, ValueError) as e:
                    logger.debug("Roadmap strategy %s failed: %s", url, e)
                    continue
                if _has_roadmap_shape(data):
                    logger.info("Fetched roadmap %s from %s", self.name, url)
                    return data

        msg = f"No roadmap strategy produced data for '{self.name}'"
        raise LookupError(msg)
