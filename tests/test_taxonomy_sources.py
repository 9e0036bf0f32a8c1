"""Tests for bundled, file and roadmap taxonomy sources."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import httpx
import pytest

from skill_tree.nodes.ingestion.taxonomy_parser import parse_taxonomy_payload
from skill_tree.nodes.ingestion.taxonomy_sources import (
    JsonFileSource,
    PackagedSource,
    RoadmapSource,
    bundled_source_names,
)

if TYPE_CHECKING:
    from pathlib import Path


class TestPackagedSource:
    def test_bundled_names(self) -> None:
        names = bundled_source_names()
        assert {"languages", "meta", "web", "data", "devops", "mobile"} <= set(names)
        assert names == sorted(names)

    def test_every_bundled_source_parses(self) -> None:
        for name in bundled_source_names():
            entries = parse_taxonomy_payload(PackagedSource(name).load(), source_name=name)
            assert entries, f"{name} produced no entries"

    def test_languages_content(self) -> None:
        entries = parse_taxonomy_payload(PackagedSource("languages").load(), "languages")
        by_key = {e.key: e for e in entries}
        assert by_key["typescript"].parent_key == "javascript"
        assert by_key["html"].weight == 0.5
        assert all(e.is_language for e in entries)

    def test_missing_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            PackagedSource("does-not-exist").load()


class TestJsonFileSource:
    def test_name_defaults_to_stem(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"entries": []}))
        assert JsonFileSource(path).name == "custom"
        assert JsonFileSource(path, source_name="mine").name == "mine"

    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"entries": [{"key": "deno", "name": "Deno"}]}))
        assert JsonFileSource(path).load()["entries"][0]["key"] == "deno"


def _client_factory(handler):  # type: ignore[no-untyped-def]
    def factory() -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(handler))

    return factory


class TestRoadmapSource:
    def test_falls_through_to_working_strategy(self) -> None:
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(str(request.url))
            if "second" in str(request.url):
                return httpx.Response(200, json={"nodes": [{"id": "a", "label": "A"}]})
            return httpx.Response(404)

        source = RoadmapSource(
            "frontend",
            strategies=("https://first.test/{name}", "https://second.test/{name}"),
            client_factory=_client_factory(handler),
        )
        data = source.load()

        assert data["nodes"][0]["id"] == "a"
        assert calls == ["https://first.test/frontend", "https://second.test/frontend"]

    def test_skips_payload_without_nodes(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if "first" in str(request.url):
                return httpx.Response(200, json={"message": "moved"})
            return httpx.Response(200, json=[{"id": "b", "label": "B"}])

        source = RoadmapSource(
            "backend",
            strategies=("https://first.test/{name}", "https://second.test/{name}"),
            client_factory=_client_factory(handler),
        )
        assert source.load() == [{"id": "b", "label": "B"}]

    def test_invalid_json_is_skipped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>not json</html>")

        source = RoadmapSource(
            "qa",
            strategies=("https://only.test/{name}",),
            client_factory=_client_factory(handler),
        )
        with pytest.raises(LookupError, match="qa"):
            source.load()

    def test_all_strategies_fail(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500)

        source = RoadmapSource(
            "devops",
            strategies=("https://a.test/{name}", "https://b.test/{name}"),
            client_factory=_client_factory(handler),
        )
        with pytest.raises(LookupError):
            source.load()
