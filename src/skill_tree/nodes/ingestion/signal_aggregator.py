"""Aggregate raw repository records into a RepoSignal."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from skill_tree.entities.signals import RepoSignal

if TYPE_CHECKING:
    from collections.abc import Iterable

    from skill_tree.entities.signals import RepoRecord

logger = logging.getLogger(__name__)


def repo_text(repo: RepoRecord) -> str:
    """Lower-cased searchable text of one repository."""
    parts = [repo.name, repo.description or "", *repo.topics]
    return " ".join(p.strip() for p in parts if p and p.strip()).lower()


def aggregate_signal(
    repos: Iterable[RepoRecord],
    include_forks: bool = False,
) -> RepoSignal:
    """Combine repositories into a single normalized signal.

    Language byte counts are summed across repositories. A repository that
    reports no byte histogram contributes its primary language with one byte
    so it still registers. Forks are skipped unless ``include_forks``.
    """
    language_bytes: dict[str, int] = {}
    repo_texts: list[str] = []
    repo_topics: list[frozenset[str]] = []

    skipped = 0
    for repo in repos:
        if repo.fork and not include_forks:
            skipped += 1
            continue

        histogram = dict(repo.languages)
        if not histogram and repo.language:
            histogram = {repo.language: 1}
        for language, count in histogram.items():
            if count <= 0:
                continue
            language_bytes[language] = language_bytes.get(language, 0) + int(count)

        repo_texts.append(repo_text(repo))
        repo_topics.append(frozenset(t.strip().lower() for t in repo.topics if t.strip()))

    if skipped:
        logger.debug("Skipped %d forked repositories", skipped)

    ordered_bytes = dict(sorted(language_bytes.items(), key=lambda x: (-x[1], x[0])))
    return RepoSignal(
        language_bytes=ordered_bytes,
        search_text=" ".join(t for t in repo_texts if t),
        repo_topics=repo_topics,
        repo_texts=repo_texts,
    )
