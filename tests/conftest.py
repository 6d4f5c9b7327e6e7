"""Shared graph-stack fixtures.

Each fixture returns ``(gs, ids)`` where ``ids`` maps item labels to node ids.
Items are pushed without ancestors first and wired up with ``add_ancestors``.
"""

from __future__ import annotations

from typing import Dict, Iterable, Tuple

import pytest

from gstack import GraphStack


def build(
    labels: Iterable[str], edges: Dict[str, Iterable[str]]
) -> Tuple[GraphStack, Dict[str, int]]:
    gs: GraphStack = GraphStack()
    ids = {label: gs.push(label) for label in labels}
    for label, ancestors in edges.items():
        gs.add_ancestors(ids[label], [ids[a] for a in ancestors])
    return gs, ids


@pytest.fixture
def ladder():
    #  a - b - c - e - f - g - h
    #       \ d -/------/
    return build(
        "abcdefgh",
        {
            "b": "a",
            "c": "b",
            "d": "b",
            "e": "cd",
            "f": "e",
            "g": "df",
            "h": "g",
        },
    )


@pytest.fixture
def x_shape():
    #  a - b - c
    #  d /  \ e
    return build("abcde", {"b": "ad", "c": "b", "e": "b"})


@pytest.fixture
def disjoint():
    #  a - b - c
    #  d - e
    return build("abcde", {"b": "a", "c": "b", "e": "d"})


@pytest.fixture
def builder():
    """Fixture exposing `build` for tests that need a custom shape."""
    return build
