import dataclasses

import pytest

from metaai.client.models import Reference, SourceSet


def test_source_set_keeps_length_and_order():
    references = [Reference(link=f"https://example.com/{i}", title=f"Title {i}") for i in (5, 2, 9, 1)]

    sources = SourceSet.from_references("BING", "query", references)

    assert len(sources) == len(references)
    assert list(sources) == references
    assert isinstance(sources.references, tuple)


def test_source_set_is_immutable():
    sources = SourceSet("BING", "query", [Reference("https://example.com", "Example")])

    with pytest.raises(dataclasses.FrozenInstanceError):
        sources.search_query = "other"  # type: ignore[misc]


def test_source_set_to_dict():
    sources = SourceSet("BING", "query", (Reference("https://example.com", "Example"),))

    assert sources.to_dict() == {
        "search_engine": "BING",
        "search_query": "query",
        "references": [{"link": "https://example.com", "title": "Example"}],
    }
