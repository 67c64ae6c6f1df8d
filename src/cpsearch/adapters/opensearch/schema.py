"""Index schema and query bodies for the postal-code index."""

from __future__ import annotations

from typing import Any

from cpsearch.adapters.base.exceptions import EmptyQueryError

TEXT_FIELDS = ("id", "ciudad", "colonia", "cp", "delegacion")
SORT_FIELD = "colonia.keyword"
DEFAULT_SIZE = 10

MIN_GRAM = 1
MAX_GRAM = 10


def _text_field(**extra: Any) -> dict[str, Any]:
    field: dict[str, Any] = {
        "type": "text",
        "store": True,
        "analyzer": "autocomplete",
        "search_analyzer": "autocomplete_search",
    }
    field.update(extra)
    return field


# Edge n-grams are produced at index time only; queries are tokenized on
# whitespace and lowercased so "Rom" matches "Roma Norte".
INDEX_BODY: dict[str, Any] = {
    "settings": {
        "index": {
            "max_ngram_diff": MAX_GRAM - MIN_GRAM,
            "analysis": {
                "analyzer": {
                    "autocomplete": {
                        "type": "custom",
                        "tokenizer": "whitespace",
                        "filter": ["lowercase", "engram"],
                    },
                    "autocomplete_search": {
                        "type": "custom",
                        "tokenizer": "whitespace",
                        "filter": ["lowercase"],
                    },
                },
                "filter": {
                    "engram": {
                        "type": "edge_ngram",
                        "min_gram": MIN_GRAM,
                        "max_gram": MAX_GRAM,
                    }
                },
            },
        }
    },
    "mappings": {
        "properties": {
            "id": _text_field(),
            "ciudad": _text_field(),
            "colonia": _text_field(fields={"keyword": {"type": "keyword"}}),
            "cp": _text_field(),
            "delegacion": _text_field(),
            "location": {"type": "geo_point"},
        }
    },
}


def build_term_query(term: str, size: int = DEFAULT_SIZE) -> dict[str, Any]:
    """Build the search body for a free-text term.

    Every token of ``term`` must match (in any of the text fields), results
    are sorted by neighborhood name ascending and capped at ``size``.

    Args:
        term: User-supplied search text.
        size: Maximum number of hits to request.

    Returns:
        A query DSL body ready for ``client.search(body=...)``.

    Raises:
        EmptyQueryError: If ``term`` is empty or only whitespace.
    """
    term = (term or "").strip()
    if not term:
        raise EmptyQueryError("No search term supplied")

    return {
        "query": {
            "multi_match": {
                "query": term,
                "fields": list(TEXT_FIELDS),
                "type": "cross_fields",
                "operator": "and",
            }
        },
        "size": size,
        "sort": [{SORT_FIELD: {"order": "asc"}}],
    }
