"""Tests for the index schema and the term query builder."""

from __future__ import annotations

import pytest

from cpsearch.adapters.base.exceptions import EmptyQueryError
from cpsearch.adapters.opensearch.schema import INDEX_BODY, TEXT_FIELDS, build_term_query


class TestBuildTermQuery:
    @pytest.mark.parametrize("term", ["Roma", "roma norte", "06700", "Cuauhtémoc Roma"])
    def test_requests_ten_results_sorted_by_colonia(self, term: str) -> None:
        body = build_term_query(term)
        assert body["size"] == 10
        assert body["sort"] == [{"colonia.keyword": {"order": "asc"}}]

    def test_all_tokens_must_match_across_fields(self) -> None:
        match = build_term_query("roma norte")["query"]["multi_match"]
        assert match["query"] == "roma norte"
        assert match["operator"] == "and"
        assert match["type"] == "cross_fields"
        assert set(match["fields"]) == set(TEXT_FIELDS)

    def test_term_is_stripped(self) -> None:
        assert build_term_query("  Roma  ")["query"]["multi_match"]["query"] == "Roma"

    def test_custom_size(self) -> None:
        assert build_term_query("Roma", size=3)["size"] == 3

    def test_quotes_stay_inside_the_value(self) -> None:
        term = 'Roma", "size": 1000'
        body = build_term_query(term)
        assert body["size"] == 10
        assert body["query"]["multi_match"]["query"] == term

    @pytest.mark.parametrize("term", ["", "   ", "\t\n", None])
    def test_empty_term_raises(self, term: str | None) -> None:
        with pytest.raises(EmptyQueryError):
            build_term_query(term)  # type: ignore[arg-type]


class TestIndexBody:
    def test_autocomplete_analyzer(self) -> None:
        analysis = INDEX_BODY["settings"]["index"]["analysis"]
        analyzer = analysis["analyzer"]["autocomplete"]
        assert analyzer["tokenizer"] == "whitespace"
        assert analyzer["filter"] == ["lowercase", "engram"]
        engram = analysis["filter"]["engram"]
        assert engram["type"] == "edge_ngram"
        assert (engram["min_gram"], engram["max_gram"]) == (1, 10)

    def test_ngram_diff_allows_gram_range(self) -> None:
        assert INDEX_BODY["settings"]["index"]["max_ngram_diff"] >= 9

    def test_text_fields_are_stored_and_analyzed(self) -> None:
        properties = INDEX_BODY["mappings"]["properties"]
        for name in TEXT_FIELDS:
            assert properties[name]["type"] == "text"
            assert properties[name]["store"] is True
            assert properties[name]["analyzer"] == "autocomplete"

    def test_colonia_has_sortable_keyword(self) -> None:
        colonia = INDEX_BODY["mappings"]["properties"]["colonia"]
        assert colonia["fields"]["keyword"]["type"] == "keyword"

    def test_location_is_geo_point(self) -> None:
        assert INDEX_BODY["mappings"]["properties"]["location"] == {"type": "geo_point"}
