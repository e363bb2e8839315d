"""Tests for log_search/executor.py"""

import json
from unittest.mock import Mock

from elasticsearch import ApiError, ConnectionError as ESConnectionError

from log_search.executor import Document, SearchError, SearchExecutor, SearchResult
from log_search.query import DEFAULT_WINDOW, FuzzyMatch, SearchWindow, WildcardMatch

INDEX = "filebeat-test"


class TestExecute:
    def test_submits_native_query_with_window(self, fake_client):
        executor = SearchExecutor(fake_client)
        executor.execute(INDEX, WildcardMatch("status", "err*"), DEFAULT_WINDOW)

        assert fake_client.calls == [{
            "index": INDEX,
            "query": {"wildcard": {"status": {"value": "err*"}}},
            "from_": 0,
            "size": 100,
        }]

    def test_maps_hits_in_backend_order(self, fake_client, make_hits):
        sources = [{"message": "c"}, {"message": "a"}, {"message": "b"}]
        fake_client.queue(make_hits(sources))

        result = SearchExecutor(fake_client).execute(
            INDEX, FuzzyMatch("message", "abc"), DEFAULT_WINDOW)

        assert isinstance(result, SearchResult)
        assert result.hit_count == 3
        assert [json.loads(d.body) for d in result.documents] == sources
        assert [d.id for d in result.documents] == ["0", "1", "2"]

    def test_empty_response(self, fake_client):
        result = SearchExecutor(fake_client).execute(
            INDEX, FuzzyMatch("status", "ok"), DEFAULT_WINDOW)
        assert result == SearchResult(documents=[], total=0)
        assert result.hit_count == 0

    def test_total_reported_by_backend(self, fake_client, make_hits):
        fake_client.queue(make_hits([{"a": 1}], total=4200))
        result = SearchExecutor(fake_client).execute(
            INDEX, FuzzyMatch("a", "one"), DEFAULT_WINDOW)
        assert result.total == 4200
        assert result.hit_count == 1

    def test_legacy_integer_total(self, fake_client, make_hits):
        response = make_hits([{"a": 1}])
        response["hits"]["total"] = 7
        fake_client.queue(response)
        result = SearchExecutor(fake_client).execute(
            INDEX, FuzzyMatch("a", "one"), DEFAULT_WINDOW)
        assert result.total == 7

    def test_hit_count_capped_at_window_limit(self, fake_client, make_hits):
        fake_client.queue(make_hits([{"n": i} for i in range(5)]))
        result = SearchExecutor(fake_client).execute(
            INDEX, FuzzyMatch("n", "one"), SearchWindow(offset=0, limit=2))
        assert result.hit_count == 2
        assert json.loads(result.documents[1].body) == {"n": 1}

    def test_body_keeps_non_ascii(self, fake_client, make_hits):
        fake_client.queue(make_hits([{"message": "déjà vu"}]))
        result = SearchExecutor(fake_client).execute(
            INDEX, FuzzyMatch("message", "deja"), DEFAULT_WINDOW)
        assert result.documents == [Document(id="0", body='{"message": "déjà vu"}')]

    def test_hit_without_source_keeps_other_hits(self, fake_client, make_hits):
        response = make_hits([{"status": "ok"}, {"status": "error"}])
        del response["hits"]["hits"][0]["_source"]
        fake_client.queue(response)

        result = SearchExecutor(fake_client).execute(
            INDEX, FuzzyMatch("status", "ok"), DEFAULT_WINDOW)

        assert isinstance(result, SearchResult)
        assert result.documents == [
            Document(id="0", body="null"),
            Document(id="1", body='{"status": "error"}'),
        ]


class TestErrors:
    def test_transport_error_returned_not_raised(self, fake_client):
        cause = ESConnectionError("connection refused")
        fake_client.queue(cause)

        outcome = SearchExecutor(fake_client).execute(
            INDEX, FuzzyMatch("status", "ok"), DEFAULT_WINDOW)

        assert isinstance(outcome, SearchError)
        assert outcome.cause is cause
        assert outcome.message

    def test_api_error_returned_not_raised(self, fake_client):
        cause = ApiError("search_phase_execution_exception",
                         meta=Mock(status=400), body={"error": "bad"})
        fake_client.queue(cause)

        outcome = SearchExecutor(fake_client).execute(
            INDEX, WildcardMatch("status", "e?r"), DEFAULT_WINDOW)

        assert isinstance(outcome, SearchError)
        assert outcome.cause is cause

    def test_malformed_response(self, fake_client):
        fake_client.queue({"unexpected": True})
        outcome = SearchExecutor(fake_client).execute(
            INDEX, FuzzyMatch("status", "ok"), DEFAULT_WINDOW)
        assert isinstance(outcome, SearchError)
        assert "malformed" in outcome.message

    def test_non_object_hit(self, fake_client):
        fake_client.queue({"hits": {"hits": ["oops"]}})
        outcome = SearchExecutor(fake_client).execute(
            INDEX, FuzzyMatch("status", "ok"), DEFAULT_WINDOW)
        assert isinstance(outcome, SearchError)
