"""Shared pytest fixtures: an in-memory stand-in for the Elasticsearch client."""

from __future__ import annotations

import pytest


def make_hits(sources: list[dict], total: int | None = None) -> dict:
    """Build a search response body shaped like the backend's."""
    hits = [
        {"_index": "logs", "_id": str(i), "_score": 1.0, "_source": src}
        for i, src in enumerate(sources)
    ]
    return {
        "took": 1,
        "timed_out": False,
        "hits": {
            "total": {"value": len(sources) if total is None else total, "relation": "eq"},
            "max_score": 1.0,
            "hits": hits,
        },
    }


class FakeSearchClient:
    """Records search calls and replays queued responses or errors."""

    def __init__(self, responses=None):
        self.calls: list[dict] = []
        self._responses = list(responses or [])

    def queue(self, response):
        self._responses.append(response)

    def search(self, **kwargs):
        self.calls.append(kwargs)
        response = self._responses.pop(0) if self._responses else make_hits([])
        if isinstance(response, Exception):
            raise response
        return response


class ScriptedInput:
    """Callable returning scripted replies; raises EOFError when exhausted."""

    def __init__(self, replies: list[str]):
        self._replies = list(replies)
        self.prompts_answered = 0

    def __call__(self) -> str:
        if not self._replies:
            raise EOFError
        self.prompts_answered += 1
        return self._replies.pop(0)


@pytest.fixture()
def fake_client() -> FakeSearchClient:
    return FakeSearchClient()


@pytest.fixture()
def output() -> list[str]:
    """Line sink collecting everything written by presenter and loop."""
    return []


@pytest.fixture(name="make_hits")
def make_hits_fixture():
    return make_hits


@pytest.fixture()
def scripted():
    """Factory for scripted operator input."""
    return ScriptedInput
