"""Read-only index summary shown before the search loop starts."""

import logging
from dataclasses import dataclass
from typing import Callable

from elasticsearch import ApiError, NotFoundError, TransportError

from log_search.presenter import paint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexInfo:
    name: str
    health: str
    status: str
    docs_count: int
    store_size: str


def _info_from_row(row: dict) -> IndexInfo:
    docs = row.get("docs.count")
    return IndexInfo(
        name=row.get("index", ""),
        health=row.get("health") or "?",
        status=row.get("status") or "?",
        docs_count=int(docs) if docs not in (None, "") else 0,
        store_size=row.get("store.size") or "?",
    )


def count_indexes(client) -> int:
    return len(client.indices.get_alias(index="*"))


def list_indexes(client) -> list[IndexInfo]:
    rows = client.cat.indices(format="json")
    return sorted((_info_from_row(r) for r in rows), key=lambda i: i.name)


def describe_index(client, name: str) -> IndexInfo | None:
    """Return the cat row for one index, or None if it does not exist."""
    try:
        rows = client.cat.indices(index=name, format="json")
    except NotFoundError:
        return None
    for row in rows:
        if row.get("index") == name:
            return _info_from_row(row)
    return None


def _format_info(info: IndexInfo) -> str:
    return (f"{info.name}  health={info.health} status={info.status} "
            f"docs={info.docs_count} size={info.store_size}")


def show_index_summary(client, index: str,
                       write: Callable[[str], None] = print, color: bool = True):
    """Print index count, the target index and every index on the cluster.

    Backend failures skip the summary; they never stop the session.
    """
    try:
        total = count_indexes(client)
        target = describe_index(client, index)
        all_indexes = list_indexes(client)
    except (ApiError, TransportError) as e:
        logger.warning("Could not fetch index summary: %s", e)
        return

    write(paint("Number of Indexes    ----> ", "label", color) + str(total))
    if target is None:
        write(paint("Indexes    ----> ", "label", color) + f"{index} (not found)")
    else:
        write(paint("Indexes    ----> ", "label", color) + _format_info(target))

    write("")
    write(paint("All Indexes    ----> ", "label", color))
    for info in all_indexes:
        write("  " + _format_info(info))
    write("")
    write(paint("Search   ----> ", "label", color))
