"""Query construction: pick fuzzy or wildcard semantics from the search value."""

from dataclasses import dataclass

WILDCARD_GLYPHS = ("*", "?")

FUZZINESS = "AUTO"
PREFIX_LENGTH = 3
MAX_EXPANSIONS = 12


@dataclass(frozen=True)
class FuzzyMatch:
    field: str
    value: str
    fuzziness: str = FUZZINESS
    prefix_length: int = PREFIX_LENGTH
    max_expansions: int = MAX_EXPANSIONS


@dataclass(frozen=True)
class WildcardMatch:
    field: str
    pattern: str


QueryDescription = FuzzyMatch | WildcardMatch


@dataclass(frozen=True)
class SearchWindow:
    offset: int = 0
    limit: int = 100


DEFAULT_WINDOW = SearchWindow()


def has_wildcard(text: str) -> bool:
    return any(glyph in text for glyph in WILDCARD_GLYPHS)


def is_valid_field_name(text: str) -> bool:
    """Non-empty and free of wildcard glyphs."""
    return len(text) > 0 and not has_wildcard(text)


def is_valid_search_value(text: str) -> bool:
    return len(text) > 0


def build_query(field: str, value: str) -> QueryDescription:
    """Wildcard match if the value carries a glob glyph, otherwise fuzzy match.

    The field is assumed to be valid already. A literal ``*`` or ``?`` cannot
    be searched for: the glyph always switches to pattern matching.
    """
    if has_wildcard(value):
        return WildcardMatch(field=field, pattern=value)
    return FuzzyMatch(field=field, value=value)


def to_native_query(query: QueryDescription) -> dict:
    """Render a query description into the backend's JSON query DSL."""
    if isinstance(query, WildcardMatch):
        return {"wildcard": {query.field: {"value": query.pattern}}}
    return {
        "match": {
            query.field: {
                "query": query.value,
                "fuzziness": query.fuzziness,
                "prefix_length": query.prefix_length,
                "max_expansions": query.max_expansions,
            }
        }
    }
