"""Console rendering of search outcomes, optionally ANSI-colored."""

from typing import Callable

from log_search.executor import SearchError, SearchResult

# ANSI color codes
COLORS = {
    "label": "\033[0;94m",    # bright blue
    "result": "\033[0;92m",   # bright green
    "empty": "\033[0;33m",    # yellow
    "error": "\033[0;31m",    # red
}
RESET = "\033[0m"


def paint(text: str, role: str, color: bool = True) -> str:
    if not color:
        return text
    return f"{COLORS[role]}{text}{RESET}"


class ResultPresenter:
    """Writes a hit count and each document body to a line sink."""

    def __init__(self, write: Callable[[str], None] = print, color: bool = True):
        self._write = write
        self._color = color

    def present(self, result: SearchResult):
        count = result.hit_count
        self._write(paint("Number of hits = ", "label", self._color) + str(count))

        if count == 0:
            self._write(paint("No results found!", "empty", self._color))
            return

        if result.total is not None and result.total > count:
            self._write(f"(showing first {count} of {result.total} matches)")

        for i, document in enumerate(result.documents):
            self._write(paint(f" Result [ {i} ]", "result", self._color))
            self._write(document.body)
            self._write("")

    def present_error(self, error: SearchError):
        self._write(paint(f"Search failed: {error.message}", "error", self._color))
