"""Interactive search loop as an explicit state machine.

    AWAIT_FIELD -> AWAIT_VALUE -> SEARCHING -> PRESENTING -> AWAIT_CONTINUE
         ^                                                        |
         +-------------------- reply contains "y" ----------------+
                                   otherwise -> DONE

Input and output are injected callables so the loop can be driven from a
script. EOFError and KeyboardInterrupt from the input source propagate.
"""

import logging
from enum import Enum
from typing import Callable

from log_search.executor import SearchError, SearchExecutor, SearchResult
from log_search.presenter import ResultPresenter, paint
from log_search.query import (
    DEFAULT_WINDOW,
    QueryDescription,
    SearchWindow,
    build_query,
    is_valid_field_name,
    is_valid_search_value,
)

logger = logging.getLogger(__name__)

FIELD_PROMPT = "Please enter the field name: "
VALUE_PROMPT = "Please enter the search value (can contain wildcards): "
CONTINUE_PROMPT = "Would you like to perform another search? Y/N"
AFFIRMATIVE = "y"


class State(Enum):
    AWAIT_FIELD = "await_field"
    AWAIT_VALUE = "await_value"
    SEARCHING = "searching"
    PRESENTING = "presenting"
    AWAIT_CONTINUE = "await_continue"
    DONE = "done"


def wants_another_search(reply: str) -> bool:
    """True if the reply contains the affirmative token (case-insensitive).

    Any "y" anywhere counts, so "okay" or "any" also start another search.
    """
    return AFFIRMATIVE in reply.lower()


class InteractionLoop:
    def __init__(
        self,
        executor: SearchExecutor,
        index: str,
        presenter: ResultPresenter | None = None,
        read: Callable[[], str] = input,
        write: Callable[[str], None] = print,
        window: SearchWindow = DEFAULT_WINDOW,
        color: bool = True,
    ):
        self._executor = executor
        self._index = index
        self._presenter = presenter or ResultPresenter(write=write, color=color)
        self._read = read
        self._write = write
        self._window = window
        self._color = color

        self.state = State.AWAIT_FIELD
        self.searches = 0
        self._reset_iteration()

    def _reset_iteration(self):
        self.field: str | None = None
        self.value: str | None = None
        self.query: QueryDescription | None = None
        self.outcome: SearchResult | SearchError | None = None

    def _prompt(self, text: str) -> str:
        self._write(paint(text, "result", self._color))
        return self._read()

    def step(self) -> State:
        """Perform one transition and return the new state."""
        if self.state is State.AWAIT_FIELD:
            reply = self._prompt(FIELD_PROMPT)
            if is_valid_field_name(reply):
                self.field = reply
                self.state = State.AWAIT_VALUE
            else:
                logger.debug("Rejected field name %r", reply)

        elif self.state is State.AWAIT_VALUE:
            reply = self._prompt(VALUE_PROMPT)
            if is_valid_search_value(reply):
                self.value = reply
                self.state = State.SEARCHING

        elif self.state is State.SEARCHING:
            self.query = build_query(self.field, self.value)
            self.outcome = self._executor.execute(self._index, self.query, self._window)
            self.searches += 1
            self.state = State.PRESENTING

        elif self.state is State.PRESENTING:
            if isinstance(self.outcome, SearchError):
                self._presenter.present_error(self.outcome)
            else:
                self._presenter.present(self.outcome)
            self.state = State.AWAIT_CONTINUE

        elif self.state is State.AWAIT_CONTINUE:
            reply = self._prompt(CONTINUE_PROMPT)
            if wants_another_search(reply):
                self._reset_iteration()
                self.state = State.AWAIT_FIELD
            else:
                self.state = State.DONE

        return self.state

    def run(self) -> int:
        """Drive the loop until the operator declines. Returns searches executed."""
        while self.state is not State.DONE:
            self.step()
        logger.info("Search session ended after %d search(es)", self.searches)
        return self.searches
