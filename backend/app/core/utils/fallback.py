from typing import Callable, Generic, List, Optional, Tuple, TypeVar

from app.core.utils.logger import get_logger
from app.domain.exceptions import FallbackExhaustedError


T = TypeVar("T")

_logger = get_logger("fallback")


class FallbackChain(Generic[T]):
    """Ordered list of fallible sources; the first one that yields a value wins.

    A step "fails" when it returns None or raises. Exceptions are logged and
    absorbed so the next step gets its turn. Chains meant to be total should
    end with a step that always returns a value (see `otherwise`).

    Example::

        location = (
            FallbackChain("resolve_location")
            .then("directory", lambda: directory.lookup(text))
            .then("provider", lambda: search(text))
            .otherwise("default", lambda: DEFAULT)
            .run()
        )
    """

    def __init__(self, name: str):
        self.name = name
        self._steps: List[Tuple[str, Callable[[], Optional[T]]]] = []

    def then(self, step_name: str, fn: Callable[[], Optional[T]]) -> "FallbackChain[T]":
        self._steps.append((step_name, fn))
        return self

    def otherwise(self, step_name: str, fn: Callable[[], T]) -> "FallbackChain[T]":
        """Append the terminal step. Same as `then`, kept separate for readability."""
        return self.then(step_name, fn)

    def run(self) -> T:
        for step_name, fn in self._steps:
            try:
                result = fn()
            except Exception as e:
                _logger.warning("[%s] step '%s' failed: %s", self.name, step_name, e)
                continue
            if result is not None:
                _logger.debug("[%s] resolved by step '%s'", self.name, step_name)
                return result
            _logger.debug("[%s] step '%s' produced nothing", self.name, step_name)
        raise FallbackExhaustedError(self.name)
