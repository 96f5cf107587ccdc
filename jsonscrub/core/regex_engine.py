"""
Regex engine with timeout protection.

Every pattern the preprocessing stages run goes through this module. It uses
the third-party 'regex' module, whose native timeout support lets a stage give
up on catastrophic backtracking instead of hanging the caller.
"""

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

import regex

IGNORECASE = regex.IGNORECASE
MULTILINE = regex.MULTILINE


class TimeoutBehavior(Enum):
    """What a RegexEngine does when a pattern runs out of time."""

    RAISE_EXCEPTION = "raise"  # Raise RegexTimeoutError
    RETURN_ORIGINAL = "original"  # sub() returns its input
    LOG_AND_CONTINUE = "log"  # Same as RETURN_ORIGINAL plus a warning


@dataclass
class RegexConfig:
    """Timeout, cache and logging settings of a RegexEngine."""

    default_timeout: float = 2.0
    timeout_behavior: TimeoutBehavior = TimeoutBehavior.LOG_AND_CONTINUE
    cache_size: int = 128
    logger: Optional[logging.Logger] = None


class RegexTimeoutError(Exception):
    """Raised on timeout when timeout_behavior is RAISE_EXCEPTION."""

    def __init__(self, pattern: str, input_length: int, timeout: float, operation: str):
        self.pattern = pattern
        self.input_length = input_length
        self.timeout = timeout
        self.operation = operation

        pattern_display = pattern[:100] + "..." if len(pattern) > 100 else pattern
        super().__init__(
            f"Regex {operation} timed out after {timeout}s\n"
            f"Pattern: {pattern_display}\n"
            f"Input length: {input_length} chars"
        )


class PatternCache:
    """LRU cache of compiled patterns keyed by (pattern, flags)."""

    def __init__(self, maxsize: int = 128):
        self.maxsize = maxsize
        self._lock = threading.RLock()
        self._cache: "OrderedDict[tuple[str, int], Any]" = OrderedDict()

    def get(self, pattern: str, flags: int) -> Optional[Any]:
        """Return the compiled pattern for (pattern, flags), or None."""
        key = (pattern, flags)
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                return self._cache[key]
            return None

    def put(self, pattern: str, flags: int, compiled: Any) -> None:
        """Store a compiled pattern, evicting the oldest entry when full."""
        if self.maxsize <= 0:
            return
        key = (pattern, flags)
        with self._lock:
            self._cache[key] = compiled
            self._cache.move_to_end(key)
            while len(self._cache) > self.maxsize:
                self._cache.popitem(last=False)

    def clear(self) -> None:
        """Drop every cached pattern."""
        with self._lock:
            self._cache.clear()

    def size(self) -> int:
        """Number of cached patterns."""
        with self._lock:
            return len(self._cache)


class RegexEngine:
    """
    Regex engine with pattern caching and timeout protection.

    This is the interface the preprocessing stages use for all pattern work.
    """

    def __init__(self, config: Optional[RegexConfig] = None):
        self.config = config or RegexConfig()
        self.cache = PatternCache(self.config.cache_size)
        self.logger = self.config.logger or logging.getLogger(__name__)

    def compile(self, pattern: str, flags: int = 0) -> Any:
        """Compile pattern, reusing the cached object when there is one."""
        compiled = self.cache.get(pattern, flags)
        if compiled is None:
            compiled = regex.compile(pattern, flags)
            self.cache.put(pattern, flags, compiled)
        return compiled

    def sub(
        self,
        pattern: str,
        repl: Union[str, Callable[[Any], str]],
        string: str,
        count: int = 0,
        flags: int = 0,
        timeout: Optional[float] = None,
    ) -> str:
        """
        Substitute repl for matches of pattern in string.

        Returns the input unchanged on timeout unless the engine is configured
        to raise.
        """
        compiled = self.compile(pattern, flags)
        limit = timeout if timeout is not None else self.config.default_timeout
        try:
            return compiled.sub(repl, string, count=count, timeout=limit)  # type: ignore[no-any-return]
        except TimeoutError:
            self._handle_timeout(pattern, string, "sub", limit)
            return string

    def _handle_timeout(
        self, pattern: str, string: str, operation: str, timeout: float
    ) -> None:
        """Raise, warn or stay silent depending on timeout_behavior."""
        behavior = self.config.timeout_behavior

        if behavior == TimeoutBehavior.RAISE_EXCEPTION:
            raise RegexTimeoutError(pattern, len(string), timeout, operation)

        if behavior == TimeoutBehavior.LOG_AND_CONTINUE:
            self.logger.warning(
                "Regex %s timed out after %ss on pattern: %s",
                operation,
                timeout,
                pattern[:50],
            )

    def clear_cache(self) -> None:
        """Drop every compiled pattern held by this engine."""
        self.cache.clear()


_global_engine: Optional[RegexEngine] = None
_global_engine_lock = threading.RLock()


def get_engine(config: Optional[RegexConfig] = None) -> RegexEngine:
    """
    Return the process-wide RegexEngine used by the preprocessing steps.

    Args:
        config: Settings for the engine; ignored once it exists

    Returns:
        The shared engine
    """
    global _global_engine

    if _global_engine is None:
        with _global_engine_lock:
            if _global_engine is None:
                _global_engine = RegexEngine(config)

    return _global_engine


def reset_engine() -> None:
    """Forget the shared engine so the next get_engine() builds a new one."""
    global _global_engine
    with _global_engine_lock:
        _global_engine = None
