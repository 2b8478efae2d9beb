"""Suggestion providers.

A provider is anything callable with the current input text that returns
an ordered sequence of candidate strings (or None for "nothing"). Plain
functions and lambdas work; the classes here are stateful examples:

- WordListProvider: prefix/substring matching over a word list
- CachingProvider: memoizes another provider per input text

Providers must not call back into the controller.
"""

from __future__ import annotations

import inspect
import logging
from collections import OrderedDict
from collections.abc import Awaitable, Iterable, Sequence
from pathlib import Path
from typing import Protocol, Union

logger = logging.getLogger(__name__)

ProviderResult = Union[Sequence[str], None]

MATCH_MODES = ("prefix", "substring")


class SuggestionProvider(Protocol):
    """Maps the current input text to candidate completions."""

    def __call__(self, text: str) -> ProviderResult: ...


class AsyncSuggestionProvider(Protocol):
    """Provider whose results arrive asynchronously."""

    def __call__(self, text: str) -> Awaitable[ProviderResult]: ...


class ProviderError(Exception):
    """Raised when a provider returns something that is not a list of strings."""


def normalize_candidates(result: object) -> list[str]:
    """Validate provider output and turn it into a fresh list.

    Raises:
        ProviderError: If the result is not a sequence of strings
    """
    if result is None:
        return []
    if isinstance(result, (str, bytes)):
        raise ProviderError(f"Provider returned a bare {type(result).__name__}, expected a sequence")
    if not isinstance(result, Iterable):
        raise ProviderError(f"Provider returned {type(result).__name__}, expected a sequence")

    candidates = list(result)
    for item in candidates:
        if not isinstance(item, str):
            raise ProviderError(f"Provider returned non-string candidate {item!r}")
    return candidates


class WordListProvider:
    """Suggests words from a fixed list.

    Matches keep the list's order; duplicates are dropped.
    """

    def __init__(
        self,
        words: Iterable[str],
        case_sensitive: bool = False,
        match: str = "prefix",
    ) -> None:
        if match not in MATCH_MODES:
            raise ValueError(f"match must be one of {MATCH_MODES}, got {match!r}")
        self._words = list(dict.fromkeys(words))
        self._case_sensitive = case_sensitive
        self._match = match

    @property
    def words(self) -> list[str]:
        return list(self._words)

    def __call__(self, text: str) -> list[str]:
        if not text:
            return []

        needle = text if self._case_sensitive else text.casefold()
        matches = []
        for word in self._words:
            haystack = word if self._case_sensitive else word.casefold()
            if self._match == "prefix":
                found = haystack.startswith(needle)
            else:
                found = needle in haystack
            if found:
                matches.append(word)
        return matches


class CachingProvider:
    """LRU cache in front of another provider."""

    def __init__(self, inner: SuggestionProvider, maxsize: int = 128) -> None:
        self._inner = inner
        self._maxsize = maxsize
        self._cache: OrderedDict[str, list[str]] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __call__(self, text: str) -> list[str]:
        if text in self._cache:
            self._cache.move_to_end(text)
            self.hits += 1
            return list(self._cache[text])

        self.misses += 1
        candidates = normalize_candidates(self._inner(text))
        self._cache[text] = candidates
        if len(self._cache) > self._maxsize:
            self._cache.popitem(last=False)
        return list(candidates)

    def clear(self) -> None:
        """Drop every cached result."""
        self._cache.clear()


def load_words(path: str | Path) -> list[str]:
    """Read one candidate per line, skipping blank lines and ``#`` comments."""
    words = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            word = line.strip()
            if word and not word.startswith("#"):
                words.append(word)
    logger.debug(f"Loaded {len(words)} words from {path}")
    return words


def is_async_provider(provider: object) -> bool:
    """True if ``provider`` is declared ``async``.

    Plain callables that return an awaitable are only found out when called;
    the controller handles those per call.
    """
    if provider is None:
        return False
    if inspect.iscoroutinefunction(provider):
        return True
    call = getattr(provider, "__call__", None)
    return inspect.iscoroutinefunction(call)
