"""In-memory stand-ins for Playwright pages used across the tests."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from src.extraction.extractor import (
    _DOM_SIGNALS_JS,
    _JSON_LD_JS,
    _META_MAP_JS,
    _READ_SELECTOR_JS,
    _REMOVE_JS,
)


class FakeResponse:
    def __init__(self, status: int = 200) -> None:
        self.status = status


class FakePage:
    """Answers the extractor's scripts from canned per-selector results.

    ``selectors`` maps a selector to the raw value the browser would return
    for it (a string, a list for tag queries, or an exception to raise).
    Removing an excluded selector drops it from the map.
    """

    def __init__(
        self,
        selectors: dict[str, Any] | None = None,
        *,
        json_ld: list[str] | None = None,
        meta: dict[str, str] | None = None,
        images: list[str] | None = None,
        code_blocks: list[str] | None = None,
        status: int = 200,
        goto_error: BaseException | None = None,
    ) -> None:
        self.selectors = dict(selectors or {})
        self.json_ld = json_ld or []
        self.meta = meta or {}
        self.images = images or []
        self.code_blocks = code_blocks or []
        self.status = status
        self.goto_error = goto_error
        self.evaluated: list[tuple[str, Any]] = []
        self.waited_for: list[str] = []
        self.scrolled = False

    async def goto(self, url: str, **kwargs: Any) -> FakeResponse:
        if self.goto_error is not None:
            raise self.goto_error
        return FakeResponse(self.status)

    async def wait_for_timeout(self, timeout: float) -> None:
        return None

    async def wait_for_selector(self, selector: str, **kwargs: Any) -> None:
        self.waited_for.append(selector)

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        self.evaluated.append((expression, arg))
        if expression == _READ_SELECTOR_JS:
            value = self.selectors.get(arg["selector"])
            if isinstance(value, BaseException):
                raise value
            return value
        if expression == _JSON_LD_JS:
            return list(self.json_ld)
        if expression == _META_MAP_JS:
            return dict(self.meta)
        if expression == _DOM_SIGNALS_JS:
            return {"images": list(self.images), "codeBlocks": list(self.code_blocks)}
        if expression == _REMOVE_JS:
            removed = [s for s in arg if s in self.selectors]
            for selector in removed:
                del self.selectors[selector]
            return len(removed)
        # scroll script
        self.scrolled = True
        return None

    def read_count(self, selector: str) -> int:
        return sum(
            1 for expression, arg in self.evaluated
            if expression == _READ_SELECTOR_JS and arg["selector"] == selector
        )


class FakePageProvider:
    """Yields one FakePage and records whether it was released."""

    def __init__(self, page: FakePage) -> None:
        self._page = page
        self.acquired = 0
        self.released = 0

    @asynccontextmanager
    async def page(self) -> AsyncIterator[FakePage]:
        self.acquired += 1
        try:
            yield self._page
        finally:
            self.released += 1
