"""Loading -> success | error flow for one page section.

A section (posts, users, albums, search results) owns one render target on a
:class:`RenderSurface`. :func:`run_section` shows the loading indicator, awaits
the loader, and then either renders every item or replaces the section with a
single message. Sections never share state, so several may run at once under
``asyncio.gather``.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Protocol, Sequence

from api_showcase.api.errors import EmptyQueryError, FetchFailure

logger = logging.getLogger(__name__)

SECTION_ERRORS = {
    "posts": "Failed to load posts. Please try again later.",
    "users": "Failed to load users. Please try again later.",
    "albums": "Failed to load albums. Please try again later.",
    "search": "Search failed. Please try again later.",
}
DEFAULT_ERROR = "Failed to load data. Please try again later."


class RenderSurface(Protocol):
    def show_loading(self, section: str) -> None: ...
    def hide_loading(self, section: str) -> None: ...
    def render(self, section: str, items: Sequence[Any]) -> None: ...
    def show_message(self, section: str, message: str) -> None: ...
    def clear(self, section: str) -> None: ...


async def run_section(
    surface: RenderSurface,
    section: str,
    load: Callable[[], Awaitable[Sequence[Any]]],
    *,
    error_message: str | None = None,
    empty_message: str | None = None,
) -> bool:
    """Run ``load`` for ``section`` and push the outcome to ``surface``.

    Returns True when items were rendered. Once the loader returns or fails
    with a known failure, the section's previous content is cleared. A terminal
    ``FetchFailure`` shows the generic error text; no partial results are ever
    rendered.
    """
    surface.show_loading(section)
    try:
        items = await load()
        surface.clear(section)
        if not items:
            surface.show_message(section, empty_message or f"No {section} found.")
            return False
        surface.render(section, items)
        return True
    except EmptyQueryError as exc:
        surface.clear(section)
        surface.show_message(section, str(exc))
        return False
    except FetchFailure as exc:
        logger.error("Section %s failed: %s", section, exc)
        surface.clear(section)
        surface.show_message(section, error_message or SECTION_ERRORS.get(section, DEFAULT_ERROR))
        return False
    finally:
        surface.hide_loading(section)


class ConsoleSurface:
    """Writes sections to stdout, one card per block.

    ``shown`` keeps the items currently displayed per section, since printed
    output itself cannot be taken back.
    """

    def __init__(self, write: Callable[[str], None] = print) -> None:
        self._write = write
        self.shown: dict[str, list[Any]] = {}

    def show_loading(self, section: str) -> None:
        self._write(f"Loading {section}...")

    def hide_loading(self, section: str) -> None:
        pass

    def render(self, section: str, items: Sequence[Any]) -> None:
        self.shown[section] = list(items)
        self._write(f"== {section} ({len(items)}) ==")
        for item in items:
            for line in item.lines():
                self._write(f"  {line}")
            self._write("")

    def show_message(self, section: str, message: str) -> None:
        self._write(f"[{section}] {message}")

    def clear(self, section: str) -> None:
        if self.shown.pop(section, None):
            self._write(f"[{section}] cleared")
