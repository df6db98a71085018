"""Lazily linked pages of GitHub API results.

A page chain is a forward-only, finite sequence of pages for one paginated
resource. Each page knows the URL it was fetched from and the ETag returned
with it, and holds a continuation that fetches the following page the
first time ``next()`` is awaited. A fully walked chain is kept by the
caller and passed back to the client on the next poll so that unchanged
pages can be revalidated with conditional requests instead of downloaded.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from typing import Generic, TypeVar

T = TypeVar("T")


async def no_next_page() -> None:
    """Continuation of the last page in a chain."""
    return None


class Page(Generic[T]):
    """One page of results plus the means to obtain the next one.

    The continuation is invoked at most once; its result is remembered so
    that walking the same chain again (as happens when an earlier chain is
    used to drive conditional requests) never repeats a request.
    """

    def __init__(
        self,
        content: Sequence[T],
        url: str | None,
        etag: str | None,
        next_page: NextPage[T] = no_next_page,
    ) -> None:
        self._content = tuple(content)
        self._url = url
        self._etag = etag
        self._next_page = next_page
        self._next: Page[T] | None = None
        self._next_resolved = False

    @property
    def content(self) -> tuple[T, ...]:
        """Items on this page, in upstream order."""
        return self._content

    @property
    def url(self) -> str | None:
        """URL this page was fetched from."""
        return self._url

    @property
    def etag(self) -> str | None:
        """ETag returned with this page, if any."""
        return self._etag

    async def next(self) -> Page[T] | None:
        """Return the next page, fetching it on first access.

        Returns:
            The next page, or None if this is the last page
        """
        if not self._next_resolved:
            self._next = await self._next_page()
            self._next_resolved = True
        return self._next

    def __repr__(self) -> str:
        return f"Page(url={self._url!r}, etag={self._etag!r}, items={len(self._content)})"


NextPage = Callable[[], Awaitable[Page[T] | None]]


async def iter_pages(page: Page[T] | None) -> AsyncIterator[Page[T]]:
    """Walk a chain from ``page`` to its end."""
    while page is not None:
        yield page
        page = await page.next()


async def collect_content(page: Page[T] | None) -> list[T]:
    """Walk a chain to its end and concatenate the content of every page."""
    content: list[T] = []
    async for current in iter_pages(page):
        content.extend(current.content)
    return content
