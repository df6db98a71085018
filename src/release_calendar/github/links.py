"""Parsing of the ``Link`` response header used by GitHub pagination.

See: https://docs.github.com/en/rest/using-the-rest-api/using-pagination-in-the-rest-api
"""

import re
from typing import Protocol

# One link-value: the target and the parameters that follow it
_LINK_PATTERN = re.compile(r"<(?P<url>[^>]*)>(?P<params>[^<]*)")
# rel may be quoted with several space-separated types, or a bare token (RFC 8288)
_REL_PATTERN = re.compile(
    r';\s*rel\s*=\s*(?:"(?P<quoted>[^"]*)"|(?P<token>[^\s;,"]+))',
    re.IGNORECASE,
)


class LinkParser(Protocol):
    """Parses a ``Link`` header into a mapping of relation name to URL."""

    def parse(self, header: str | None) -> dict[str, str]: ...


class RegexLinkParser:
    """LinkParser that extracts ``<url>; rel=...`` entries with regexes.

    Usage:
        links = RegexLinkParser().parse(response.headers.get("link"))
        next_url = links.get("next")
    """

    def parse(self, header: str | None) -> dict[str, str]:
        """Parse a Link header.

        Args:
            header: Raw header value, or None when the response had none

        Returns:
            Dict of lower-cased rel -> URL (empty if the header is absent or
            has no links). A link with several relation types appears under
            each of them.
        """
        if not header:
            return {}
        links: dict[str, str] = {}
        for link in _LINK_PATTERN.finditer(header):
            rel = _REL_PATTERN.search(link["params"])
            if rel is None:
                continue
            for name in (rel["quoted"] or rel["token"] or "").split():
                links[name.lower()] = link["url"]
        return links
