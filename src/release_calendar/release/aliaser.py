"""Renaming of projects before publication."""

from collections.abc import Mapping


class ProjectNameAliaser:
    """Maps project names to their published aliases.

    Names without a configured alias pass through unchanged.
    """

    def __init__(self, aliases: Mapping[str, str] | None = None) -> None:
        self._aliases = dict(aliases or {})

    def apply(self, name: str) -> str:
        return self._aliases.get(name, name)
