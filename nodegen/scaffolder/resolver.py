"""Dependency resolution.

Merges a framework's default dependencies with the user's free-text extra
dependencies and the packages pulled in by accepted add-ons.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..catalog import Framework, default_dependencies
from ..utils import split_tokens


def resolve(framework: str | Framework, raw_extra_input: str) -> list[str]:
    """Combine a framework's defaults with user-supplied package names.

    Tokens that are already default dependencies are dropped.  Membership
    is checked against the defaults only, so a token the user typed twice
    is kept twice here; :class:`DependencySet` removes those repeats.

    Raises:
        KeyError: If *framework* is not in the catalog.
    """
    defaults = default_dependencies(framework)
    extras = [token for token in split_tokens(raw_extra_input or "") if token not in defaults]
    return defaults + extras


class DependencySet:
    """Ordered set of package names built up over a generation run.

    Names are grouped so the install order is fixed no matter when each
    group is filled in: framework defaults, then add-on packages in the
    order the add-ons were configured, then the user's extra packages.
    Within the combined sequence the first occurrence of a name wins.
    """

    def __init__(
        self,
        defaults: Iterable[str] = (),
        extras: Iterable[str] = (),
    ) -> None:
        self._defaults = list(defaults)
        self._addons: list[str] = []
        self._extras = list(extras)

    @classmethod
    def for_framework(cls, framework: str | Framework, raw_extra_input: str = "") -> "DependencySet":
        """Build the initial set for *framework* and the user's extra input."""
        resolved = resolve(framework, raw_extra_input)
        defaults = default_dependencies(framework)
        return cls(defaults=defaults, extras=resolved[len(defaults):])

    def add(self, *names: str) -> None:
        """Append add-on packages."""
        self._addons.extend(name for name in names if name)

    @property
    def extras(self) -> list[str]:
        return list(self._extras)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name in (*self._defaults, *self._addons, *self._extras):
            if name not in seen:
                seen.add(name)
                yield name

    def as_list(self) -> list[str]:
        return list(self)

    def __repr__(self) -> str:
        return f"DependencySet({self.as_list()!r})"
