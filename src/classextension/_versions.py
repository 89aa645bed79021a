"""
Semantic version checks used when deduplicating named extensions.

Exact versions are parsed and ordered by :class:`semver.Version`. Ranges follow
the npm range grammar:

- ``||`` separates alternative comparator sets
- whitespace separates comparators that must all hold
- ``<``, ``<=``, ``>``, ``>=``, ``=`` and bare versions
- hyphen ranges: ``1.2.3 - 2.3.4``
- x-ranges: ``*``, ``1.x``, ``1.2.*`` and partial versions such as ``1`` or ``1.2``
- tilde ranges: ``~1.2.3``
- caret ranges: ``^1.2.3``, ``^0.2.3``, ``^0.0.3``

A prerelease version only satisfies a comparator set when one of the set's
comparators names a prerelease of the same ``major.minor.patch``.
"""

from __future__ import annotations

import operator
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Final, TypeAlias, final

from semver import Version

_NUMERIC = r"0|[1-9]\d*"
_WILDCARD = r"[xX*]"
_IDENTIFIERS = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"

_PARTIAL: Final = re.compile(
    rf"""
    ^v?
    (?P<major>{_NUMERIC}|{_WILDCARD})
    (?:\.(?P<minor>{_NUMERIC}|{_WILDCARD})
        (?:\.(?P<patch>{_NUMERIC}|{_WILDCARD})
            (?:-(?P<prerelease>{_IDENTIFIERS}))?
            (?:\+(?P<build>{_IDENTIFIERS}))?
        )?
    )?$
    """,
    re.VERBOSE,
)
_HYPHEN: Final = re.compile(r"^(\S+)\s+-\s+(\S+)$")
_OPERATOR_SPACE: Final = re.compile(r"(<=|>=|~>|<|>|=|~|\^)\s+")
_TOKEN: Final = re.compile(r"^(<=|>=|~>|<|>|=|~|\^)?(.+)$")

_OPERATORS: Final[dict[str, Callable[[Version, Version], bool]]] = {
    "=": operator.eq,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class _Partial:
    """A version with optional trailing components. ``None`` marks a wildcard."""

    major: int | None
    minor: int | None
    patch: int | None
    prerelease: str | None

    @property
    def lower(self) -> Version:
        return Version(
            self.major or 0,
            self.minor or 0,
            self.patch or 0,
            prerelease=self.prerelease,
        )

    @property
    def next_up(self) -> Version:
        """The first version past this partial, e.g. ``1.2`` -> ``1.3.0``."""
        assert self.major is not None
        if self.minor is None:
            return Version(self.major + 1, 0, 0)
        return Version(self.major, self.minor + 1, 0)


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class _Comparator:
    operator: str
    version: Version

    def test(self, version: Version) -> bool:
        return _OPERATORS[self.operator](version, self.version)


ComparatorSet: TypeAlias = tuple[_Comparator, ...]

_ANY: Final[ComparatorSet] = ()
_NOTHING: Final[ComparatorSet] = (_Comparator(operator="<", version=Version(0, 0, 0)),)


def _parse_partial(text: str) -> _Partial:
    match = _PARTIAL.match(text)
    if match is None:
        raise ValueError(f"Invalid version in range: {text!r}")

    components: list[int | None] = []
    wildcard = False
    for group in ("major", "minor", "patch"):
        value = match[group]
        if wildcard or value is None or value in {"x", "X", "*"}:
            wildcard = True
            components.append(None)
        else:
            components.append(int(value))

    major, minor, patch = components
    return _Partial(
        major=major,
        minor=minor,
        patch=patch,
        prerelease=None if wildcard else match["prerelease"],
    )


def _desugar(operator_: str, partial: _Partial) -> ComparatorSet:
    """Translate one comparator token into primitive comparators."""
    if partial.major is None:
        return _NOTHING if operator_ in ("<", ">") else _ANY

    exact = partial.patch is not None
    match operator_:
        case "" | "=":
            if exact:
                return (_Comparator(operator="=", version=partial.lower),)
            return (
                _Comparator(operator=">=", version=partial.lower),
                _Comparator(operator="<", version=partial.next_up),
            )
        case ">":
            if exact:
                return (_Comparator(operator=">", version=partial.lower),)
            return (_Comparator(operator=">=", version=partial.next_up),)
        case ">=":
            return (_Comparator(operator=">=", version=partial.lower),)
        case "<":
            return (_Comparator(operator="<", version=partial.lower),)
        case "<=":
            if exact:
                return (_Comparator(operator="<=", version=partial.lower),)
            return (_Comparator(operator="<", version=partial.next_up),)
        case "~" | "~>":
            if partial.minor is None:
                upper = Version(partial.major + 1, 0, 0)
            else:
                upper = Version(partial.major, partial.minor + 1, 0)
            return (
                _Comparator(operator=">=", version=partial.lower),
                _Comparator(operator="<", version=upper),
            )
        case "^":
            if partial.major != 0 or partial.minor is None:
                upper = Version(partial.major + 1, 0, 0)
            elif partial.minor != 0 or partial.patch is None:
                upper = Version(0, partial.minor + 1, 0)
            else:
                upper = Version(0, 0, partial.patch + 1)
            return (
                _Comparator(operator=">=", version=partial.lower),
                _Comparator(operator="<", version=upper),
            )
        case _:
            raise ValueError(f"Unknown range operator: {operator_!r}")


def _parse_hyphen(low: _Partial, high: _Partial) -> ComparatorSet:
    comparators: list[_Comparator] = []
    if low.major is not None:
        comparators.append(_Comparator(operator=">=", version=low.lower))
    if high.major is not None:
        if high.patch is not None:
            comparators.append(_Comparator(operator="<=", version=high.lower))
        else:
            comparators.append(_Comparator(operator="<", version=high.next_up))
    return tuple(comparators)


def _parse_comparator_set(text: str) -> ComparatorSet:
    text = text.strip()
    if not text:
        return _ANY

    hyphen = _HYPHEN.match(text)
    if hyphen is not None:
        return _parse_hyphen(_parse_partial(hyphen[1]), _parse_partial(hyphen[2]))

    comparators: list[_Comparator] = []
    for token in _OPERATOR_SPACE.sub(r"\1", text).split():
        match = _TOKEN.match(token)
        assert match is not None
        comparators.extend(_desugar(match[1] or "", _parse_partial(match[2])))
    return tuple(comparators)


@lru_cache(maxsize=256)
def _parse_range(version_range: str) -> tuple[ComparatorSet, ...]:
    return tuple(_parse_comparator_set(part) for part in version_range.split("||"))


def _satisfies_set(version: Version, comparators: ComparatorSet) -> bool:
    if not all(comparator.test(version) for comparator in comparators):
        return False
    if version.prerelease is None:
        return True
    release = (version.major, version.minor, version.patch)
    return any(
        comparator.version.prerelease is not None
        and (comparator.version.major, comparator.version.minor, comparator.version.patch)
        == release
        for comparator in comparators
    )


def is_valid_version(version: object) -> bool:
    """Whether ``version`` is an exact semantic version string such as ``1.2.3``."""
    return isinstance(version, str) and bool(version) and Version.is_valid(version)


def is_valid_range(version_range: object) -> bool:
    """Whether ``version_range`` is a non-empty, parseable version range string."""
    if not isinstance(version_range, str) or not version_range.strip():
        return False
    try:
        _parse_range(version_range)
    except ValueError:
        return False
    return True


def satisfies(version: str, version_range: str) -> bool:
    """
    Check whether an exact version falls within a version range.

    :param version: An exact semantic version, e.g. ``1.0.0``.
    :param version_range: A range, e.g. ``^1.0.0`` or ``>=1.2 <2 || 3.x``.
    :raises ValueError: If either argument cannot be parsed.
    """
    parsed = Version.parse(version)
    return any(
        _satisfies_set(parsed, comparators) for comparators in _parse_range(version_range)
    )
