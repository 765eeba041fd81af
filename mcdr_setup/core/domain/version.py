"""
L1 Domain — Version parsing and constraint matching (pure).

Parses release versions (``3.11.5``, ``3.13.0rc1``) and requirement
strings (``>=3.8,<3.13``, ``!=3.0.*``) and answers "does this version
satisfy that constraint?".  No I/O, no subprocess.

Ordering is numeric over release segments padded with zeros, so
``3.10 == 3.10.0`` and ``3.9 < 3.10``.  A pre-release sorts before the
release with the same segments.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass

from mcdr_setup.core.errors import ParseError

_VERSION_RE = re.compile(
    r"""
    ^\s*v?
    (?P<release>\d+(?:\.\d+)*)
    (?:[-_.]?(?P<pre_tag>a|b|c|rc|alpha|beta|pre|preview)[-_.]?(?P<pre_num>\d*))?
    \s*$
    """,
    re.VERBOSE | re.IGNORECASE,
)

_CLAUSE_RE = re.compile(
    r"^\s*(?P<op>===|==|!=|~=|>=|<=|>|<)\s*(?P<version>[^\s,]+?)(?P<wildcard>\.\*)?\s*$"
)

# Normalized pre-release tags and their rank
_PRE_ALIASES = {"alpha": "a", "beta": "b", "c": "rc", "pre": "rc", "preview": "rc"}
_PRE_RANK = {"a": 0, "b": 1, "rc": 2}


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A parsed version: release segments plus optional pre-release."""

    release: tuple[int, ...]
    pre: tuple[str, int] | None = None

    @property
    def major(self) -> int:
        return self.release[0]

    @property
    def minor(self) -> int:
        return self.release[1] if len(self.release) > 1 else 0

    @property
    def is_prerelease(self) -> bool:
        return self.pre is not None

    def _key(self, width: int) -> tuple:
        padded = self.release + (0,) * (width - len(self.release))
        # A final release outranks every pre-release of the same segments
        pre_key = (_PRE_RANK[self.pre[0]], self.pre[1]) if self.pre else (len(_PRE_RANK), 0)
        return padded + pre_key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) == 0

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) < 0

    def __hash__(self) -> int:
        release = list(self.release)
        while len(release) > 1 and release[-1] == 0:
            release.pop()
        return hash((tuple(release), self.pre))

    def __str__(self) -> str:
        text = ".".join(str(part) for part in self.release)
        if self.pre:
            text += f"{self.pre[0]}{self.pre[1]}"
        return text

    def __repr__(self) -> str:
        return f"Version('{self}')"


def parse_version(text: str) -> Version:
    """Parse a textual version.

    Raises:
        ParseError: If ``text`` is not a release or pre-release version.
    """
    if not isinstance(text, str):
        raise ParseError(f"Version must be a string, got {type(text).__name__}")
    match = _VERSION_RE.match(text)
    if not match:
        raise ParseError(f"Invalid version: {text!r}")

    release = tuple(int(part) for part in match.group("release").split("."))
    pre = None
    if match.group("pre_tag"):
        tag = match.group("pre_tag").lower()
        tag = _PRE_ALIASES.get(tag, tag)
        pre = (tag, int(match.group("pre_num") or 0))
    return Version(release=release, pre=pre)


def compare(a: Version, b: Version) -> int:
    """Three-way comparison: ``-1`` if a < b, ``0`` if equal, ``1`` if a > b."""
    width = max(len(a.release), len(b.release))
    key_a, key_b = a._key(width), b._key(width)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


# ═══════════════════════════════════════════════════════════════════
#  Constraints
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Clause:
    """One comparator of a constraint, e.g. ``>=3.8`` or ``!=3.0.*``."""

    operator: str
    version: Version
    wildcard: bool = False

    def contains(self, candidate: Version) -> bool:
        op = self.operator
        if op in ("==", "!=") and self.wildcard:
            prefix = self.version.release
            head = candidate.release + (0,) * max(0, len(prefix) - len(candidate.release))
            matched = head[: len(prefix)] == prefix
            return matched if op == "==" else not matched

        order = compare(candidate, self.version)
        if op in ("==", "==="):
            return order == 0
        if op == "!=":
            return order != 0
        if op == ">=":
            return order >= 0
        if op == "<=":
            return order <= 0
        if op == ">":
            return order > 0
        if op == "<":
            # <3.13 excludes 3.13.0rc1 unless the bound is itself a pre-release
            if candidate.is_prerelease and not self.version.is_prerelease:
                if compare(Version(candidate.release), self.version) == 0:
                    return False
            return order < 0
        if op == "~=":
            # ~=3.8.1 means >=3.8.1 and ==3.8.*
            prefix = self.version.release[:-1]
            head = candidate.release[: len(prefix)]
            return order >= 0 and head == prefix
        raise ParseError(f"Unsupported operator: {op}")

    def __str__(self) -> str:
        return f"{self.operator}{self.version}{'.*' if self.wildcard else ''}"


@dataclass(frozen=True)
class VersionConstraint:
    """An AND-ed set of clauses.  The empty constraint accepts everything."""

    clauses: tuple[Clause, ...] = ()

    def __str__(self) -> str:
        return ",".join(str(clause) for clause in self.clauses)


def parse_constraint(text: str | None) -> VersionConstraint:
    """Parse a requirement string such as ``>=3.8,<3.13``.

    ``None`` and blank strings give the unconstrained constraint.

    Raises:
        ParseError: If any clause is malformed.
    """
    if text is None or not text.strip():
        return VersionConstraint()

    clauses: list[Clause] = []
    for raw in text.split(","):
        if not raw.strip():
            raise ParseError(f"Empty clause in constraint: {text!r}")
        match = _CLAUSE_RE.match(raw)
        if not match:
            raise ParseError(f"Invalid constraint clause: {raw.strip()!r}")
        op = match.group("op")
        wildcard = match.group("wildcard") is not None
        if wildcard and op not in ("==", "!="):
            raise ParseError(f"Wildcard not allowed with {op}: {raw.strip()!r}")
        version = parse_version(match.group("version"))
        if op == "~=" and len(version.release) < 2:
            raise ParseError(f"~= needs at least two segments: {raw.strip()!r}")
        clauses.append(Clause(operator=op, version=version, wildcard=wildcard))
    return VersionConstraint(clauses=tuple(clauses))


def satisfies(version: Version, constraint: VersionConstraint) -> bool:
    """True when ``version`` satisfies every clause of ``constraint``."""
    return all(clause.contains(version) for clause in constraint.clauses)
