# SPDX-License-Identifier: MIT
"""Version constraints following PEP 440 version specifiers.

A constraint expression is an OR of AND groups:

    >=1.0,<2.0 || ==3.*

Commas join clauses that must all match, and ``||`` separates groups of
which at least one must match.

Operators:
- ``==`` / ``!=``: (in)equality, with ``.*`` prefix matching
- ``<``, ``<=``, ``>``, ``>=``: ordered comparison
- ``~=``: compatible release, ``~=2.2`` is ``>=2.2,==2.*``
- ``===``: arbitrary equality, a case-insensitive string comparison
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from itertools import takewhile
from typing import Callable, Iterable, Iterator, Optional, Union

from .version import ParseError, Version, must_parse, parse_version

logger = logging.getLogger(__name__)

CONSTRAINT_PATTERN = re.compile(
    r"^\s*(?P<operator>~=|===|==|!=|<=|>=|<|>)\s*(?P<version>[^\s]*)\s*$",
    re.ASCII,
)

# A release number directly followed by a pre-release, e.g. "12rc1"
_PREFIX_PATTERN = re.compile(r"^([0-9]+)((?:a|b|c|rc)[0-9]+)$")

OR_SEPARATOR = "||"
AND_SEPARATOR = ","


class ConstraintError(Exception):
    """Raised when a constraint expression is malformed or not allowed."""

    def __init__(self, constraint: str, message: str = ""):
        self.constraint = constraint
        self.message = message or f"improper constraint: {constraint}"
        super().__init__(self.message)


def _version_split(version: str) -> list[str]:
    """Split a version on dots, with an implicit dot before a pre-release."""
    result: list[str] = []
    for item in version.split("."):
        match = _PREFIX_PATTERN.match(item)
        if match:
            result.extend(match.groups())
        else:
            result.append(item)
    return result


def _pad_version(left: list[str], right: list[str]) -> tuple[list[str], list[str]]:
    """Zero-pad the numeric release tokens of the shorter side."""
    left_release = list(takewhile(str.isdigit, left))
    right_release = list(takewhile(str.isdigit, right))

    left_rest = left[len(left_release):]
    right_rest = right[len(right_release):]

    left_release += ["0"] * (len(right_release) - len(left_release))
    right_release += ["0"] * (len(left_release) - len(right_release))

    return left_release + left_rest, right_release + right_rest


def _is_not_suffix(segment: str) -> bool:
    return not segment.startswith(("dev", "a", "b", "rc", "post"))


def _prefix_match(prospective: Version, prefix: str) -> bool:
    # Local labels never take part in prefix matching
    prospective = must_parse(prospective.public)

    split_spec = _version_split(prefix)
    split_prospective = _version_split(str(prospective))[: len(split_spec)]

    padded_spec, padded_prospective = _pad_version(split_spec, split_prospective)
    return padded_spec == padded_prospective


def _same_base(prospective: Version, spec: Version) -> bool:
    return must_parse(prospective.base_version).equal(must_parse(spec.base_version))


# -------------------------------------------------------------------
# Operators
# -------------------------------------------------------------------


def _compare_equal(prospective: Version, spec: Version, wildcard: bool) -> bool:
    if wildcard:
        return _prefix_match(prospective, str(spec))

    # The local label only counts when the spec carries one
    if not spec.local:
        prospective = must_parse(prospective.public)

    return spec.equal(prospective)


def _compare_not_equal(prospective: Version, spec: Version, wildcard: bool) -> bool:
    return not _compare_equal(prospective, spec, wildcard)


def _compare_less_than(prospective: Version, spec: Version, wildcard: bool) -> bool:
    if not prospective.less_than(spec):
        return False

    # <3.1 must not match 3.1.dev0 but should match 3.0.dev0, unless the
    # spec is itself a pre-release.
    if not spec.is_prerelease and prospective.is_prerelease:
        if _same_base(prospective, spec):
            return False

    return True


def _compare_greater_than(prospective: Version, spec: Version, wildcard: bool) -> bool:
    if not prospective.greater_than(spec):
        return False

    # >3.1 must not match 3.1.post0 but should match 3.2.post0, unless the
    # spec is itself a post-release.
    if not spec.is_postrelease and prospective.is_postrelease:
        if _same_base(prospective, spec):
            return False

    # A local version of the spec's release is greater but must not match
    if prospective.local:
        if _same_base(prospective, spec):
            return False

    return True


def _compare_less_than_equal(prospective: Version, spec: Version, wildcard: bool) -> bool:
    return must_parse(prospective.public).less_than_or_equal(spec)


def _compare_greater_than_equal(prospective: Version, spec: Version, wildcard: bool) -> bool:
    return must_parse(prospective.public).greater_than_or_equal(spec)


def _compare_compatible(prospective: Version, spec: Version, wildcard: bool) -> bool:
    # Keep the release tokens before any pre, post or dev suffix and drop the
    # last one: ~=1.4.5a4 is >=1.4.5a4,==1.4.*
    prefix_elements = list(takewhile(_is_not_suffix, _version_split(str(spec))))
    prefix = ".".join(prefix_elements[:-1])

    return _compare_greater_than_equal(prospective, spec, False) and _prefix_match(
        prospective, prefix
    )


OperatorFunc = Callable[[Version, Version, bool], bool]

OPERATORS: dict[str, OperatorFunc] = {
    "==": _compare_equal,
    "!=": _compare_not_equal,
    "<": _compare_less_than,
    ">": _compare_greater_than,
    "<=": _compare_less_than_equal,
    ">=": _compare_greater_than_equal,
    "~=": _compare_compatible,
}

ARBITRARY = "==="


def _validate(operator: str, version: str, original: str) -> tuple[Version, bool]:
    """Check an operator/version pair and return the parsed spec version.

    Raises:
        ConstraintError: If the version is invalid or not allowed for the operator
    """
    wildcard = version.endswith(".*")
    if wildcard:
        version = version[: -len(".*")]

    try:
        spec = parse_version(version)
    except ParseError as e:
        raise ConstraintError(original, f"version parse error ({original}): {e.message}") from e

    if operator in ("==", "!="):
        if wildcard and (spec.dev is not None or spec.local):
            raise ConstraintError(
                original,
                f"the (non)equality operators don't allow a wildcard with a dev"
                f" or local version: {original}",
            )
    elif operator == "~=":
        if wildcard:
            raise ConstraintError(original, f"a wildcard is not allowed: {original}")
        if len(spec.release) < 2:
            raise ConstraintError(
                original,
                f"the compatible operator requires at least two components"
                f" in the release segment: {original}",
            )
        if spec.local:
            raise ConstraintError(original, f"local versions cannot be specified: {original}")
    else:
        if wildcard:
            raise ConstraintError(original, f"a wildcard is not allowed: {original}")
        if spec.local:
            raise ConstraintError(original, f"local versions cannot be specified: {original}")

    return spec, wildcard


@dataclass(frozen=True, slots=True)
class Constraint:
    """A single ``<operator><version>`` clause.

    Creating a Constraint validates it, so an instance always holds an
    operator/version pair that is allowed together.

    Attributes:
        operator: One of ~=, ===, ==, !=, <=, >=, <, >
        version: The version text as written, including any trailing ".*"
        original: The clause as written
    """

    operator: str
    version: str
    original: str = ""
    _spec: Optional[Version] = field(init=False, repr=False, compare=False)
    _wildcard: bool = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.original:
            object.__setattr__(self, "original", f"{self.operator}{self.version}")

        if self.operator == ARBITRARY:
            spec, wildcard = None, False
        elif self.operator in OPERATORS:
            spec, wildcard = _validate(self.operator, self.version, self.original)
        else:
            raise ConstraintError(self.original, f"unknown operator: {self.operator}")

        object.__setattr__(self, "_spec", spec)
        object.__setattr__(self, "_wildcard", wildcard)

    def __str__(self) -> str:
        return f"{self.operator}{self.version}"

    @property
    def is_wildcard(self) -> bool:
        return self._wildcard

    def check(self, version: Version) -> bool:
        """Return True if the version satisfies this clause."""
        if self._spec is None:
            return str(version).lower() == self.version.lower()
        return OPERATORS[self.operator](version, self._spec, self._wildcard)


def parse_constraint(constraint: str) -> Constraint:
    """Parse a single constraint clause such as ``>=1.0`` or ``==2.*``.

    Raises:
        ConstraintError: If the clause is malformed or not allowed
    """
    if not isinstance(constraint, str):
        raise ConstraintError(
            str(constraint), f"Constraint must be a string, got {type(constraint).__name__}"
        )

    match = CONSTRAINT_PATTERN.match(constraint)
    if not match:
        logger.debug("Rejected constraint clause %r", constraint)
        raise ConstraintError(constraint)

    return Constraint(
        operator=match.group("operator"),
        version=match.group("version"),
        original=constraint,
    )


@dataclass(frozen=True, slots=True)
class Constraints:
    """An OR of AND groups of constraint clauses.

    Attributes:
        groups: Groups of clauses; a version matches when every clause of
            at least one group matches
        original: The expression the constraints were parsed from
    """

    groups: tuple[tuple[Constraint, ...], ...]
    original: str = ""

    @classmethod
    def parse(cls, expression: str) -> Constraints:
        """Parse a constraint expression.

        Raises:
            ConstraintError: If any clause is malformed or not allowed

        Examples:
            >>> Constraints.parse(">=1.0,<2.0").check("1.5")
            True
            >>> Constraints.parse("<1.0 || >=2.0").check("1.5")
            False
        """
        if not isinstance(expression, str):
            raise ConstraintError(
                str(expression), f"Constraints must be a string, got {type(expression).__name__}"
            )

        groups = tuple(
            tuple(parse_constraint(clause) for clause in group.split(AND_SEPARATOR))
            for group in expression.split(OR_SEPARATOR)
        )
        logger.debug("Parsed constraints %r into %d group(s)", expression, len(groups))
        return cls(groups=groups, original=expression)

    def __str__(self) -> str:
        return self.original

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self) -> Iterator[tuple[Constraint, ...]]:
        return iter(self.groups)

    def check(self, version: Union[str, Version]) -> bool:
        """Return True if the version satisfies any group of constraints.

        Raises:
            ParseError: If a version string is given and it is invalid
        """
        v = parse_version(version) if isinstance(version, str) else version
        return any(all(c.check(v) for c in group) for group in self.groups)

    def __contains__(self, version: Union[str, Version]) -> bool:
        return self.check(version)

    def filter(self, versions: Iterable[Union[str, Version]]) -> Iterator[Version]:
        """Yield the versions that satisfy these constraints."""
        for version in versions:
            v = parse_version(version) if isinstance(version, str) else version
            if self.check(v):
                yield v


def parse_constraints(expression: str) -> Constraints:
    """Parse a constraint expression such as ``>=1.0,<2.0 || ==3.*``.

    Raises:
        ConstraintError: If any clause is malformed or not allowed
    """
    return Constraints.parse(expression)
