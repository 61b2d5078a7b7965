# SPDX-License-Identifier: MIT
"""PEP 440 version parsing and ordering.

Supports the full public version scheme plus local version labels:
- Epoch: 1!2.0
- Release: 1, 1.2, 1.2.3.4
- Pre-release: 1.0a1, 1.0b2, 1.0rc1 (alpha, beta, c, pre and preview are aliases)
- Post-release: 1.0.post1, 1.0-1, 1.0rev1
- Development release: 1.0.dev1
- Local version: 1.0+ubuntu.1

References:
- PEP 440: https://peps.python.org/pep-0440/
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, NamedTuple, Optional, Union

from .part import Infinity, NegativeInfinity, Part, Parts, Value, Zero

logger = logging.getLogger(__name__)

# Pre-release spellings mapped to their normalized letter
PRE_RELEASE_ALIASES = {
    "a": "a",
    "alpha": "a",
    "b": "b",
    "beta": "b",
    "rc": "rc",
    "c": "rc",
    "pre": "rc",
    "preview": "rc",
}

# Post-release spellings mapped to their normalized letter
POST_RELEASE_ALIASES = {
    "post": "post",
    "rev": "post",
    "r": "post",
}

VERSION_PATTERN = r"""
    v?
    (?:
        (?:(?P<epoch>[0-9]+)!)?                           # epoch
        (?P<release>[0-9]+(?:\.[0-9]+)*)                  # release segment
        (?P<pre>                                          # pre-release
            [-_\.]?
            (?P<pre_l>alpha|a|beta|b|preview|pre|c|rc)
            [-_\.]?
            (?P<pre_n>[0-9]+)?
        )?
        (?P<post>                                         # post release
            (?:-(?P<post_n1>[0-9]+))
            |
            (?:
                [-_\.]?
                (?P<post_l>post|rev|r)
                [-_\.]?
                (?P<post_n2>[0-9]+)?
            )
        )?
        (?P<dev>                                          # dev release
            [-_\.]?
            (?P<dev_l>dev)
            [-_\.]?
            (?P<dev_n>[0-9]+)?
        )?
    )
    (?:\+(?P<local>[a-z0-9]+(?:[-_\.][a-z0-9]+)*))?       # local version
"""

_VERSION_REGEX = re.compile(
    r"^\s*" + VERSION_PATTERN + r"\s*$",
    re.VERBOSE | re.IGNORECASE | re.ASCII,
)

_LOCAL_SEPARATORS = re.compile(r"[-_\.]")


class ParseError(Exception):
    """Raised when a string is not a valid PEP 440 version."""

    def __init__(self, version: str, message: str = ""):
        self.version = version
        self.message = message or f"malformed version: {version}"
        super().__init__(self.message)


class _Key(NamedTuple):
    epoch: Part
    release: Parts
    pre: Part
    post: Part
    dev: Part
    local: Part

    def compare(self, other: _Key) -> int:
        return Parts(*self).compare(Parts(*other))


LetterNumber = tuple[str, int]


def _cmpkey(
    epoch: int,
    release: tuple[int, ...],
    pre: Optional[LetterNumber],
    post: Optional[LetterNumber],
    dev: Optional[LetterNumber],
    local: str,
) -> _Key:
    """Build the ordering key for a set of parsed version segments."""
    release_key = Parts.of(release).normalize()

    # A dev-only release sorts before every pre-release of the same release,
    # a final release after all of them.
    if pre is None and post is None and dev is not None:
        pre_key: Part = NegativeInfinity
    elif pre is None:
        pre_key = Infinity
    else:
        pre_key = Parts.of(pre)

    post_key: Part = NegativeInfinity if post is None else Parts.of(post)
    dev_key: Part = Infinity if dev is None else Parts.of(dev)

    # Alphanumeric local segments sort before numeric ones, and a shorter
    # local version sorts first when it is a prefix of the longer one.
    if local:
        local_key: Part = Parts.of(_local_tokens(local), fill=None)
    else:
        local_key = NegativeInfinity

    return _Key(Value(epoch), release_key, pre_key, post_key, dev_key, local_key)


def _local_tokens(local: str) -> tuple[Union[int, str], ...]:
    return tuple(int(token) if token.isdigit() else token for token in local.split("."))


@dataclass(frozen=True, slots=True, eq=False)
class Version:
    """Represents a parsed PEP 440 version.

    Attributes:
        epoch: Version epoch (0 unless written as N!)
        release: Release segment numbers, e.g. (1, 2, 3)
        pre: Optional pre-release (letter, number) with letter in a, b, rc
        post: Optional post-release ("post", number)
        dev: Optional development release ("dev", number)
        local: Local version label, "" when absent
        original: The string the version was parsed from
    """

    epoch: int = 0
    release: tuple[int, ...] = (0,)
    pre: Optional[LetterNumber] = None
    post: Optional[LetterNumber] = None
    dev: Optional[LetterNumber] = None
    local: str = ""
    original: str = ""
    _key: _Key = field(init=False, repr=False)
    _text: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.release:
            raise ParseError(self.original, "release segment cannot be empty")
        object.__setattr__(
            self,
            "_key",
            _cmpkey(self.epoch, self.release, self.pre, self.post, self.dev, self.local),
        )
        object.__setattr__(self, "_text", self._render())

    def _render(self) -> str:
        parts = []

        if self.epoch != 0:
            parts.append(f"{self.epoch}!")

        parts.append(".".join(str(r) for r in self.release))

        if self.pre is not None:
            parts.append(f"{self.pre[0]}{self.pre[1]}")

        if self.post is not None:
            parts.append(f".post{self.post[1]}")

        if self.dev is not None:
            parts.append(f".dev{self.dev[1]}")

        if self.local:
            parts.append(f"+{self.local}")

        return "".join(parts)

    def __str__(self) -> str:
        """Return the canonical string representation of the version."""
        return self._text

    def __repr__(self) -> str:
        return f"<Version({self._text!r})>"

    def compare(self, other: Version) -> int:
        """Compare this version to another.

        Returns:
            -1 if this version is smaller, 0 if equal, 1 if larger
        """
        if self._text == other._text:
            return 0

        k1 = self._key
        k2 = other._key
        length = max(len(k1.release), len(k2.release))
        k1 = k1._replace(release=k1.release.padding(length, Zero))
        k2 = k2._replace(release=k2.release.padding(length, Zero))

        return k1.compare(k2)

    def equal(self, other: Version) -> bool:
        return self.compare(other) == 0

    def less_than(self, other: Version) -> bool:
        return self.compare(other) < 0

    def less_than_or_equal(self, other: Version) -> bool:
        return self.compare(other) <= 0

    def greater_than(self, other: Version) -> bool:
        return self.compare(other) > 0

    def greater_than_or_equal(self, other: Version) -> bool:
        return self.compare(other) >= 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.equal(other)

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return not self.equal(other)

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.less_than(other)

    def __le__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.less_than_or_equal(other)

    def __gt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.greater_than(other)

    def __ge__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.greater_than_or_equal(other)

    def __hash__(self) -> int:
        release = list(self.release)
        while release and release[-1] == 0:
            release.pop()
        local = _local_tokens(self.local) if self.local else ()
        return hash((self.epoch, tuple(release), self.pre, self.post, self.dev, local))

    @property
    def base_version(self) -> str:
        """Return the epoch and release segment only."""
        release = ".".join(str(r) for r in self.release)
        if self.epoch != 0:
            return f"{self.epoch}!{release}"
        return release

    @property
    def public(self) -> str:
        """Return the canonical version without its local label."""
        return self._text.split("+", 1)[0]

    @property
    def is_prerelease(self) -> bool:
        """Return True for pre-releases and development releases."""
        return self.pre is not None or self.dev is not None

    @property
    def is_postrelease(self) -> bool:
        return self.post is not None

    @property
    def is_devrelease(self) -> bool:
        return self.dev is not None

    @property
    def major(self) -> int:
        return self.release[0]

    @property
    def minor(self) -> int:
        return self.release[1] if len(self.release) > 1 else 0

    @property
    def micro(self) -> int:
        return self.release[2] if len(self.release) > 2 else 0


def parse_version(version_string: str) -> Version:
    """Parse a PEP 440 version string into a Version object.

    Matching is case-insensitive and tolerates a leading "v" and
    surrounding whitespace. Alternate spellings are normalized, so
    "1.0-ALPHA.1" parses to the same version as "1.0a1".

    Args:
        version_string: The version to parse

    Returns:
        A Version object with parsed components

    Raises:
        ParseError: If the string does not follow PEP 440

    Examples:
        >>> parse_version("1.2.3")
        <Version('1.2.3')>

        >>> parse_version("v1.0-beta.2")
        <Version('1.0b2')>

        >>> str(parse_version("1!2.0.post1.dev3+ubuntu-1"))
        '1!2.0.post1.dev3+ubuntu.1'
    """
    if not isinstance(version_string, str):
        raise ParseError(
            str(version_string), f"Version must be a string, got {type(version_string).__name__}"
        )

    match = _VERSION_REGEX.match(version_string)
    if not match:
        logger.debug("Rejected version string %r", version_string)
        raise ParseError(version_string)

    try:
        epoch = int(match.group("epoch")) if match.group("epoch") else 0
        release = tuple(int(r) for r in match.group("release").split("."))

        pre = None
        if match.group("pre_l"):
            pre = (PRE_RELEASE_ALIASES[match.group("pre_l").lower()], int(match.group("pre_n") or 0))

        post = None
        if match.group("post_n1"):
            post = ("post", int(match.group("post_n1")))
        elif match.group("post_l"):
            post = (POST_RELEASE_ALIASES[match.group("post_l").lower()], int(match.group("post_n2") or 0))

        dev = None
        if match.group("dev_l"):
            dev = ("dev", int(match.group("dev_n") or 0))

        local = ""
        if match.group("local"):
            local = _LOCAL_SEPARATORS.sub(".", match.group("local").lower())

        return Version(
            epoch=epoch,
            release=release,
            pre=pre,
            post=post,
            dev=dev,
            local=local,
            original=version_string,
        )
    except ValueError as e:
        # int() refuses digit strings past the interpreter's conversion limit
        logger.debug("Rejected version string %r: %s", version_string, e)
        raise ParseError(version_string, f"malformed version: {e}") from e


def must_parse(version_string: str) -> Version:
    """Parse a version that is known to be valid, such as a constant.

    Raises:
        RuntimeError: If the string is not a valid version. This signals a
            programming error rather than bad user input.
    """
    try:
        return parse_version(version_string)
    except ParseError as e:
        raise RuntimeError(f"invalid version constant: {e.message}") from e


def is_valid_version(version_string: str) -> bool:
    """Check if a string is a valid PEP 440 version.

    Examples:
        >>> is_valid_version("1.0.post1")
        True
        >>> is_valid_version("1.0-foo")
        False
    """
    try:
        parse_version(version_string)
    except ParseError:
        return False
    return True


def compare_versions(version1: Union[str, Version], version2: Union[str, Version]) -> int:
    """Compare two versions following PEP 440 ordering.

    Returns:
        -1 if version1 < version2
        0 if version1 == version2
        1 if version1 > version2

    Raises:
        ParseError: If either version string is invalid

    Examples:
        >>> compare_versions("1.0", "1.0.0")
        0
        >>> compare_versions("1.0rc1", "1.0")
        -1
        >>> compare_versions("1.0.post1", "1.0")
        1
    """
    v1 = parse_version(version1) if isinstance(version1, str) else version1
    v2 = parse_version(version2) if isinstance(version2, str) else version2
    return v1.compare(v2)


def version_key(version: Union[str, Version]) -> Version:
    """Return a sort key for a version string or Version.

    Examples:
        >>> sorted(["1.0", "1.0a1", "1.0.dev1"], key=version_key)
        ['1.0.dev1', '1.0a1', '1.0']
    """
    return parse_version(version) if isinstance(version, str) else version


class SortedVersions(list):
    """A list of versions exposing the primitives of an in-place sort.

    ``less`` and ``swap`` address items by index so any generic sorting
    routine can order the list. The built-in ``sort`` gives the same order.
    """

    def less(self, i: int, j: int) -> bool:
        return self[i].less_than(self[j])

    def swap(self, i: int, j: int) -> None:
        self[i], self[j] = self[j], self[i]


def sort_versions(
    versions: Iterable[Union[str, Version]], reverse: bool = False
) -> list[Version]:
    """Parse and sort versions in ascending PEP 440 order.

    Raises:
        ParseError: If any version string is invalid
    """
    result = SortedVersions(version_key(v) for v in versions)
    result.sort(reverse=reverse)
    return list(result)
