# SPDX-License-Identifier: MIT
"""PEP 440 version parsing, ordering and constraint matching.

This package parses version identifiers written in the PEP 440 grammar,
orders them, and checks them against constraint expressions such as
``>=1.2,<2.0``.

Example:
    >>> from pep440_version import parse_version, parse_constraints
    >>>
    >>> version = parse_version("v1.0-RC.1")
    >>> str(version)
    '1.0rc1'
    >>> version.is_prerelease
    True
    >>>
    >>> parse_version("1.0") == parse_version("1.0.0")
    True
    >>>
    >>> parse_constraints(">=1.0,<2.0 || ==3.*").check("3.1")
    True
"""

__version__ = "0.1.0"

from .part import (
    Infinity,
    NegativeInfinity,
    Part,
    Parts,
    Value,
)
from .version import (
    Version,
    SortedVersions,
    ParseError,
    parse_version,
    must_parse,
    is_valid_version,
    compare_versions,
    version_key,
    sort_versions,
    VERSION_PATTERN,
)
from .specifier import (
    Constraint,
    Constraints,
    ConstraintError,
    parse_constraint,
    parse_constraints,
)

__all__ = [
    # Ordered values
    "Infinity",
    "NegativeInfinity",
    "Part",
    "Parts",
    "Value",
    # Version parsing and comparison
    "Version",
    "SortedVersions",
    "ParseError",
    "parse_version",
    "must_parse",
    "is_valid_version",
    "compare_versions",
    "version_key",
    "sort_versions",
    "VERSION_PATTERN",
    # Constraints
    "Constraint",
    "Constraints",
    "ConstraintError",
    "parse_constraint",
    "parse_constraints",
]
