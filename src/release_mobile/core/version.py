"""Version parsing and next-version arithmetic.

Versions follow the Flutter manifest convention ``MAJOR.MINOR.PATCH[+BUILD]``.
A release either takes an explicit version/build number or bumps the patch
component and the build number by one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from release_mobile.exceptions import (
    InvalidBuildNumberError,
    InvalidVersionError,
    MalformedManifestError,
)

VERSION_KEY = "version"

_EXPLICIT_VERSION = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)")
_NUMBER = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class Version:
    """A ``major.minor.patch`` version with an optional build number."""

    major: int
    minor: int
    patch: int
    build_number: int | None = None

    def __str__(self) -> str:
        if self.build_number is None:
            return self.base
        return f"{self.base}+{self.build_number}"

    @property
    def base(self) -> str:
        """The version without its build suffix, as used in git tags."""
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse ``X.Y.Z`` or ``X.Y.Z+B``.

        Raises:
            MalformedManifestError: If any component is missing or not a
                non-negative integer
        """
        value = text.strip()
        if not value:
            raise MalformedManifestError("version value is empty")

        core, sep, build = value.partition("+")
        parts = core.split(".")
        if len(parts) != 3 or not all(_NUMBER.fullmatch(p) for p in parts):
            raise MalformedManifestError(f"expected MAJOR.MINOR.PATCH, got {value!r}")

        build_number: int | None = None
        if sep:
            if not _NUMBER.fullmatch(build):
                raise MalformedManifestError(f"build number is not an integer in {value!r}")
            build_number = int(build)

        major, minor, patch = (int(p) for p in parts)
        return cls(major, minor, patch, build_number)

    def bump_patch(self) -> Version:
        return replace(self, patch=self.patch + 1)


def parse_version_line(line: str) -> Version:
    """Parse a manifest line such as ``version: 1.2.3+45``.

    Raises:
        MalformedManifestError: If the line is not a version line or its
            value cannot be parsed
    """
    stripped = line.strip()
    if not stripped.startswith(VERSION_KEY):
        raise MalformedManifestError(f"not a version line: {line!r}")
    value = stripped[len(VERSION_KEY) :].lstrip()
    if not value.startswith(":"):
        raise MalformedManifestError(f"missing ':' after version key in {line!r}")
    return Version.parse(value[1:])


def resolve_build_number(current: Version, explicit: str | None) -> int | None:
    """Return the build number for the next release.

    An explicit value wins. Otherwise the current build number is incremented
    by one; a version without a build number stays without one.
    """
    if explicit is not None:
        candidate = explicit.strip()
        if not _NUMBER.fullmatch(candidate):
            raise InvalidBuildNumberError(explicit)
        return int(candidate)
    if current.build_number is None:
        return None
    return current.build_number + 1


def compute_next_version(
    current_version_line: str,
    explicit_version: str | None = None,
    explicit_build_number: str | None = None,
) -> Version:
    """Compute the version of the next release.

    Args:
        current_version_line: The manifest's version line (``version: X.Y.Z[+B]``)
        explicit_version: Optional ``X.Y.Z`` override (``--set-version``)
        explicit_build_number: Optional build number override (``--set-bn``)

    Returns:
        The next version. It carries a build number only when one was given
        explicitly or the current version already had one.

    Raises:
        MalformedManifestError: If the current version line is unusable
        InvalidBuildNumberError: If the explicit build number is not an integer
        InvalidVersionError: If the explicit version is not three integers
    """
    current = parse_version_line(current_version_line)
    build_number = resolve_build_number(current, explicit_build_number)

    if explicit_version is not None:
        match = _EXPLICIT_VERSION.fullmatch(explicit_version.strip())
        if not match:
            raise InvalidVersionError(explicit_version)
        major, minor, patch = (int(g) for g in match.groups())
        return Version(major, minor, patch, build_number)

    return replace(current.bump_patch(), build_number=build_number)
