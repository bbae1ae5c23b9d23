"""ABOUTME: Parsing and ordering of ERP installation version folder names.
ABOUTME: Turns names like "SAE9.00" into comparable InstallationVersion values."""

import re
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class InstallationVersion:
    """Version of an ERP installation, ordered by major then minor.

    Attributes:
        major: Major version number (e.g. 9 for "SAE9.00").
        minor: Minor version number (e.g. 0 for "SAE9.00").
    """

    major: int
    minor: int = 0


def _version_pattern(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(prefix)}(\d+)(?:\.(\d+))?$", re.IGNORECASE)


def parse_version(name: str, prefix: str = "SAE") -> InstallationVersion | None:
    """Parse a version folder name.

    Args:
        name: Folder name, e.g. "SAE8.00" or "sae9".
        prefix: Expected name prefix, matched case-insensitively.

    Returns:
        The parsed version, or None if the name does not match the pattern.

    Examples:
        >>> parse_version("SAE9.00")
        InstallationVersion(major=9, minor=0)
        >>> parse_version("sae10")
        InstallationVersion(major=10, minor=0)
        >>> parse_version("Backup") is None
        True
    """
    match = _version_pattern(prefix).match(name.strip())
    if match is None:
        return None
    major, minor = match.groups()
    return InstallationVersion(int(major), int(minor or 0))


def parse_reference_version(text: str) -> InstallationVersion:
    """Parse a bare "major[.minor]" reference version string.

    Raises:
        ValueError: If the text is not a valid version.
    """
    version = parse_version(text, prefix="")
    if version is None:
        raise ValueError(f"Invalid reference version: {text!r}")
    return version


def compare_versions(a: InstallationVersion | None, b: InstallationVersion | None) -> int:
    """Three-way comparison of two versions.

    A missing (unparsable) version sorts below every valid one; two missing
    versions compare equal.

    Returns:
        -1 if a < b, 0 if equal, 1 if a > b.
    """
    if a is None or b is None:
        return (a is not None) - (b is not None)
    return (a > b) - (a < b)
