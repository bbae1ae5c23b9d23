"""ABOUTME: Discovers the ERP database file on disk.
ABOUTME: Honors an explicit override, else scans the installation root for the newest version."""

import logging
from functools import cmp_to_key
from pathlib import Path

from clibdb.gateway.versions import (
    InstallationVersion,
    compare_versions,
    parse_reference_version,
    parse_version,
)
from clibdb.settings import Settings

logger = logging.getLogger(__name__)


def database_file_name(version: InstallationVersion, prefix: str = "SAE", company: str = "01") -> str:
    """Build the canonical database file name for a version and company.

    Examples:
        >>> database_file_name(InstallationVersion(8, 0))
        'SAE80EMPRE01.FDB'
    """
    return f"{prefix.upper()}{version.major}{version.minor}EMPRE{company}.FDB"


def database_subpath(version: InstallationVersion, prefix: str = "SAE", company: str = "01") -> Path:
    """Relative path of the database file inside a version folder."""
    return Path(f"Empresa{company}") / "Datos" / database_file_name(version, prefix, company)


def default_database_path(
    root: Path,
    reference: InstallationVersion,
    prefix: str = "SAE",
    company: str = "01",
) -> Path:
    """Path the reference version would install its database to."""
    folder = f"{prefix.upper()}{reference.major}.{reference.minor:02d}"
    return root / folder / database_subpath(reference, prefix, company)


def _exists(path: Path) -> bool:
    """Like Path.exists, but treats permission errors as a missing file."""
    try:
        return path.exists()
    except OSError as e:
        logger.debug("Cannot check %s: %s", path, e)
        return False


def find_installations(root: Path, prefix: str = "SAE") -> list[tuple[InstallationVersion, Path]]:
    """List version folders under the installation root.

    Folders whose names don't match the version pattern are skipped. A missing
    or unreadable root yields an empty list.

    Args:
        root: Installation root directory.
        prefix: Version folder prefix.

    Returns:
        (version, folder) pairs in directory order.
    """
    try:
        entries = list(root.iterdir())
    except OSError as e:
        logger.debug("Cannot scan installation root %s: %s", root, e)
        return []

    found: list[tuple[InstallationVersion, Path]] = []
    for entry in entries:
        try:
            if not entry.is_dir():
                continue
        except OSError as e:
            logger.debug("Skipping unreadable entry %s: %s", entry, e)
            continue
        version = parse_version(entry.name, prefix)
        if version is None:
            continue
        found.append((version, entry))
    return found


def resolve_database_path(config: Settings) -> Path:
    """Locate the database file to connect to.

    Resolution order:
    1. ``DATABASE_PATH`` when it exists on disk.
    2. The newest installation at or above ``REFERENCE_VERSION`` whose
       database file exists.
    3. The default path for the reference version, even if missing.

    Args:
        config: Project settings.

    Returns:
        Path to the database file.
    """
    override = config.DATABASE_PATH
    if override is not None and _exists(override):
        return override

    prefix = config.VERSION_PREFIX
    company = config.COMPANY
    reference = parse_reference_version(config.REFERENCE_VERSION)

    candidates = [
        (version, folder)
        for version, folder in find_installations(config.INSTALL_ROOT, prefix)
        if compare_versions(version, reference) >= 0
    ]
    candidates.sort(key=cmp_to_key(lambda x, y: compare_versions(x[0], y[0])), reverse=True)

    for version, folder in candidates:
        path = folder / database_subpath(version, prefix, company)
        if _exists(path):
            logger.debug("Found %s database at %s", folder.name, path)
            return path

    fallback = default_database_path(config.INSTALL_ROOT, reference, prefix, company)
    logger.warning("No installed database found under %s, falling back to %s", config.INSTALL_ROOT, fallback)
    return fallback
