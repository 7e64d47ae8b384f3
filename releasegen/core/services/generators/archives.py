"""
Archive generator — one tarball per distribution, linked to its build.
"""

from __future__ import annotations

import logging

from releasegen.core.models.policy import DEFAULT_POLICY, ReleasePolicy
from releasegen.core.models.release import ArchiveSpec

logger = logging.getLogger(__name__)

# ARM and MIPS suffixes only render when the build target sets them
ARCHIVE_NAME_TEMPLATE = (
    "{{ .Binary }}_{{ .Version }}_{{ .Os }}_{{ .Arch }}"
    "{{ if .Arm }}v{{ .Arm }}{{ end }}"
    "{{ if .Mips }}_{{ .Mips }}{{ end }}"
)


def generate_archive(dist: str, policy: ReleasePolicy = DEFAULT_POLICY) -> ArchiveSpec:
    """Archive entry packaging the build with the same id."""
    return ArchiveSpec(
        id=dist,
        name_template=ARCHIVE_NAME_TEMPLATE,
        builds=(dist,),
    )


def generate_archives(
    dists: list[str],
    policy: ReleasePolicy = DEFAULT_POLICY,
) -> list[ArchiveSpec]:
    archives = [generate_archive(dist, policy) for dist in dists]
    logger.debug("Generated %d archives", len(archives))
    return archives
