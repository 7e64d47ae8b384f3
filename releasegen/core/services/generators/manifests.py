"""
Docker manifest generator — multi-arch manifests over the per-arch images.
"""

from __future__ import annotations

import logging

from releasegen.core.models.policy import DEFAULT_POLICY, ReleasePolicy
from releasegen.core.models.release import DockerManifestSpec
from releasegen.core.services.generators.naming import (
    TAG_KINDS,
    image_ref,
    manifest_name,
)

logger = logging.getLogger(__name__)


def generate_docker_manifest(
    prefix: str,
    tag: str,
    dist: str,
    policy: ReleasePolicy = DEFAULT_POLICY,
) -> DockerManifestSpec:
    """Manifest for one prefix and tag kind, listing one image per arch."""
    return DockerManifestSpec(
        name_template=manifest_name(prefix, dist, tag, policy),
        image_templates=tuple(
            image_ref(prefix, dist, tag, arch, policy)
            for arch in policy.image_architectures
        ),
    )


def generate_docker_manifests(
    image_prefixes: list[str],
    dists: list[str],
    policy: ReleasePolicy = DEFAULT_POLICY,
) -> list[DockerManifestSpec]:
    """Two manifests (version, latest) per distribution × prefix.

    Order is distribution-major, prefix-minor, version before latest.
    """
    manifests = [
        generate_docker_manifest(prefix, tag, dist, policy)
        for dist in dists
        for prefix in image_prefixes
        for tag in TAG_KINDS
    ]
    logger.debug("Generated %d docker manifests", len(manifests))
    return manifests
