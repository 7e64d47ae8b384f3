"""
Docker image generator — per-architecture container image builds.

Each distribution gets one image entry per supported image
architecture. Every entry is tagged under every configured prefix, once
with the release version and once as ``latest``, with the architecture
appended so the per-arch images can later be stitched together by a
manifest.

Build flags are emitted in a fixed order (pull, platform, then the OCI
labels) so regenerated configs diff cleanly.
"""

from __future__ import annotations

import logging
import posixpath

from releasegen.core.models.policy import DEFAULT_POLICY, ReleasePolicy
from releasegen.core.models.release import DockerImageSpec
from releasegen.core.services.generators.naming import (
    TAG_KINDS,
    image_ref,
    split_arch,
)

logger = logging.getLogger(__name__)

DOCKER_BUILDER = "buildx"

_LABEL = "--label=org.opencontainers.image.{key}={{{{{value}}}}}"

# (label key, release-engine template field), in emission order
OCI_LABELS = (
    ("created", ".Date"),
    ("name", ".ProjectName"),
    ("revision", ".FullCommit"),
    ("version", ".Version"),
    ("source", ".GitURL"),
)


def _label(key: str, value: str) -> str:
    return _LABEL.format(key=key, value=value)


def build_flag_templates(arch: str, policy: ReleasePolicy = DEFAULT_POLICY) -> tuple[str, ...]:
    """``docker buildx build`` flags for one image architecture."""
    return (
        "--pull",
        f"--platform={policy.image_os}/{arch}",
        *(_label(key, value) for key, value in OCI_LABELS),
    )


def generate_docker_image(
    image_prefixes: list[str],
    dist: str,
    arch: str,
    policy: ReleasePolicy = DEFAULT_POLICY,
) -> DockerImageSpec:
    """Image entry for one distribution on one architecture.

    Args:
        image_prefixes: Registry/namespace scopes, in tag order.
        dist:           Distribution id.
        arch:           Image architecture, possibly with a variant
                        (``arm/v7``); used verbatim for ``--platform``
                        and split into goarch/goarm for the binary.
        policy:         Release policy.
    """
    goarch, goarm = split_arch(arch)

    image_templates = [
        image_ref(prefix, dist, tag, arch, policy)
        for prefix in image_prefixes
        for tag in TAG_KINDS
    ]
    if not image_templates:
        logger.warning("No image prefixes configured; image for '%s' has no tags", dist)

    return DockerImageSpec(
        image_templates=tuple(image_templates),
        dockerfile=posixpath.join(policy.distributions_root, dist, "Dockerfile"),
        use=DOCKER_BUILDER,
        build_flag_templates=build_flag_templates(arch, policy),
        extra_files=(posixpath.join(policy.configs_dir, f"{dist}.yaml"),),
        goos=policy.image_os,
        goarch=goarch,
        goarm=goarm,
    )


def generate_docker_images(
    image_prefixes: list[str],
    dists: list[str],
    policy: ReleasePolicy = DEFAULT_POLICY,
) -> list[DockerImageSpec]:
    """Image entries for every distribution × image architecture pair."""
    images = []
    for dist in dists:
        for arch in policy.image_architectures:
            images.append(generate_docker_image(image_prefixes, dist, arch, policy))
    logger.debug(
        "Generated %d docker images (%d prefixes, archs: %s)",
        len(images),
        len(image_prefixes),
        ", ".join(policy.image_architectures),
    )
    return images
