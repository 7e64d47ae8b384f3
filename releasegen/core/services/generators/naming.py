"""
Naming rules — distribution ids to public image names and tags.
"""

from __future__ import annotations

from releasegen.core.models.policy import DEFAULT_POLICY, ReleasePolicy

VERSION_TAG = "{{ .Version }}"
LATEST_TAG = "latest"

# Tag kinds, in the order they are emitted
TAG_KINDS = (VERSION_TAG, LATEST_TAG)

_IMAGE_REF = "{prefix}/{name}:{tag}-{arch}"
_MANIFEST_NAME = "{prefix}/{name}:{tag}"


def image_name(dist: str, policy: ReleasePolicy = DEFAULT_POLICY) -> str:
    """Translate a distribution id into its public container image name.

    Only the first occurrence of the internal project token is replaced:
    ``otelcol-contrib`` → ``opentelemetry-collector-contrib``.
    """
    return dist.replace(policy.internal_name, policy.public_name, 1)


def arch_tag(arch: str) -> str:
    """Architecture as it appears in an image tag (``arm/v7`` → ``armv7``)."""
    return arch.replace("/", "")


def split_arch(arch: str) -> tuple[str, str | None]:
    """Split an image architecture into (goarch, goarm).

    ``arm/v7`` → ``("arm", "7")``; ``amd64`` → ``("amd64", None)``.
    """
    base, sep, variant = arch.partition("/")
    if not sep:
        return arch, None
    return base, variant.lstrip("v") or None


def image_ref(
    prefix: str,
    dist: str,
    tag: str,
    arch: str,
    policy: ReleasePolicy = DEFAULT_POLICY,
) -> str:
    """Fully-qualified reference to a single-architecture image."""
    return _IMAGE_REF.format(
        prefix=prefix,
        name=image_name(dist, policy),
        tag=tag,
        arch=arch_tag(arch),
    )


def manifest_name(
    prefix: str,
    dist: str,
    tag: str,
    policy: ReleasePolicy = DEFAULT_POLICY,
) -> str:
    """Fully-qualified multi-architecture manifest name."""
    return _MANIFEST_NAME.format(prefix=prefix, name=image_name(dist, policy), tag=tag)
