"""
Build generator — one compiled-binary build per distribution.

Builds are fully static and reproducible: cgo is off, source paths are
trimmed from the binary, and symbol/debug tables are stripped.
"""

from __future__ import annotations

import logging
import posixpath

from releasegen.core.models.policy import DEFAULT_POLICY, ReleasePolicy
from releasegen.core.models.release import BuildSpec

logger = logging.getLogger(__name__)

BUILD_ENV = ("CGO_ENABLED=0",)
BUILD_FLAGS = ("-trimpath",)
BUILD_LDFLAGS = ("-s", "-w")


def generate_build(dist: str, policy: ReleasePolicy = DEFAULT_POLICY) -> BuildSpec:
    """Build entry for a single distribution."""
    return BuildSpec(
        id=dist,
        dir=posixpath.join(policy.distributions_root, dist, policy.build_dir),
        binary=dist,
        env=BUILD_ENV,
        flags=BUILD_FLAGS,
        ldflags=BUILD_LDFLAGS,
        goos=policy.goos,
        goarch=policy.architectures,
        goarm=policy.arm_versions,
    )


def generate_builds(
    dists: list[str],
    policy: ReleasePolicy = DEFAULT_POLICY,
) -> list[BuildSpec]:
    builds = [generate_build(dist, policy) for dist in dists]
    logger.debug("Generated %d builds", len(builds))
    return builds
