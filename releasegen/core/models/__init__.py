"""
Domain models — Pydantic types for release-config generation.

All models are re-exported here for convenient access:

    from releasegen.core.models import ProjectDocument, ReleasePolicy
"""

from releasegen.core.models.policy import DEFAULT_POLICY, ReleasePolicy
from releasegen.core.models.release import (
    ArchiveSpec,
    BuildSpec,
    ChecksumSpec,
    DockerImageSpec,
    DockerManifestSpec,
    ProjectDocument,
)
from releasegen.core.models.template import GeneratedFile

__all__ = [
    # release.py
    "ArchiveSpec",
    "BuildSpec",
    "ChecksumSpec",
    # policy.py
    "DEFAULT_POLICY",
    "DockerImageSpec",
    "DockerManifestSpec",
    # template.py
    "GeneratedFile",
    "ProjectDocument",
    "ReleasePolicy",
]
