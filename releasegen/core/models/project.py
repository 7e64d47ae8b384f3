"""
Release project config — loaded from release.yml.

Declares which distributions a repository ships and the policy used to
derive their release entries. Command-line options override it.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from releasegen.core.models.policy import ReleasePolicy

DEFAULT_OUTPUT = ".goreleaser.yaml"


class ReleaseConfig(BaseModel):
    """Root of release.yml.

    Attributes:
        distributions: Distribution ids, in output order.
        output:        Where the generated release config is written,
                       relative to the config file's directory.
        policy:        Naming, target and layout rules.
    """

    distributions: list[str] = Field(default_factory=list)
    output: str = DEFAULT_OUTPUT
    policy: ReleasePolicy = Field(default_factory=ReleasePolicy)
