"""
Release policy — the knobs that shape a generated release config.

Everything the generators would otherwise read from module globals
lives here instead, so alternate policies can be passed in (and tested)
without touching shared state. Defaults reproduce the OpenTelemetry
Collector release layout.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ReleasePolicy(BaseModel):
    """Naming, target and layout rules applied to every distribution.

    ``public_name`` must not contain ``internal_name``: image names are
    derived by replacing the first occurrence of the internal token, and
    that rule is only safe to re-apply when the replacement cannot
    reintroduce it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    project_name: str = "opentelemetry-collector-releases"
    checksum_template: str = "{{ .ProjectName }}_checksums.txt"

    image_prefixes: tuple[str, ...] = ("otel",)

    # Binary targets
    goos: tuple[str, ...] = ("darwin", "linux")
    architectures: tuple[str, ...] = ("amd64", "arm64")
    arm_versions: tuple[str, ...] = ("7",)

    # Container targets (deliberately narrower than binary targets)
    image_architectures: tuple[str, ...] = Field(default=("amd64",), min_length=1)
    image_os: str = "linux"

    # Repository layout
    distributions_root: str = "distributions"
    build_dir: str = "_build"
    configs_dir: str = "configs"

    # Internal → public name substitution
    internal_name: str = Field(default="otelcol", min_length=1)
    public_name: str = "opentelemetry-collector"

    @field_validator("image_architectures")
    @classmethod
    def _no_blank_architectures(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if any(not arch.strip("/") for arch in value):
            raise ValueError("image architectures must be non-empty")
        return value

    @model_validator(mode="after")
    def _check_name_pair(self) -> ReleasePolicy:
        if self.internal_name in self.public_name:
            raise ValueError(
                f"public_name '{self.public_name}' contains internal_name "
                f"'{self.internal_name}'; image names would double-translate"
            )
        return self


DEFAULT_POLICY = ReleasePolicy()
