"""
Generate / check use cases — resolve inputs, build the document, emit it.

Inputs come from release.yml (when present) and are overridden by
explicit arguments. Expected failures are reported on the result object
rather than raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from releasegen.core.config.loader import (
    ConfigError,
    config_root,
    find_config_file,
    load_config,
)
from releasegen.core.models.policy import DEFAULT_POLICY, ReleasePolicy
from releasegen.core.models.project import ReleaseConfig
from releasegen.core.models.release import ProjectDocument
from releasegen.core.models.template import GeneratedFile
from releasegen.core.services.generators.naming import image_name
from releasegen.core.services.release_generate import (
    DriftReport,
    check_drift,
    generate,
    render_yaml,
    write_document,
)

logger = logging.getLogger(__name__)


def _duplicates(values: list[str]) -> list[str]:
    """Values seen more than once, in first-repeat order."""
    seen: list[str] = []
    dupes: list[str] = []
    for v in values:
        if v in seen and v not in dupes:
            dupes.append(v)
        seen.append(v)
    return dupes


def validate_distributions(
    dists: list[str],
    policy: ReleasePolicy = DEFAULT_POLICY,
) -> list[str]:
    """Check the distribution-id preconditions the generators rely on.

    Ids must be non-empty and unique, and distinct ids must not share a
    public image name (``otelcol`` and ``opentelemetry-collector`` would
    both publish ``opentelemetry-collector`` tags).

    Returns:
        Error messages; empty when the list is usable.
    """
    errors: list[str] = []
    if any(not d.strip() for d in dists):
        errors.append("Distribution ids must be non-empty.")

    dupes = _duplicates(dists)
    if dupes:
        errors.append(f"Duplicate distributions: {', '.join(dupes)}")

    unique = [d for i, d in enumerate(dists) if d not in dists[:i]]
    names = [image_name(d, policy) for d in unique]
    for name in _duplicates(names):
        owners = [d for d, n in zip(unique, names) if n == name]
        errors.append(
            f"Distributions {', '.join(owners)} share the image name '{name}'."
        )
    return errors


def validate_image_prefixes(prefixes: list[str]) -> list[str]:
    """Prefixes must be non-empty and unique; an empty list is allowed."""
    errors: list[str] = []
    if any(not p.strip() for p in prefixes):
        errors.append("Image prefixes must be non-empty.")
    dupes = _duplicates(prefixes)
    if dupes:
        errors.append(f"Duplicate image prefixes: {', '.join(dupes)}")
    return errors


@dataclass
class _Inputs:
    config: ReleaseConfig
    config_path: Path | None
    distributions: list[str]
    image_prefixes: list[str]
    output: Path


def _resolve_inputs(
    config_path: Path | None,
    distributions: list[str] | None,
    image_prefixes: list[str] | None,
    output: Path | None,
) -> _Inputs:
    """Merge release.yml with explicit overrides.

    Raises:
        ConfigError: If an explicit or discovered config is invalid.
    """
    if config_path is None:
        config_path = find_config_file()

    if config_path is not None:
        config = load_config(config_path)
        root = config_root(config_path)
    else:
        logger.debug("No release.yml found, using the default policy")
        config = ReleaseConfig()
        root = Path.cwd()

    return _Inputs(
        config=config,
        config_path=config_path,
        distributions=list(distributions) if distributions else list(config.distributions),
        image_prefixes=(
            list(image_prefixes)
            if image_prefixes is not None
            else list(config.policy.image_prefixes)
        ),
        output=output if output is not None else root / config.output,
    )


@dataclass
class GenerateResult:
    """Result of a generate run."""

    document: ProjectDocument | None = None
    content: str = ""
    file: GeneratedFile | None = None
    output_path: Path | None = None
    distributions: list[str] = field(default_factory=list)
    image_prefixes: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.document is not None

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "error": self.error,
            "output": str(self.output_path) if self.output_path else None,
            "written": self.file is not None,
            "distributions": self.distributions,
            "image_prefixes": self.image_prefixes,
            "counts": {
                "builds": len(self.document.builds) if self.document else 0,
                "archives": len(self.document.archives) if self.document else 0,
                "dockers": len(self.document.dockers) if self.document else 0,
                "docker_manifests": (
                    len(self.document.docker_manifests) if self.document else 0
                ),
            },
        }


def _build(result: GenerateResult | CheckResult, inputs: _Inputs) -> ProjectDocument | None:
    result.distributions = inputs.distributions
    result.image_prefixes = inputs.image_prefixes
    result.output_path = inputs.output

    if not inputs.distributions:
        result.error = "No distributions given. Pass --dist or list them in release.yml."
        return None

    policy = inputs.config.policy
    errors = validate_distributions(inputs.distributions, policy)
    errors += validate_image_prefixes(inputs.image_prefixes)
    if errors:
        result.error = " ".join(errors)
        return None

    return generate(inputs.image_prefixes, inputs.distributions, policy)


def run_generate(
    config_path: Path | None = None,
    distributions: list[str] | None = None,
    image_prefixes: list[str] | None = None,
    output: Path | None = None,
    write: bool = True,
) -> GenerateResult:
    """Generate the release config and (optionally) write it.

    Args:
        config_path:    Explicit release.yml (default: search upward).
        distributions:  Overrides the config's distributions.
        image_prefixes: Overrides the policy's image prefixes.
        output:         Overrides the config's output path.
        write:          Write the rendered YAML to the output path.

    Returns:
        GenerateResult with the document and rendered content.
    """
    result = GenerateResult()

    try:
        inputs = _resolve_inputs(config_path, distributions, image_prefixes, output)
    except ConfigError as e:
        result.error = str(e)
        return result

    document = _build(result, inputs)
    if document is None:
        return result

    result.document = document
    if write:
        result.file = write_document(document, inputs.output)
        result.content = result.file.content
    else:
        result.content = render_yaml(document)
    return result


@dataclass
class CheckResult:
    """Result of checking a checked-in release config for drift."""

    drift: DriftReport | None = None
    output_path: Path | None = None
    distributions: list[str] = field(default_factory=list)
    image_prefixes: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def up_to_date(self) -> bool:
        return self.error is None and self.drift is not None and self.drift.up_to_date

    def to_dict(self) -> dict:
        return {
            "up_to_date": self.up_to_date,
            "error": self.error,
            "distributions": self.distributions,
            "image_prefixes": self.image_prefixes,
            "drift": self.drift.to_dict() if self.drift else None,
        }


def run_check(
    config_path: Path | None = None,
    distributions: list[str] | None = None,
    image_prefixes: list[str] | None = None,
    output: Path | None = None,
) -> CheckResult:
    """Regenerate in memory and compare against the output file."""
    result = CheckResult()

    try:
        inputs = _resolve_inputs(config_path, distributions, image_prefixes, output)
    except ConfigError as e:
        result.error = str(e)
        return result

    document = _build(result, inputs)
    if document is None:
        return result

    result.drift = check_drift(document, inputs.output)
    return result
