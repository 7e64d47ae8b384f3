"""Release config generation — assemble, render, write, drift-check."""

from __future__ import annotations

import difflib
import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from releasegen.core.models.policy import DEFAULT_POLICY, ReleasePolicy
from releasegen.core.models.release import ChecksumSpec, ProjectDocument
from releasegen.core.models.template import GeneratedFile
from releasegen.core.services.generators.archives import generate_archives
from releasegen.core.services.generators.builds import generate_builds
from releasegen.core.services.generators.dockers import generate_docker_images
from releasegen.core.services.generators.manifests import generate_docker_manifests

logger = logging.getLogger(__name__)

GENERATED_HEADER = (
    "# Code generated by releasegen. DO NOT EDIT.\n"
    "# Regenerate with: releasegen generate\n"
)


def generate(
    image_prefixes: list[str],
    dists: list[str],
    policy: ReleasePolicy | None = None,
) -> ProjectDocument:
    """Build the full release document for the given distributions.

    Distribution ids must be non-empty and unique; callers validate that
    before getting here (see ``use_cases.generate.validate_distributions``).

    Args:
        image_prefixes: Registry/namespace scopes for container images.
        dists:          Distribution ids, in output order.
        policy:         Release policy (default: OpenTelemetry layout).

    Returns:
        A frozen ProjectDocument with builds, archives, dockers and
        docker_manifests in that order.
    """
    policy = policy or DEFAULT_POLICY
    image_prefixes = list(image_prefixes)
    dists = list(dists)

    document = ProjectDocument(
        project_name=policy.project_name,
        checksum=ChecksumSpec(name_template=policy.checksum_template),
        builds=tuple(generate_builds(dists, policy)),
        archives=tuple(generate_archives(dists, policy)),
        dockers=tuple(generate_docker_images(image_prefixes, dists, policy)),
        docker_manifests=tuple(generate_docker_manifests(image_prefixes, dists, policy)),
    )
    logger.info(
        "Generated release config: %d distributions, %d images, %d manifests",
        len(document.builds),
        len(document.dockers),
        len(document.docker_manifests),
    )
    return document


def render_yaml(document: ProjectDocument) -> str:
    """Render a document as YAML, keys in model order."""
    body = yaml.safe_dump(
        document.to_dict(),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=1000,
    )
    return GENERATED_HEADER + body


def write_document(document: ProjectDocument, path: Path) -> GeneratedFile:
    """Render *document* and write it to *path*.

    Returns:
        GeneratedFile describing what was written.
    """
    content = render_yaml(document)
    existed = path.is_file()

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="\n")
    logger.info("Wrote %s (%d bytes)", path, len(content))

    return GeneratedFile(
        path=str(path),
        content=content,
        overwrite=existed,
        reason=f"Release config for {len(document.builds)} distribution(s)",
    )


@dataclass
class DriftReport:
    """Comparison of a generated document against a file on disk."""

    path: str
    exists: bool = False
    up_to_date: bool = False
    diff: str = ""

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "exists": self.exists,
            "up_to_date": self.up_to_date,
            "diff": self.diff,
        }


def check_drift(document: ProjectDocument, path: Path) -> DriftReport:
    """Compare the rendered document with the checked-in file at *path*."""
    report = DriftReport(path=str(path))
    if not path.is_file():
        logger.info("No existing release config at %s", path)
        return report

    report.exists = True
    expected = render_yaml(document)
    raw = path.read_bytes()
    if raw == expected.encode("utf-8"):
        report.up_to_date = True
        return report

    # Line endings count: decode without newline translation
    actual = raw.decode("utf-8", errors="replace")

    report.diff = "".join(
        difflib.unified_diff(
            actual.splitlines(keepends=True),
            expected.splitlines(keepends=True),
            fromfile=f"{path} (on disk)",
            tofile=f"{path} (generated)",
        )
    )
    logger.info("Release config %s is out of date", path)
    return report
