"""
Shared test fixtures and configuration.
"""

import logging
import textwrap
from pathlib import Path

import pytest

from releasegen.core.models.policy import ReleasePolicy


@pytest.fixture
def dists() -> list[str]:
    """The two reference distributions."""
    return ["otelcol", "otelcol-contrib"]


@pytest.fixture
def multiarch_policy() -> ReleasePolicy:
    """Policy publishing images for three architectures."""
    return ReleasePolicy(image_architectures=("amd64", "arm64", "arm/v7"))


@pytest.fixture
def release_yml(tmp_path: Path) -> Path:
    """A release.yml declaring two distributions and a custom prefix list."""
    content = textwrap.dedent("""\
        distributions:
          - otelcol
          - otelcol-contrib
        policy:
          image_prefixes:
            - otel
            - ghcr.io/acme
    """)
    path = tmp_path / "release.yml"
    path.write_text(content)
    return path


@pytest.fixture(autouse=True)
def _reset_root_logger():
    """CLI runs reconfigure the root logger; restore it afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
