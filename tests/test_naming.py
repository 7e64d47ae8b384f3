"""
Tests for naming rules — image names, arch tags, image references.
"""

import pytest

from releasegen.core.models.policy import ReleasePolicy
from releasegen.core.services.generators.naming import (
    LATEST_TAG,
    TAG_KINDS,
    VERSION_TAG,
    arch_tag,
    image_name,
    image_ref,
    manifest_name,
    split_arch,
)


class TestImageName:
    @pytest.mark.parametrize(
        "dist, expected",
        [
            ("otelcol", "opentelemetry-collector"),
            ("otelcol-contrib", "opentelemetry-collector-contrib"),
            ("otelcol-k8s", "opentelemetry-collector-k8s"),
            ("custom", "custom"),
            ("", ""),
        ],
    )
    def test_default_policy(self, dist, expected):
        assert image_name(dist) == expected

    def test_only_first_occurrence_replaced(self):
        assert image_name("otelcol-otelcol") == "opentelemetry-collector-otelcol"

    def test_reapplying_is_stable(self):
        """The public name does not contain the internal token."""
        once = image_name("otelcol-contrib")
        assert image_name(once) == once

    def test_custom_policy(self):
        policy = ReleasePolicy(internal_name="acmecol", public_name="acme-collector")
        assert image_name("acmecol-edge", policy) == "acme-collector-edge"
        assert image_name("otelcol", policy) == "otelcol"


class TestArchTag:
    def test_plain(self):
        assert arch_tag("amd64") == "amd64"

    def test_separator_removed(self):
        assert arch_tag("arm/v7") == "armv7"

    def test_every_separator_removed(self):
        assert arch_tag("a/b/c") == "abc"


class TestSplitArch:
    def test_plain(self):
        assert split_arch("amd64") == ("amd64", None)

    def test_variant(self):
        assert split_arch("arm/v7") == ("arm", "7")

    def test_variant_without_v(self):
        assert split_arch("arm/6") == ("arm", "6")


class TestImageRef:
    def test_version_ref(self):
        assert (
            image_ref("otel", "otelcol", VERSION_TAG, "amd64")
            == "otel/opentelemetry-collector:{{ .Version }}-amd64"
        )

    def test_latest_ref(self):
        assert (
            image_ref("otel", "otelcol", LATEST_TAG, "amd64")
            == "otel/opentelemetry-collector:latest-amd64"
        )

    def test_variant_arch_is_sanitized(self):
        assert image_ref("otel", "otelcol", "latest", "arm/v7").endswith(":latest-armv7")

    def test_manifest_name(self):
        assert (
            manifest_name("ghcr.io/acme", "otelcol-contrib", LATEST_TAG)
            == "ghcr.io/acme/opentelemetry-collector-contrib:latest"
        )


def test_version_tag_comes_first():
    assert TAG_KINDS == (VERSION_TAG, LATEST_TAG)
