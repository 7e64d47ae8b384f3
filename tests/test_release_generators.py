"""
Tests for release generators — builds, archives, docker images, manifests.

Pure unit tests: distribution / prefix lists in → frozen specs out.
"""

import pytest
from pydantic import ValidationError

from releasegen.core.models.policy import ReleasePolicy
from releasegen.core.services.generators.archives import (
    ARCHIVE_NAME_TEMPLATE,
    generate_archive,
    generate_archives,
)
from releasegen.core.services.generators.builds import generate_build, generate_builds
from releasegen.core.services.generators.dockers import (
    build_flag_templates,
    generate_docker_image,
    generate_docker_images,
)
from releasegen.core.services.generators.manifests import (
    generate_docker_manifest,
    generate_docker_manifests,
)


# ═══════════════════════════════════════════════════════════════════
#  Builds
# ═══════════════════════════════════════════════════════════════════


class TestGenerateBuild:
    def test_reference_build(self):
        build = generate_build("otelcol")
        assert build.id == "otelcol"
        assert build.binary == "otelcol"
        assert build.dir == "distributions/otelcol/_build"
        assert build.goos == ("darwin", "linux")
        assert build.goarch == ("amd64", "arm64")
        assert build.goarm == ("7",)

    def test_static_stripped_build_flags(self, dists):
        """Every build disables cgo, trims paths and strips symbols."""
        for build in generate_builds(dists + ["custom"]):
            assert "CGO_ENABLED=0" in build.env
            assert "-trimpath" in build.flags
            assert "-s" in build.ldflags
            assert "-w" in build.ldflags

    def test_policy_targets(self):
        policy = ReleasePolicy(
            goos=("linux", "windows"),
            architectures=("amd64", "arm", "ppc64le"),
            arm_versions=("6", "7"),
            distributions_root="dists",
            build_dir="out",
        )
        build = generate_build("acme", policy)
        assert build.dir == "dists/acme/out"
        assert build.goos == ("linux", "windows")
        assert build.goarch == ("amd64", "arm", "ppc64le")
        assert build.goarm == ("6", "7")

    def test_frozen(self):
        build = generate_build("otelcol")
        with pytest.raises(ValidationError):
            build.binary = "other"


class TestGenerateBuilds:
    def test_one_per_distribution_in_order(self, dists):
        builds = generate_builds(dists)
        assert [b.id for b in builds] == dists

    def test_empty(self):
        assert generate_builds([]) == []


# ═══════════════════════════════════════════════════════════════════
#  Archives
# ═══════════════════════════════════════════════════════════════════


class TestGenerateArchive:
    def test_links_to_build(self):
        archive = generate_archive("otelcol-contrib")
        assert archive.id == "otelcol-contrib"
        assert archive.builds == ("otelcol-contrib",)

    def test_name_template(self):
        archive = generate_archive("otelcol")
        assert archive.name_template == (
            "{{ .Binary }}_{{ .Version }}_{{ .Os }}_{{ .Arch }}"
            "{{ if .Arm }}v{{ .Arm }}{{ end }}{{ if .Mips }}_{{ .Mips }}{{ end }}"
        )
        assert archive.name_template == ARCHIVE_NAME_TEMPLATE

    def test_every_archive_resolves_to_one_build(self, dists):
        build_ids = [b.id for b in generate_builds(dists)]
        for archive in generate_archives(dists):
            for ref in archive.builds:
                assert build_ids.count(ref) == 1


# ═══════════════════════════════════════════════════════════════════
#  Docker images
# ═══════════════════════════════════════════════════════════════════


class TestBuildFlagTemplates:
    def test_exact_order(self):
        assert build_flag_templates("amd64") == (
            "--pull",
            "--platform=linux/amd64",
            "--label=org.opencontainers.image.created={{.Date}}",
            "--label=org.opencontainers.image.name={{.ProjectName}}",
            "--label=org.opencontainers.image.revision={{.FullCommit}}",
            "--label=org.opencontainers.image.version={{.Version}}",
            "--label=org.opencontainers.image.source={{.GitURL}}",
        )

    def test_platform_keeps_variant(self):
        assert build_flag_templates("arm/v7")[1] == "--platform=linux/arm/v7"


class TestGenerateDockerImage:
    def test_reference_image(self):
        image = generate_docker_image(["otel"], "otelcol", "amd64")
        assert image.image_templates == (
            "otel/opentelemetry-collector:{{ .Version }}-amd64",
            "otel/opentelemetry-collector:latest-amd64",
        )
        assert image.dockerfile == "distributions/otelcol/Dockerfile"
        assert image.use == "buildx"
        assert image.extra_files == ("configs/otelcol.yaml",)
        assert image.goos == "linux"
        assert image.goarch == "amd64"
        assert image.goarm is None

    def test_prefixes_in_order(self):
        """Each prefix contributes its version tag, then its latest tag."""
        image = generate_docker_image(["otel", "custom"], "otelcol", "amd64")
        assert image.image_templates == (
            "otel/opentelemetry-collector:{{ .Version }}-amd64",
            "otel/opentelemetry-collector:latest-amd64",
            "custom/opentelemetry-collector:{{ .Version }}-amd64",
            "custom/opentelemetry-collector:latest-amd64",
        )

    def test_no_prefixes_means_no_tags(self):
        image = generate_docker_image([], "otelcol", "amd64")
        assert image.image_templates == ()
        assert image.dockerfile == "distributions/otelcol/Dockerfile"

    def test_arm_variant(self):
        """The ARM variant comes from the architecture itself."""
        image = generate_docker_image(["otel"], "otelcol", "arm/v7")
        assert image.image_templates[1] == "otel/opentelemetry-collector:latest-armv7"
        assert image.goarch == "arm"
        assert image.goarm == "7"
        assert "--platform=linux/arm/v7" in image.build_flag_templates


class TestGenerateDockerImages:
    def test_one_per_distribution_by_default(self, dists):
        images = generate_docker_images(["otel"], dists)
        assert len(images) == 2
        assert images[0].extra_files == ("configs/otelcol.yaml",)
        assert images[1].extra_files == ("configs/otelcol-contrib.yaml",)

    def test_label_order_for_every_image(self, dists, multiarch_policy):
        for image in generate_docker_images(["otel"], dists, multiarch_policy):
            flags = image.build_flag_templates
            assert flags[0] == "--pull"
            assert flags[1].startswith("--platform=")
            keys = [f.split("image.")[1].split("=")[0] for f in flags[2:]]
            assert keys == ["created", "name", "revision", "version", "source"]

    def test_distribution_major_arch_minor(self, dists, multiarch_policy):
        images = generate_docker_images(["otel"], dists, multiarch_policy)
        assert len(images) == 6
        assert [(i.dockerfile.split("/")[1], i.goarch, i.goarm) for i in images] == [
            ("otelcol", "amd64", None),
            ("otelcol", "arm64", None),
            ("otelcol", "arm", "7"),
            ("otelcol-contrib", "amd64", None),
            ("otelcol-contrib", "arm64", None),
            ("otelcol-contrib", "arm", "7"),
        ]


# ═══════════════════════════════════════════════════════════════════
#  Docker manifests
# ═══════════════════════════════════════════════════════════════════


class TestGenerateDockerManifest:
    def test_version_manifest(self):
        manifest = generate_docker_manifest("otel", "{{ .Version }}", "otelcol")
        assert manifest.name_template == "otel/opentelemetry-collector:{{ .Version }}"
        assert manifest.image_templates == (
            "otel/opentelemetry-collector:{{ .Version }}-amd64",
        )

    def test_one_image_per_arch(self, multiarch_policy):
        manifest = generate_docker_manifest("otel", "latest", "otelcol", multiarch_policy)
        assert manifest.image_templates == (
            "otel/opentelemetry-collector:latest-amd64",
            "otel/opentelemetry-collector:latest-arm64",
            "otel/opentelemetry-collector:latest-armv7",
        )


class TestGenerateDockerManifests:
    def test_count(self, dists):
        prefixes = ["otel", "ghcr.io/acme", "quay.io/acme"]
        manifests = generate_docker_manifests(prefixes, dists)
        assert len(manifests) == len(dists) * len(prefixes) * 2

    def test_order(self, dists):
        manifests = generate_docker_manifests(["otel", "custom"], dists)
        assert [m.name_template for m in manifests] == [
            "otel/opentelemetry-collector:{{ .Version }}",
            "otel/opentelemetry-collector:latest",
            "custom/opentelemetry-collector:{{ .Version }}",
            "custom/opentelemetry-collector:latest",
            "otel/opentelemetry-collector-contrib:{{ .Version }}",
            "otel/opentelemetry-collector-contrib:latest",
            "custom/opentelemetry-collector-contrib:{{ .Version }}",
            "custom/opentelemetry-collector-contrib:latest",
        ]

    def test_no_prefixes(self, dists):
        assert generate_docker_manifests([], dists) == []

    def test_manifests_reference_generated_images(self, dists, multiarch_policy):
        prefixes = ["otel", "custom"]
        images = {
            t
            for i in generate_docker_images(prefixes, dists, multiarch_policy)
            for t in i.image_templates
        }
        for manifest in generate_docker_manifests(prefixes, dists, multiarch_policy):
            assert set(manifest.image_templates) <= images
