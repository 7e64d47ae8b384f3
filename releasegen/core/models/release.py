"""
Release document model — what gets handed to the release engine.

One ``ProjectDocument`` per generation run. Every model is frozen and
every sequence is a tuple, so a document cannot drift after it has been
built. Field names follow the release engine's YAML keys, and field
order is the order they are serialized in.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class BuildSpec(_Frozen):
    """A compiled-binary build for one distribution.

    Attributes:
        id:      Distribution id; archives reference the build by it.
        dir:     Directory the build runs in.
        binary:  Output binary name.
        env:     Compilation environment.
        flags:   Compiler flags.
        ldflags: Linker flags.
        goos:    Target operating systems.
        goarch:  Target architectures.
        goarm:   ARM variants (only used for ARM architectures).
    """

    id: str
    dir: str
    binary: str
    env: tuple[str, ...] = ()
    flags: tuple[str, ...] = ()
    ldflags: tuple[str, ...] = ()
    goos: tuple[str, ...] = ()
    goarch: tuple[str, ...] = ()
    goarm: tuple[str, ...] = ()


class ArchiveSpec(_Frozen):
    """A tarball packaging the binaries of one build."""

    id: str
    name_template: str
    builds: tuple[str, ...]


class DockerImageSpec(_Frozen):
    """A single-architecture container image for one distribution."""

    image_templates: tuple[str, ...]
    dockerfile: str
    use: str = "buildx"
    build_flag_templates: tuple[str, ...] = ()
    extra_files: tuple[str, ...] = ()
    goos: str = "linux"
    goarch: str = "amd64"
    goarm: str | None = None


class DockerManifestSpec(_Frozen):
    """A multi-architecture manifest aggregating per-arch images."""

    name_template: str
    image_templates: tuple[str, ...]


class ChecksumSpec(_Frozen):
    name_template: str


class ProjectDocument(_Frozen):
    """Root of the generated release configuration.

    Cross-references are checked on construction: each archive must
    point at exactly one build, no image tag may be produced twice, and
    each manifest may only aggregate images some docker entry produces.
    """

    project_name: str
    checksum: ChecksumSpec
    builds: tuple[BuildSpec, ...] = ()
    archives: tuple[ArchiveSpec, ...] = ()
    dockers: tuple[DockerImageSpec, ...] = ()
    docker_manifests: tuple[DockerManifestSpec, ...] = ()

    @model_validator(mode="after")
    def _check_links(self) -> ProjectDocument:
        build_ids = [b.id for b in self.builds]
        for archive in self.archives:
            for ref in archive.builds:
                count = build_ids.count(ref)
                if count != 1:
                    raise ValueError(
                        f"Archive '{archive.id}' references build '{ref}', "
                        f"which matches {count} builds (expected exactly 1)"
                    )

        tags = [t for d in self.dockers for t in d.image_templates]
        clashes = sorted({t for t in tags if tags.count(t) > 1})
        if clashes:
            raise ValueError(f"Image tags produced more than once: {', '.join(clashes)}")

        images = set(tags)
        for manifest in self.docker_manifests:
            missing = [t for t in manifest.image_templates if t not in images]
            if missing:
                raise ValueError(
                    f"Manifest '{manifest.name_template}' references unknown "
                    f"images: {', '.join(missing)}"
                )
        return self

    def to_dict(self) -> dict:
        """Serializable mapping in field order, with unset values dropped."""
        return self.model_dump(mode="json", exclude_none=True)
