"""
``uses:`` reference parsing.

A ``uses:`` string names a reusable unit in one of three forms:

    ./.github/actions/setup          → LocalUses
    actions/checkout@v4              → RepositoryUses
    owner/repo/path/to/action@ref    → RepositoryUses (with subpath)
    docker://ghcr.io/foo/alpine:3.8  → DockerUses

Parsing is a single pass with a fixed dispatch order (first match wins):
``./`` prefix, then ``docker://`` prefix, then repository.

Known ambiguity: the repository ref is whatever follows the LAST ``@``.
Refs are assumed not to contain ``@``; paths that do will be mis-split.
This is deliberate best-effort behavior, matching how the Actions runner
treats the same strings in practice.
"""

from dataclasses import dataclass

from .exceptions import UsesError

LOCAL_PREFIX = "./"
DOCKER_PREFIX = "docker://"


@dataclass(frozen=True)
class LocalUses:
    """
    A same-repository reference such as ``./.github/actions/setup``.

    Attributes:
        path: The reference verbatim, including the leading ``./``. Any
            ``@`` is part of the path, not a ref separator.
    """

    path: str

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class RepositoryUses:
    """
    A reference to an action or reusable workflow in another repository.

    Attributes:
        owner: Repository owner (user or organization)
        repo: Repository name
        subpath: Path inside the repository, kept as one opaque string
        ref: Git ref after the last ``@`` (tag, branch or commit SHA)
    """

    owner: str
    repo: str
    subpath: str | None = None
    ref: str | None = None

    @property
    def slug(self) -> str:
        """``owner/repo`` without subpath or ref."""
        return f"{self.owner}/{self.repo}"

    @property
    def is_pinned(self) -> bool:
        return self.ref is not None

    def __str__(self) -> str:
        text = self.slug
        if self.subpath is not None:
            text += f"/{self.subpath}"
        if self.ref is not None:
            text += f"@{self.ref}"
        return text


@dataclass(frozen=True)
class DockerUses:
    """
    A container image reference, written ``docker://[registry/]image[:tag|@digest]``.

    Attributes:
        registry: Registry host, only when the first path segment looks like one
        image: Image name, including any namespace segments
        tag: Image tag (never set together with digest)
        digest: Content digest, e.g. ``sha256:...``
    """

    image: str
    registry: str | None = None
    tag: str | None = None
    digest: str | None = None

    def __str__(self) -> str:
        text = self.image
        if self.registry is not None:
            text = f"{self.registry}/{text}"
        if self.digest is not None:
            text += f"@{self.digest}"
        elif self.tag is not None:
            text += f":{self.tag}"
        return f"{DOCKER_PREFIX}{text}"


Uses = LocalUses | RepositoryUses | DockerUses


def _looks_like_registry(segment: str) -> bool:
    # Same heuristic as the Docker CLI: hosts have a dot or a port, or are localhost.
    return segment == "localhost" or "." in segment or ":" in segment


def parse_docker_uses(image_ref: str) -> DockerUses:
    """
    Parse the part of a docker reference that follows ``docker://``.

    Args:
        image_ref: ``[registry/]image[:tag]`` or ``[registry/]image@digest``

    Returns:
        DockerUses with empty tag/digest normalized to None

    Examples:
        >>> parse_docker_uses("alpine:3.8")
        DockerUses(image='alpine', registry=None, tag='3.8', digest=None)
        >>> parse_docker_uses("ghcr.io/foo/alpine")
        DockerUses(image='foo/alpine', registry='ghcr.io', tag=None, digest=None)
    """
    registry: str | None = None
    image = image_ref

    first, sep, rest = image_ref.partition("/")
    if sep and _looks_like_registry(first):
        registry, image = first, rest

    # A digest excludes a tag: image@digest, never image:tag@digest.
    if "@" in image:
        image, _, digest = image.partition("@")
        return DockerUses(image=image, registry=registry, digest=digest or None)

    image, _, tag = image.partition(":")
    return DockerUses(image=image, registry=registry, tag=tag or None)


def parse_repository_uses(uses: str) -> RepositoryUses:
    """
    Parse an ``owner/repo[/subpath][@ref]`` reference.

    Raises:
        UsesError: If there is no ``owner/repo`` slug
    """
    path, sep, ref = uses.rpartition("@")
    if not sep:
        path, ref = uses, ""

    components = path.split("/", 2)
    if len(components) < 2:
        raise UsesError(uses, "owner/repo slug too short")

    owner, repo = components[0], components[1]
    subpath = components[2] if len(components) == 3 else None
    return RepositoryUses(owner=owner, repo=repo, subpath=subpath or None, ref=ref or None)


def parse_uses(uses: str) -> Uses:
    """
    Parse a ``uses:`` string into a LocalUses, DockerUses or RepositoryUses.

    Args:
        uses: The reference exactly as written in the document

    Returns:
        The parsed reference

    Raises:
        UsesError: If a repository reference has no ``owner/repo`` slug

    Examples:
        >>> parse_uses("actions/checkout@v4")
        RepositoryUses(owner='actions', repo='checkout', subpath=None, ref='v4')
        >>> parse_uses("./.github/actions/x@weird")
        LocalUses(path='./.github/actions/x@weird')
    """
    if uses.startswith(LOCAL_PREFIX):
        return LocalUses(path=uses)
    if uses.startswith(DOCKER_PREFIX):
        return parse_docker_uses(uses[len(DOCKER_PREFIX) :])
    return parse_repository_uses(uses)


__all__ = [
    "Uses",
    "LocalUses",
    "RepositoryUses",
    "DockerUses",
    "parse_uses",
    "parse_docker_uses",
    "parse_repository_uses",
]
