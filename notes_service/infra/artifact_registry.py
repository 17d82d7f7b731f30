"""
Artifact Registry repository and the application image pushed into it.
"""

from __future__ import annotations

from typing import Optional, Sequence

import pulumi
import pulumi_docker as docker
import pulumi_gcp as gcp

from .apis import enable_api
from .config import ImageRef

# "sha256:" followed by 64 hex characters
DIGEST_SUFFIX_LENGTH = 71
BUILD_PLATFORM = "linux/amd64"


def image_repository_url(region: str, project: str, repository: str, name: str) -> str:
    return f"{region}-docker.pkg.dev/{project}/{repository}/{name}"


def digest_suffix(repo_digest: str) -> str:
    """The trailing ``sha256:<hex>`` part of a repo digest.

    Injected into the runtime environment so a new revision is rolled out
    whenever the image content changes, even if its tag does not.
    """
    return repo_digest[-DIGEST_SUFFIX_LENGTH:]


def create_repository(
    name: str,
    project: str,
    region: str,
    provider: Optional[gcp.Provider] = None,
    depends_on: Sequence[pulumi.Resource] = (),
) -> gcp.artifactregistry.Repository:
    """Docker-format repository; ``name`` doubles as the repository id.

    ``depends_on`` lets callers order it after other API enablements such as
    Compute Engine.
    """
    artifact_registry_api = enable_api(
        f"{name}-enable-artifactregistry-api",
        "artifactregistry.googleapis.com",
        project,
        provider,
    )

    return gcp.artifactregistry.Repository(
        name,
        project=project,
        repository_id=name,
        format="DOCKER",
        location=region,
        description="Docker image repo for Cloud Run apps",
        opts=pulumi.ResourceOptions(
            provider=provider,
            depends_on=[artifact_registry_api, *depends_on],
        ),
    )


def build_and_push_image(
    name: str,
    context: str,
    project: str,
    region: str,
    repository: pulumi.Input[str],
    dockerfile: Optional[str] = None,
) -> ImageRef:
    """Build ``context`` for Cloud Run's platform and push it to ``repository``."""
    image_name = pulumi.Output.from_input(repository).apply(
        lambda repo: image_repository_url(region, project, repo, name)
    )

    image = docker.Image(
        name,
        build=docker.DockerBuildArgs(
            context=context,
            dockerfile=dockerfile,
            platform=BUILD_PLATFORM,
        ),
        image_name=image_name,
    )

    return ImageRef(image_name=image.image_name, repo_digest=image.repo_digest)
