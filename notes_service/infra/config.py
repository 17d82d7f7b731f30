"""
Stack configuration and authentication for the provisioning programs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import pulumi
import pulumi_gcp as gcp

from ..config import Environment
from ..errors import ConfigurationError
from .exposure import DEFAULT_SCANNER_ACCOUNT_ID

CONFIG_NAMESPACE = "notes"
DEFAULT_ZONE = "europe-west1-b"

# Pulumi runs each program from its own directory under environments/
DEFAULT_CREDENTIALS_PATH = Path("..") / "credentials" / "service-account-key.json"

IMAGE_NAME_VAR = "IMAGE_NAME"
IMAGE_DIGEST_VAR = "IMAGE_DIGEST"


@dataclass
class StackConfig:
    """Values read from ``Pulumi.<stack>.yaml``."""

    env: Environment
    project: str
    region: str
    zone: str = DEFAULT_ZONE
    credentials_path: Path = DEFAULT_CREDENTIALS_PATH
    scanner_account_id: str = DEFAULT_SCANNER_ACCOUNT_ID
    db_password: Optional[pulumi.Output[str]] = None


@dataclass
class ImageRef:
    """A pushed container image: its name and content digest."""

    image_name: pulumi.Input[str]
    repo_digest: pulumi.Input[str]


def load_stack_config(require_db_password: bool = True) -> StackConfig:
    """Read the ``notes:*`` and ``gcp:*`` stack configuration."""
    config = pulumi.Config(CONFIG_NAMESPACE)
    gcp_config = pulumi.Config("gcp")

    credentials = config.get("credentialsPath")

    return StackConfig(
        env=Environment.parse(config.require("env")),
        project=gcp_config.require("project"),
        region=gcp_config.require("region"),
        zone=gcp_config.get("zone") or DEFAULT_ZONE,
        credentials_path=Path(credentials) if credentials else DEFAULT_CREDENTIALS_PATH,
        scanner_account_id=config.get("scannerAccountId") or DEFAULT_SCANNER_ACCOUNT_ID,
        db_password=config.require_secret("dbPassword") if require_db_password else None,
    )


def image_from_environ(environ: Optional[Mapping[str, str]] = None) -> ImageRef:
    """Read the image produced by the build stage from the environment.

    Raises ``ConfigurationError`` when either variable is missing so that the
    program stops before any resource is declared.
    """
    environ = os.environ if environ is None else environ
    image_name = environ.get(IMAGE_NAME_VAR)
    image_digest = environ.get(IMAGE_DIGEST_VAR)

    if not image_name or not image_digest:
        raise ConfigurationError(
            f"Missing required environment variables: {IMAGE_NAME_VAR} and/or "
            f"{IMAGE_DIGEST_VAR}. Ensure they are exported from the build stage "
            "or provided in CI/CD."
        )

    return ImageRef(image_name=image_name, repo_digest=image_digest)


def read_credentials(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigurationError(
            f"Service account key not found at {path}; set notes:credentialsPath "
            "or place the key file there."
        ) from None


def create_provider(stack: StackConfig) -> gcp.Provider:
    """GCP provider authenticated with the local service account key."""
    return gcp.Provider(
        "gcp-provider",
        credentials=read_credentials(stack.credentials_path),
        project=stack.project,
        region=stack.region,
        zone=stack.zone,
    )
