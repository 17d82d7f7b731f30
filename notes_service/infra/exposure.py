"""
Who may invoke the Cloud Run service, per deployment environment.

The mapping is a pure function so it can be checked without a provisioning
engine:

| environment | invoker                                   |
|-------------|-------------------------------------------|
| development | nobody (no IAM binding is declared)       |
| staging     | the DAST scanner service account only     |
| production  | ``allUsers``                              |
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..config import Environment

INVOKER_ROLE = "roles/run.invoker"
PUBLIC_MEMBER = "allUsers"
DEFAULT_SCANNER_ACCOUNT_ID = "gitlab-dast-sa"


class ExposureKind(str, Enum):
    PRIVATE = "private"
    SCANNER_ONLY = "scanner_only"
    PUBLIC = "public"


@dataclass(frozen=True)
class ExposurePolicy:
    """Declared intent for the invoker binding of a service."""

    kind: ExposureKind
    member: Optional[str] = None
    role: str = INVOKER_ROLE

    @property
    def grants_invocation(self) -> bool:
        return self.member is not None


def scanner_member(project: str, account_id: str = DEFAULT_SCANNER_ACCOUNT_ID) -> str:
    return f"serviceAccount:{account_id}@{project}.iam.gserviceaccount.com"


def exposure_policy(
    environment: Union[Environment, str],
    project: str,
    scanner_account_id: str = DEFAULT_SCANNER_ACCOUNT_ID,
) -> ExposurePolicy:
    """Map an environment to its invoker policy."""
    if not isinstance(environment, Environment):
        environment = Environment.parse(environment)

    if environment is Environment.DEVELOPMENT:
        # TODO: grant the developer IAM group once it exists in the project.
        return ExposurePolicy(kind=ExposureKind.PRIVATE)
    if environment is Environment.STAGING:
        return ExposurePolicy(
            kind=ExposureKind.SCANNER_ONLY,
            member=scanner_member(project, scanner_account_id),
        )
    return ExposurePolicy(kind=ExposureKind.PUBLIC, member=PUBLIC_MEMBER)
