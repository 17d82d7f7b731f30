"""
Cloud Run service and seed job wired to Cloud SQL through a unix socket.

Both run under their own service account holding exactly two project roles
(Cloud SQL client and log writer). Each declares ``depends_on`` on those
bindings so no revision ever starts with an under-privileged identity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import pulumi
import pulumi_gcp as gcp

from ..config import Environment
from .artifact_registry import digest_suffix
from .config import ImageRef
from .exposure import (
    DEFAULT_SCANNER_ACCOUNT_ID,
    ExposureKind,
    ExposurePolicy,
    exposure_policy,
)

RUNTIME_ROLES = ("roles/cloudsql.client", "roles/logging.logWriter")
# Pulumi resource name suffix per role
ROLE_SUFFIXES = {
    "roles/cloudsql.client": "cloudsql-client",
    "roles/logging.logWriter": "log-writer",
}

SOCKET_VOLUME = "cloudsql"
SOCKET_MOUNT_PATH = "/cloudsql"

SERVICE_SCALING = (0, 6)
SERVICE_CONCURRENCY = 15
RESOURCE_LIMITS = {"cpu": "1", "memory": "512Mi"}

SEED_COMMAND = ["notes"]
SEED_ARGS = ["seed"]


@dataclass
class RuntimeIdentity:
    """A dedicated service account and its project role bindings."""

    account: gcp.serviceaccount.Account
    grants: List[gcp.projects.IAMMember] = field(default_factory=list)

    @property
    def email(self) -> pulumi.Output[str]:
        return self.account.email


def create_runtime_identity(
    grant_prefix: str,
    account_id: str,
    display_name: str,
    project: str,
    provider: Optional[gcp.Provider] = None,
    depends_on: Sequence[pulumi.Resource] = (),
) -> RuntimeIdentity:
    account = gcp.serviceaccount.Account(
        account_id,
        project=project,
        account_id=account_id,
        display_name=display_name,
        opts=pulumi.ResourceOptions(provider=provider, depends_on=list(depends_on)),
    )

    member = account.email.apply(lambda email: f"serviceAccount:{email}")
    grants = [
        gcp.projects.IAMMember(
            f"{grant_prefix}-sa-{ROLE_SUFFIXES[role]}",
            project=project,
            role=role,
            member=member,
            opts=pulumi.ResourceOptions(provider=provider, depends_on=[account]),
        )
        for role in RUNTIME_ROLES
    ]
    return RuntimeIdentity(account=account, grants=grants)


@dataclass
class CloudRunService:
    service: gcp.cloudrunv2.Service
    identity: RuntimeIdentity
    policy: ExposurePolicy
    invoker: Optional[gcp.cloudrunv2.ServiceIamMember] = None

    @property
    def url(self) -> pulumi.Output[str]:
        return self.service.uri


@dataclass
class SeedJob:
    job: gcp.cloudrunv2.Job
    identity: RuntimeIdentity

    @property
    def name(self) -> pulumi.Output[str]:
        return self.job.name


def runtime_env(
    env: Environment,
    repo_digest: pulumi.Input[str],
    database_url: pulumi.Input[str],
) -> List[tuple]:
    """(name, value) pairs shared by the service and the job."""
    return [
        ("ENVIRONMENT", env.value),
        ("DIGEST", pulumi.Output.from_input(repo_digest).apply(digest_suffix)),
        ("DATABASE_URL", database_url),
    ]


def deploy_service(
    base_name: str,
    image: ImageRef,
    env: Environment,
    project: str,
    region: str,
    database_url: pulumi.Input[str],
    connection_name: pulumi.Input[str],
    provider: Optional[gcp.Provider] = None,
    depends_on: Sequence[pulumi.Resource] = (),
    scanner_account_id: Optional[str] = None,
) -> CloudRunService:
    """Declare the HTTP service and the invoker binding for ``env``."""
    identity = create_runtime_identity(
        base_name,
        f"{base_name}-sa-cloud-run",
        f"{base_name} Cloud Run Service Account",
        project,
        provider,
        depends_on,
    )

    min_instances, max_instances = SERVICE_SCALING
    service = gcp.cloudrunv2.Service(
        f"{base_name}-service",
        name=f"{base_name}-service",
        project=project,
        location=region,
        ingress="INGRESS_TRAFFIC_ALL",
        deletion_protection=False,
        template=gcp.cloudrunv2.ServiceTemplateArgs(
            service_account=identity.email,
            session_affinity=True,
            max_instance_request_concurrency=SERVICE_CONCURRENCY,
            scaling=gcp.cloudrunv2.ServiceTemplateScalingArgs(
                min_instance_count=min_instances,
                max_instance_count=max_instances,
            ),
            containers=[
                gcp.cloudrunv2.ServiceTemplateContainerArgs(
                    image=image.image_name,
                    envs=[
                        gcp.cloudrunv2.ServiceTemplateContainerEnvArgs(name=name, value=value)
                        for name, value in runtime_env(env, image.repo_digest, database_url)
                    ],
                    volume_mounts=[
                        gcp.cloudrunv2.ServiceTemplateContainerVolumeMountArgs(
                            name=SOCKET_VOLUME, mount_path=SOCKET_MOUNT_PATH
                        )
                    ],
                    resources=gcp.cloudrunv2.ServiceTemplateContainerResourcesArgs(
                        startup_cpu_boost=True,
                        cpu_idle=False,
                        limits=RESOURCE_LIMITS,
                    ),
                )
            ],
            volumes=[
                gcp.cloudrunv2.ServiceTemplateVolumeArgs(
                    name=SOCKET_VOLUME,
                    cloud_sql_instance=gcp.cloudrunv2.ServiceTemplateVolumeCloudSqlInstanceArgs(
                        instances=[connection_name],
                    ),
                )
            ],
        ),
        opts=pulumi.ResourceOptions(
            provider=provider,
            depends_on=[*depends_on, *identity.grants],
        ),
    )

    policy = exposure_policy(env, project, scanner_account_id or DEFAULT_SCANNER_ACCOUNT_ID)
    invoker = grant_invoker(base_name, service.name, policy, project, region, provider)

    return CloudRunService(service=service, identity=identity, policy=policy, invoker=invoker)


def grant_invoker(
    base_name: str,
    service_name: pulumi.Input[str],
    policy: ExposurePolicy,
    project: str,
    region: str,
    provider: Optional[gcp.Provider] = None,
) -> Optional[gcp.cloudrunv2.ServiceIamMember]:
    """Bind ``roles/run.invoker`` as ``policy`` dictates, or declare nothing."""
    if not policy.grants_invocation:
        pulumi.log.info(f"{base_name}: no invoker binding, service is private")
        return None

    suffix = "public-invoker" if policy.kind is ExposureKind.PUBLIC else "staging-dast-invoker"
    return gcp.cloudrunv2.ServiceIamMember(
        f"{base_name}-{suffix}",
        name=service_name,
        project=project,
        location=region,
        role=policy.role,
        member=policy.member,
        opts=pulumi.ResourceOptions(provider=provider),
    )


def create_seed_job(
    base_name: str,
    image: ImageRef,
    env: Environment,
    project: str,
    region: str,
    database_url: pulumi.Input[str],
    connection_name: pulumi.Input[str],
    provider: Optional[gcp.Provider] = None,
    depends_on: Sequence[pulumi.Resource] = (),
) -> SeedJob:
    """Declare the one-shot job running the seed routine against the database."""
    identity = create_runtime_identity(
        f"{base_name}-seed",
        f"{base_name}-sa-cloud-run-seed",
        f"{base_name} Cloud Run seed job service account",
        project,
        provider,
        depends_on,
    )

    job = gcp.cloudrunv2.Job(
        f"{base_name}-seed-job",
        name=f"{base_name}-seed-job",
        project=project,
        location=region,
        deletion_protection=False,
        template=gcp.cloudrunv2.JobTemplateArgs(
            template=gcp.cloudrunv2.JobTemplateTemplateArgs(
                service_account=identity.email,
                containers=[
                    gcp.cloudrunv2.JobTemplateTemplateContainerArgs(
                        image=image.image_name,
                        commands=SEED_COMMAND,
                        args=SEED_ARGS,
                        envs=[
                            gcp.cloudrunv2.JobTemplateTemplateContainerEnvArgs(name=name, value=value)
                            for name, value in runtime_env(env, image.repo_digest, database_url)
                        ],
                        volume_mounts=[
                            gcp.cloudrunv2.JobTemplateTemplateContainerVolumeMountArgs(
                                name=SOCKET_VOLUME, mount_path=SOCKET_MOUNT_PATH
                            )
                        ],
                        resources=gcp.cloudrunv2.JobTemplateTemplateContainerResourcesArgs(
                            limits=RESOURCE_LIMITS,
                        ),
                    )
                ],
                volumes=[
                    gcp.cloudrunv2.JobTemplateTemplateVolumeArgs(
                        name=SOCKET_VOLUME,
                        cloud_sql_instance=gcp.cloudrunv2.JobTemplateTemplateVolumeCloudSqlInstanceArgs(
                            instances=[connection_name],
                        ),
                    )
                ],
            ),
        ),
        opts=pulumi.ResourceOptions(
            provider=provider,
            depends_on=[*depends_on, *identity.grants],
        ),
    )

    return SeedJob(job=job, identity=identity)
