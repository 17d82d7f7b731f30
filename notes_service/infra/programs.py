"""
Pulumi programs for the Notes stack.

Each function is the body of one Pulumi project under ``environments/``:

- ``build_program``  registry + image, run by the build stage
- ``deploy_program`` database + service + seed job, fed the image through
  ``IMAGE_NAME``/``IMAGE_DIGEST``
- ``stack_program``  everything in one stack

Resources are declared in dependency order: the database and the image must
exist before the Cloud Run layer references them. Creation, retries and
state are the Pulumi engine's business.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pulumi

from .apis import enable_compute_engine_api, enable_resource_manager_api, enable_runtime_apis
from .artifact_registry import build_and_push_image, create_repository
from .cloud_run import create_seed_job, deploy_service
from .cloud_sql import DEFAULT_TIER, PostgresDatabase, create_locked_down_postgres
from .config import (
    CONFIG_NAMESPACE,
    ImageRef,
    StackConfig,
    create_provider,
    image_from_environ,
    load_stack_config,
)

# Docker build context: repository root, two levels above each program dir
APP_CONTEXT = Path("..") / ".."


@dataclass
class Names:
    app: str = "notes"
    sql: str = "notes-sql"
    repository: str = "notes-repo"
    image: str = "notes-app"
    db_name: str = "notes"
    db_user: str = "user"
    tier: str = DEFAULT_TIER


def load_names() -> Names:
    config = pulumi.Config(CONFIG_NAMESPACE)
    defaults = Names()
    return Names(
        db_name=config.get("dbName") or defaults.db_name,
        db_user=config.get("dbUser") or defaults.db_user,
        tier=config.get("dbTier") or defaults.tier,
    )


def export_stack_config(stack: StackConfig) -> None:
    pulumi.export("env", stack.env.value)
    pulumi.export("project", stack.project)
    pulumi.export("region", stack.region)
    pulumi.export("zone", stack.zone)


def _provision_image(stack: StackConfig, names: Names, provider) -> ImageRef:
    compute_engine_api = enable_compute_engine_api(stack.project, provider)
    resource_manager_api = enable_resource_manager_api(stack.project, provider)

    repository = create_repository(
        names.repository,
        stack.project,
        stack.region,
        provider,
        depends_on=[compute_engine_api, resource_manager_api],
    )

    return build_and_push_image(
        names.image,
        str(APP_CONTEXT.resolve()),
        stack.project,
        stack.region,
        repository.repository_id,
    )


def _provision_database(stack: StackConfig, names: Names, provider) -> PostgresDatabase:
    return create_locked_down_postgres(
        names.sql,
        stack.project,
        stack.region,
        db_name=names.db_name,
        db_user=names.db_user,
        db_password=stack.db_password,
        tier=names.tier,
        provider=provider,
    )


def _provision_compute(
    stack: StackConfig, names: Names, image: ImageRef, postgres: PostgresDatabase, provider
) -> None:
    runtime_apis = enable_runtime_apis(names.app, stack.project, provider)

    service = deploy_service(
        names.app,
        image,
        stack.env,
        stack.project,
        stack.region,
        postgres.database_url,
        postgres.connection_name,
        provider,
        depends_on=runtime_apis,
        scanner_account_id=stack.scanner_account_id,
    )

    seed_job = create_seed_job(
        names.app,
        image,
        stack.env,
        stack.project,
        stack.region,
        postgres.database_url,
        postgres.connection_name,
        provider,
        depends_on=runtime_apis,
    )

    pulumi.export("cloudRunUrl", service.url)
    pulumi.export("databaseUrl", postgres.database_url)
    pulumi.export("seedJobName", seed_job.name)


def build_program() -> None:
    stack = load_stack_config(require_db_password=False)
    provider = create_provider(stack)

    image = _provision_image(stack, Names(), provider)

    export_stack_config(stack)
    pulumi.export("imageName", image.image_name)
    pulumi.export("repoDigest", image.repo_digest)


def deploy_program() -> None:
    # Fail before anything is declared when the build stage left no image
    image = image_from_environ()
    stack = load_stack_config()
    provider = create_provider(stack)

    names = load_names()

    pulumi.log.info(f"Deploying image {image.image_name} to {stack.env.value}")
    postgres = _provision_database(stack, names, provider)
    _provision_compute(stack, names, image, postgres, provider)

    export_stack_config(stack)


def stack_program() -> None:
    stack = load_stack_config()
    provider = create_provider(stack)
    names = load_names()

    postgres = _provision_database(stack, names, provider)
    image = _provision_image(stack, names, provider)
    _provision_compute(stack, names, image, postgres, provider)

    export_stack_config(stack)
    pulumi.export("imageName", image.image_name)
