"""
Cloud SQL for PostgreSQL, reachable only through the Cloud SQL connector.

The instance gets a public IPv4 address so the connector works without a
private VPC, but its authorized-networks list is always empty: no IP range
may connect over TCP. Clients reach it through the unix socket mounted at
``/cloudsql/<connection name>``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import pulumi
import pulumi_gcp as gcp

from .apis import enable_api

DATABASE_VERSION = "POSTGRES_15"
DEFAULT_TIER = "db-f1-micro"
SOCKET_DIR = "/cloudsql"


@dataclass
class PostgresDatabase:
    instance: gcp.sql.DatabaseInstance
    database: gcp.sql.Database
    user: gcp.sql.User
    connection_name: pulumi.Output[str]
    database_url: pulumi.Output[str]


def build_database_url(user: str, password: str, db_name: str, connection_name: str) -> str:
    """Connection string addressing the database through its unix socket."""
    return (
        f"postgresql://{quote(user, safe='')}:{quote(password, safe='')}@localhost/{db_name}"
        f"?host={SOCKET_DIR}/{connection_name}"
    )


def instance_settings(tier: Optional[str] = None) -> gcp.sql.DatabaseInstanceSettingsArgs:
    return gcp.sql.DatabaseInstanceSettingsArgs(
        tier=tier or DEFAULT_TIER,
        availability_type="ZONAL",
        ip_configuration=gcp.sql.DatabaseInstanceSettingsIpConfigurationArgs(
            ipv4_enabled=True,
            authorized_networks=[],
        ),
        backup_configuration=gcp.sql.DatabaseInstanceSettingsBackupConfigurationArgs(
            enabled=True,
        ),
        deletion_protection_enabled=False,
    )


def create_locked_down_postgres(
    base_name: str,
    project: str,
    region: str,
    db_name: str,
    db_user: str,
    db_password: pulumi.Input[str],
    tier: Optional[str] = None,
    provider: Optional[gcp.Provider] = None,
) -> PostgresDatabase:
    """Declare the instance, its logical database and the application user.

    ``db_password`` comes from the caller's secret source (normally the
    ``notes:dbPassword`` stack secret); the resulting ``database_url`` is a
    secret output.
    """
    sql_admin_api = enable_api(f"{base_name}-enable-sqladmin-api", "sqladmin.googleapis.com", project, provider)

    instance = gcp.sql.DatabaseInstance(
        f"{base_name}-instance",
        project=project,
        database_version=DATABASE_VERSION,
        region=region,
        settings=instance_settings(tier),
        deletion_protection=False,
        opts=pulumi.ResourceOptions(provider=provider, depends_on=[sql_admin_api]),
    )

    database = gcp.sql.Database(
        f"{base_name}-db",
        project=project,
        instance=instance.name,
        name=db_name,
        opts=pulumi.ResourceOptions(provider=provider),
    )

    password = pulumi.Output.secret(db_password)
    user = gcp.sql.User(
        f"{base_name}-user",
        project=project,
        instance=instance.name,
        name=db_user,
        password=password,
        opts=pulumi.ResourceOptions(provider=provider),
    )

    # "<project>:<region>:<instance>"
    connection_name = instance.connection_name
    database_url = pulumi.Output.all(password, connection_name).apply(
        lambda args: build_database_url(db_user, args[0], db_name, args[1])
    )

    return PostgresDatabase(
        instance=instance,
        database=database,
        user=user,
        connection_name=connection_name,
        database_url=database_url,
    )
