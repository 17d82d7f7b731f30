"""
Google Cloud API enablement.

Every module that needs an API declares its own ``projects.Service`` and puts
it in ``depends_on``. APIs are left enabled when the stack is destroyed.
"""

from __future__ import annotations

from typing import List, Optional

import pulumi
import pulumi_gcp as gcp


def enable_api(
    resource_name: str,
    service: str,
    project: pulumi.Input[str],
    provider: Optional[gcp.Provider] = None,
) -> gcp.projects.Service:
    return gcp.projects.Service(
        resource_name,
        project=project,
        service=service,
        disable_on_destroy=False,
        opts=pulumi.ResourceOptions(provider=provider),
    )


def enable_compute_engine_api(
    project: pulumi.Input[str], provider: Optional[gcp.Provider] = None
) -> gcp.projects.Service:
    """Compute Engine backs the regional networking Artifact Registry relies on."""
    return enable_api("enable-compute-engine-api", "compute.googleapis.com", project, provider)


def enable_resource_manager_api(
    project: pulumi.Input[str], provider: Optional[gcp.Provider] = None
) -> gcp.projects.Service:
    """Needed for project-level IAM bindings."""
    return enable_api(
        "enable-cloudresourcemanager-api", "cloudresourcemanager.googleapis.com", project, provider
    )


def enable_runtime_apis(
    base_name: str, project: pulumi.Input[str], provider: Optional[gcp.Provider] = None
) -> List[gcp.projects.Service]:
    """Cloud Run and IAM, shared by the service and the seed job."""
    return [
        enable_api(f"{base_name}-enable-run", "run.googleapis.com", project, provider),
        enable_api(f"{base_name}-enable-iam", "iam.googleapis.com", project, provider),
    ]
