"""
Pulumi provisioning for the Notes service on Google Cloud.
"""

from .exposure import ExposureKind, ExposurePolicy, exposure_policy
from .programs import build_program, deploy_program, stack_program

__all__ = [
    "ExposureKind",
    "ExposurePolicy",
    "exposure_policy",
    "build_program",
    "deploy_program",
    "stack_program",
]
