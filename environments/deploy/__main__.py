"""Pulumi entry point: Cloud SQL, Cloud Run service and seed job for a pre-built image."""

from notes_service.infra import deploy_program

deploy_program()
