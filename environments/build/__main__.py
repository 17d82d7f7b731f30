"""Pulumi entry point: Artifact Registry repository and application image."""

from notes_service.infra import build_program

build_program()
