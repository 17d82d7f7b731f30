"""Pulumi entry point: Complete Notes stack: database, image, service and seed job."""

from notes_service.infra import stack_program

stack_program()
