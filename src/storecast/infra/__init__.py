"""
Infrastructure layer - logging, settings, and error types.

This layer contains the technical concerns shared by the scheduler,
the artifact writer and the CLI.
"""
