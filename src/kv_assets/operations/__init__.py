"""
Operations package - glue between the CLI and the asset resolver.

Centralizes error mapping and output formatting so CLI commands stay thin.
"""
from .mappers import AssetNotFound, exit_code_for, run_and_exit

__all__ = ["AssetNotFound", "exit_code_for", "run_and_exit"]
