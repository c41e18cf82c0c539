"""
Reporters
=========

Terminal output for purge runs.

See Also
--------
rich : Python library for rich text and formatting.
"""

from azure_purge.reporters.cli_reporter import CLIReporter

__all__ = ["CLIReporter"]
