"""
Reporters
=========

CLIReporter
    Rich terminal summary of a cleanup run.
"""

from ec2cleanup.reporters.cli_reporter import CLIReporter

__all__ = ["CLIReporter"]
