"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

CLI context for Tanuki.

Provides shared context object and decorators for CLI commands.
"""

import click

from tanuki.client import GitlabClient


class CLIContext:
    """Context object for CLI commands."""

    def __init__(self):
        self.config = None
        self.config_path = None
        self.verbose = False

    def make_client(self, **overrides) -> GitlabClient:
        """Build a client from the loaded configuration, with per-command overrides."""
        client_config = self.config.client
        changes = {k: v for k, v in overrides.items() if v is not None}
        if changes:
            client_config = client_config.replace(**changes)
        return GitlabClient(client_config)


pass_context = click.make_pass_decorator(CLIContext, ensure=True)
