"""CLI package bootstrap.

Defines root group (`cli`) in helpers and imports submodules so their
decorators register commands. Keep this file minimal to avoid circular
imports and duplication.
"""
from phc.cli.helpers import cli  # root group
from phc.cli import auth_cmds  # noqa: F401
from phc.cli import config_cmds  # noqa: F401
from phc.cli import curate_cmds  # noqa: F401

__all__ = ["cli"]
