"""
Shared pytest fixtures for the metalcloud-cli test suite.

Commands run against a Mock client (spec=MetalCloudClient) and scripted
operator input, so no network or terminal is needed.

Usage in tests:
    def test_something(client, make_ctx):
        client.subnet_pool_get.return_value = SubnetPool(subnet_pool_id=100)
        ctx = make_ctx(answers=["yes"])
        # ... run a command with ctx
"""

import io
from unittest.mock import Mock

import pytest

from metalcloud_cli.client import MetalCloudClient
from metalcloud_cli.commands import CommandContext, build_registry
from metalcloud_cli.core import ScriptedIO
from metalcloud_cli.presentation.symbols import ASCII


@pytest.fixture
def client():
    """
    Mock management API client.

    Only methods of MetalCloudClient exist on it; set return values
    per test and assert on calls afterwards.
    """
    return Mock(spec=MetalCloudClient)


@pytest.fixture
def make_ctx(client):
    """
    Build a CommandContext around the mock client.

    Example:
        ctx = make_ctx(answers=["no"], stdin_text="{...}")
        assert ctx.io.prompts == []
    """
    def _make(answers=(), secrets=(), stdin_text="", width=None):
        return CommandContext(
            client=client,
            io=ScriptedIO(answers=answers, secrets=secrets),
            stdin=io.StringIO(stdin_text),
            width=width,
            symbols=ASCII,
        )
    return _make


@pytest.fixture
def registry():
    """The process command registry."""
    return build_registry()
