import functools
from unittest.mock import AsyncMock

import click.testing
import pytest

from dokube.cli import main


@pytest.fixture()
def runner():
    runner = click.testing.CliRunner()
    return runner


@pytest.fixture()
def invoke(runner):
    return functools.partial(runner.invoke, main)


@pytest.fixture()
def token_env(monkeypatch):
    monkeypatch.setenv('DIGITALOCEAN_ACCESS_TOKEN', 'env-token')
    monkeypatch.delenv('DIGITALOCEAN_API_URL', raising=False)


@pytest.fixture()
def patch_op(mocker):
    """ Replace an operation with a mock, as used via its module by the commands. """
    def patch_op_fn(name: str, **kwargs):
        return mocker.patch(f'dokube._cogs.clients.{name}', new_callable=AsyncMock, **kwargs)
    return patch_op_fn
