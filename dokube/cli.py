import asyncio
import dataclasses
import datetime
import enum
import functools
import json
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import click
import yaml

from dokube._cogs.clients import auth, clusterlint, clusters, errors, nodepools, options, paging
from dokube._cogs.structs import credentials, pagination
from dokube._cogs.structs import clusters as cluster_structs
from dokube._kits import loggers

_T = TypeVar('_T')


class LogFormatParamType(click.Choice):

    def __init__(self) -> None:
        super().__init__(choices=[v.name.lower() for v in loggers.LogFormat])

    def convert(self, value: Any, param: Any, ctx: Any) -> loggers.LogFormat:
        name: str = super().convert(value, param, ctx)
        return loggers.LogFormat[name.upper()]


def logging_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """ A decorator to configure logging in all commands the same way."""
    @click.option('-v', '--verbose', is_flag=True)
    @click.option('-d', '--debug', is_flag=True)
    @click.option('-q', '--quiet', is_flag=True)
    @click.option('--log-format', type=LogFormatParamType(), default='full')
    @functools.wraps(fn)  # to preserve other opts/args
    def wrapper(verbose: bool, quiet: bool, debug: bool,
                log_format: loggers.LogFormat = loggers.LogFormat.FULL,
                *args: Any, **kwargs: Any) -> Any:
        loggers.configure(debug=debug, verbose=verbose, quiet=quiet, log_format=log_format)
        return fn(*args, **kwargs)

    return wrapper


def connection_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """ A decorator to build the connection info from the options or envvars."""
    @click.option('--token', type=str, envvar=credentials.TOKEN_ENVVAR)
    @click.option('--server', type=str, envvar=credentials.SERVER_ENVVAR)
    @click.option('--insecure', is_flag=True, default=None)
    @click.option('--ca-path', type=click.Path(exists=True, dir_okay=False))
    @click.option('-o', '--output', type=click.Choice(['yaml', 'json']), default='yaml')
    @functools.wraps(fn)  # to preserve other opts/args
    def wrapper(token: str | None, server: str | None, insecure: bool | None, ca_path: str | None,
                output: str, *args: Any, **kwargs: Any) -> Any:
        if not token:
            raise click.UsageError(f"No API token: use --token or ${credentials.TOKEN_ENVVAR}.")
        info = credentials.ConnectionInfo(
            server=server or credentials.DEFAULT_SERVER,
            token=token,
            ca_path=ca_path,
            insecure=insecure,
        )
        return fn(*args, info=info, output=output, **kwargs)

    return wrapper


def execute(info: credentials.ConnectionInfo, fn: Callable[[], Awaitable[_T]]) -> _T:
    """
    Run an operation in a fresh event loop, with the connection in the context.

    The API errors are reported as the CLI errors, without the stack traces.
    """
    async def main() -> _T:
        async with auth.connected(info):
            return await fn()

    try:
        return asyncio.run(main())
    except errors.APIError as e:
        raise click.ClickException(f"API error: {e}") from e
    except (errors.APIDecodeError, errors.APIRequestError, credentials.LoginError) as e:
        raise click.ClickException(str(e)) from e


def to_plain(obj: Any) -> Any:
    """ Convert the parsed entities back to plain JSON/YAML-serializable values. """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {field.name: to_plain(getattr(obj, field.name)) for field in dataclasses.fields(obj)}
    elif isinstance(obj, enum.Enum):
        return str(obj)
    elif isinstance(obj, datetime.datetime):
        return obj.isoformat()
    elif isinstance(obj, bytes):
        return obj.decode('utf-8', errors='replace')
    elif isinstance(obj, dict):
        return {str(key): to_plain(val) for key, val in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [to_plain(item) for item in obj]
    else:
        return obj


def render(obj: Any, output: str) -> None:
    data = to_plain(obj)
    if output == 'json':
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(yaml.safe_dump(data, sort_keys=False), nl=False)


@click.version_option(prog_name='dokube')
@click.group(name='dokube', context_settings=dict(
    auto_envvar_prefix='DOKUBE',
))
def main() -> None:
    pass


@main.command(name='clusters')
@logging_options
@connection_options
@click.option('--per-page', type=click.IntRange(min=1))
def list_clusters(info: credentials.ConnectionInfo, output: str, per_page: int | None) -> None:
    """ List all clusters of the account, page after page. """
    async def fn() -> list[cluster_structs.Cluster]:
        listing = pagination.ListOptions(per_page=per_page)
        return [cluster async for cluster in paging.iter_clusters(listing)]

    render(execute(info, fn), output)


@main.command(name='cluster')
@logging_options
@connection_options
@click.argument('cluster_id')
def get_cluster(info: credentials.ConnectionInfo, output: str, cluster_id: str) -> None:
    """ Show a single cluster. """
    async def fn() -> cluster_structs.Cluster:
        cluster, _ = await clusters.get_cluster(cluster_id)
        return cluster

    render(execute(info, fn), output)


@main.command(name='node-pools')
@logging_options
@connection_options
@click.argument('cluster_id')
def list_node_pools(info: credentials.ConnectionInfo, output: str, cluster_id: str) -> None:
    """ List all node pools of a cluster, page after page. """
    async def fn() -> list[Any]:
        return [pool async for pool in paging.iter_node_pools(cluster_id)]

    render(execute(info, fn), output)


@main.command(name='kubeconfig')
@logging_options
@connection_options
@click.option('--expiry-seconds', type=click.IntRange(min=0))
@click.argument('cluster_id')
def get_kubeconfig(
        info: credentials.ConnectionInfo,
        output: str,
        cluster_id: str,
        expiry_seconds: int | None,
) -> None:
    """ Print the cluster's kubeconfig as is (the output format is ignored). """
    async def fn() -> cluster_structs.ClusterConfig:
        config, _ = await clusters.get_kubeconfig(cluster_id, expiry_seconds=expiry_seconds)
        return config

    click.echo(execute(info, fn).kubeconfig_yaml, nl=False)


@main.command(name='options')
@logging_options
@connection_options
def get_options(info: credentials.ConnectionInfo, output: str) -> None:
    """ Show the versions, regions, and node sizes available for new clusters. """
    async def fn() -> cluster_structs.Options:
        result, _ = await options.get_options()
        return result

    render(execute(info, fn), output)


@main.command(name='upgrades')
@logging_options
@connection_options
@click.argument('cluster_id')
def get_upgrades(info: credentials.ConnectionInfo, output: str, cluster_id: str) -> None:
    """ Show the versions the cluster can be upgraded to. """
    async def fn() -> list[cluster_structs.Version]:
        versions, _ = await clusters.get_upgrades(cluster_id)
        return versions

    render(execute(info, fn), output)


@main.command(name='lint')
@logging_options
@connection_options
@click.option('--run-id', type=str, default='')
@click.argument('cluster_id')
def get_lint(info: credentials.ConnectionInfo, output: str, cluster_id: str, run_id: str) -> None:
    """ Show the clusterlint diagnostics of the specific or the latest run. """
    async def fn() -> list[cluster_structs.ClusterlintDiagnostic]:
        request = cluster_structs.GetClusterlintRequest(run_id=run_id)
        diagnostics, _ = await clusterlint.get_clusterlint_results(cluster_id, request)
        return diagnostics

    render(execute(info, fn), output)


@main.command(name='run-lint')
@logging_options
@connection_options
@click.option('--include-group', 'include_groups', multiple=True)
@click.option('--exclude-group', 'exclude_groups', multiple=True)
@click.option('--include-check', 'include_checks', multiple=True)
@click.option('--exclude-check', 'exclude_checks', multiple=True)
@click.argument('cluster_id')
def run_lint(
        info: credentials.ConnectionInfo,
        output: str,
        cluster_id: str,
        include_groups: tuple[str, ...],
        exclude_groups: tuple[str, ...],
        include_checks: tuple[str, ...],
        exclude_checks: tuple[str, ...],
) -> None:
    """ Start a clusterlint run and print its id (see the `lint` command). """
    async def fn() -> str:
        request = cluster_structs.RunClusterlintRequest(
            include_groups=include_groups,
            exclude_groups=exclude_groups,
            include_checks=include_checks,
            exclude_checks=exclude_checks,
        )
        run_id, _ = await clusterlint.run_clusterlint(cluster_id, request)
        return run_id

    render({'run_id': execute(info, fn)}, output)
