"""
Clusterlint: the diagnostics of the workloads in the cluster for the best practices.

A run is started asynchronously on the server side. The results are fetched
later by the run's id, or for the latest run if the id is not specified.
"""
from dokube._cogs.clients import api, auth, envelopes
from dokube._cogs.helpers import typedefs
from dokube._cogs.structs import clusters, pagination


def _run_id(raw: object) -> str:
    if not isinstance(raw, dict) or not isinstance(raw.get('run_id'), str):
        raise TypeError(f"no run_id in {raw!r}")
    return raw['run_id']


@auth.authenticated
async def run_clusterlint(
        cluster_id: str,
        request: clusters.RunClusterlintRequest | None = None,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[str, pagination.Response]:
    request = request if request is not None else clusters.RunClusterlintRequest()
    raw, response = await api.post(
        url=api.build_url('clusters', cluster_id, 'clusterlint'),
        payload=request.as_raw(),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return envelopes.decode(_run_id, raw, response=response), response


@auth.authenticated
async def get_clusterlint_results(
        cluster_id: str,
        request: clusters.GetClusterlintRequest | None = None,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[list[clusters.ClusterlintDiagnostic], pagination.Response]:
    request = request if request is not None else clusters.GetClusterlintRequest()
    raw, response = await api.get(
        url=api.build_url('clusters', cluster_id, 'clusterlint', params=request.as_params()),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return envelopes.unwrap_many(clusters.ClusterlintDiagnostic.from_raw, raw, 'diagnostics', response=response), response
