"""
Account-wide operations, not bound to any specific cluster.
"""
from dokube._cogs.clients import api, auth, envelopes
from dokube._cogs.helpers import typedefs
from dokube._cogs.structs import clusters, pagination


@auth.authenticated
async def get_options(
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[clusters.Options, pagination.Response]:
    """
    Get the versions, regions, and node sizes available for the new clusters.
    """
    raw, response = await api.get(
        url=api.build_url('options'),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return envelopes.unwrap_one(clusters.Options.from_raw, raw, 'options', response=response), response


@auth.authenticated
async def add_registry(
        request: clusters.ClusterRegistryRequest,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> pagination.Response:
    """
    Integrate the account's container registry with the listed clusters.
    """
    _, response = await api.post(
        url=api.build_url('registry'),
        payload=request.as_raw(),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return response


@auth.authenticated
async def remove_registry(
        request: clusters.ClusterRegistryRequest,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> pagination.Response:
    _, response = await api.delete(
        url=api.build_url('registry'),
        payload=request.as_raw(),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return response
