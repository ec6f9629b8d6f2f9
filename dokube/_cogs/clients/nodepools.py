"""
Node-pool-level operations, and the deletion of individual nodes.
"""
import warnings

from dokube._cogs.clients import api, auth, envelopes
from dokube._cogs.helpers import typedefs
from dokube._cogs.structs import nodepools, pagination


@auth.authenticated
async def create_node_pool(
        cluster_id: str,
        request: nodepools.NodePoolCreateRequest,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[nodepools.NodePool, pagination.Response]:
    raw, response = await api.post(
        url=api.build_url('clusters', cluster_id, 'node_pools'),
        payload=request.as_raw(),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return envelopes.unwrap_one(nodepools.NodePool.from_raw, raw, 'node_pool', response=response), response


@auth.authenticated
async def get_node_pool(
        cluster_id: str,
        pool_id: str,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[nodepools.NodePool, pagination.Response]:
    raw, response = await api.get(
        url=api.build_url('clusters', cluster_id, 'node_pools', pool_id),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return envelopes.unwrap_one(nodepools.NodePool.from_raw, raw, 'node_pool', response=response), response


@auth.authenticated
async def get_node_pool_template(
        cluster_id: str,
        pool_name: str,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[nodepools.NodePoolTemplate, pagination.Response]:
    """
    Get the template of the pool's nodes, as used to scale the pool up from zero.

    Mind that the pool is identified by its name here, not by its ID.
    """
    raw, response = await api.get(
        url=api.build_url('clusters', cluster_id, 'node_pools_template', pool_name),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return envelopes.decode(nodepools.NodePoolTemplate.from_raw, raw, response=response), response


@auth.authenticated
async def list_node_pools(
        cluster_id: str,
        options: pagination.ListOptions | None = None,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[list[nodepools.NodePool], pagination.Response]:
    if context is None:
        raise RuntimeError("API instance is not injected by the decorator.")
    raw, response = await api.get(
        url=api.build_url('clusters', cluster_id, 'node_pools',
                          params=envelopes.list_params(options, context=context)),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    items = envelopes.unwrap_many(nodepools.NodePool.from_raw, raw, 'node_pools', response=response)
    return items, envelopes.paginate(raw, response=response)


@auth.authenticated
async def update_node_pool(
        cluster_id: str,
        pool_id: str,
        request: nodepools.NodePoolUpdateRequest,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[nodepools.NodePool, pagination.Response]:
    raw, response = await api.put(
        url=api.build_url('clusters', cluster_id, 'node_pools', pool_id),
        payload=request.as_raw(),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return envelopes.unwrap_one(nodepools.NodePool.from_raw, raw, 'node_pool', response=response), response


@auth.authenticated
async def recycle_node_pool_nodes(
        cluster_id: str,
        pool_id: str,
        request: nodepools.NodePoolRecycleNodesRequest,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> pagination.Response:
    """
    Recycle the listed nodes of the pool (deprecated; use `delete_node`).
    """
    warnings.warn("recycle_node_pool_nodes() is deprecated; use delete_node(..., replace=True).",
                  DeprecationWarning, stacklevel=2)
    _, response = await api.post(
        url=api.build_url('clusters', cluster_id, 'node_pools', pool_id, 'recycle'),
        payload=request.as_raw(),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return response


@auth.authenticated
async def delete_node_pool(
        cluster_id: str,
        pool_id: str,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> pagination.Response:
    """
    Delete the node pool, and subsequently all the nodes in that pool.
    """
    _, response = await api.delete(
        url=api.build_url('clusters', cluster_id, 'node_pools', pool_id),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return response


@auth.authenticated
async def delete_node(
        cluster_id: str,
        pool_id: str,
        node_id: str,
        request: nodepools.NodeDeleteRequest | None = None,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> pagination.Response:
    """
    Delete a specific node of the pool, optionally without draining it,
    and optionally with a new node created to replace it.
    """
    params = request.as_params() if request is not None else None
    _, response = await api.delete(
        url=api.build_url('clusters', cluster_id, 'node_pools', pool_id, 'nodes', node_id, params=params),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return response
