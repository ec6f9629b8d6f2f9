"""
Iterating over all pages of the paginated listings, item by item.

The pages are fetched lazily, one by one, as the items are consumed.
The next page is requested with the same page size as the previous one.
"""
from collections.abc import AsyncIterator

from dokube._cogs.clients import api, auth, clusters, nodepools
from dokube._cogs.helpers import typedefs
from dokube._cogs.structs import clusters as cluster_structs
from dokube._cogs.structs import nodepools as nodepool_structs
from dokube._cogs.structs import pagination


def _next_options(
        options: pagination.ListOptions,
        response: pagination.Response,
) -> pagination.ListOptions | None:
    if response.links is None or response.links.is_last_page():
        return None
    page = response.links.current_page()
    return pagination.ListOptions(page=page + 1, per_page=options.per_page)


async def iter_clusters(
        options: pagination.ListOptions | None = None,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,
        logger: typedefs.Logger | None = None,
) -> AsyncIterator[cluster_structs.Cluster]:
    next_options: pagination.ListOptions | None = options or pagination.ListOptions()
    while next_options is not None:
        items, response = await clusters.list_clusters(
            next_options, stopper=stopper, context=context, logger=logger)
        for item in items:
            yield item
        next_options = _next_options(next_options, response)


async def iter_node_pools(
        cluster_id: str,
        options: pagination.ListOptions | None = None,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,
        logger: typedefs.Logger | None = None,
) -> AsyncIterator[nodepool_structs.NodePool]:
    next_options: pagination.ListOptions | None = options or pagination.ListOptions()
    while next_options is not None:
        items, response = await nodepools.list_node_pools(
            cluster_id, next_options, stopper=stopper, context=context, logger=logger)
        for item in items:
            yield item
        next_options = _next_options(next_options, response)
