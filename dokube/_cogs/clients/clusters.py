"""
Cluster-level operations: creation, reading, updating, upgrading, deletion,
and the cluster's auxiliary information (credentials, kubeconfig, statuses).

Every operation returns the parsed result (if any) and the response's metadata.
All errors are escalated to the caller as is: there are no retries.
"""
from dokube._cogs.clients import api, auth, envelopes
from dokube._cogs.helpers import typedefs
from dokube._cogs.structs import clusters, pagination


@auth.authenticated
async def create_cluster(
        request: clusters.ClusterCreateRequest,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[clusters.Cluster, pagination.Response]:
    raw, response = await api.post(
        url=api.build_url('clusters'),
        payload=request.as_raw(),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return envelopes.unwrap_one(clusters.Cluster.from_raw, raw, 'kubernetes_cluster', response=response), response


@auth.authenticated
async def get_cluster(
        cluster_id: str,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[clusters.Cluster, pagination.Response]:
    raw, response = await api.get(
        url=api.build_url('clusters', cluster_id),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return envelopes.unwrap_one(clusters.Cluster.from_raw, raw, 'kubernetes_cluster', response=response), response


@auth.authenticated
async def get_cluster_user(
        cluster_id: str,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[clusters.ClusterUser, pagination.Response]:
    raw, response = await api.get(
        url=api.build_url('clusters', cluster_id, 'user'),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return envelopes.unwrap_one(clusters.ClusterUser.from_raw, raw, 'kubernetes_cluster_user', response=response), response


@auth.authenticated
async def list_clusters(
        options: pagination.ListOptions | None = None,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[list[clusters.Cluster], pagination.Response]:
    """
    List the clusters visible with the API token: one page at a time.

    The pagination links & totals are put into the returned response.
    """
    if context is None:
        raise RuntimeError("API instance is not injected by the decorator.")
    raw, response = await api.get(
        url=api.build_url('clusters', params=envelopes.list_params(options, context=context)),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    items = envelopes.unwrap_many(clusters.Cluster.from_raw, raw, 'kubernetes_clusters', response=response)
    return items, envelopes.paginate(raw, response=response)


@auth.authenticated
async def update_cluster(
        cluster_id: str,
        request: clusters.ClusterUpdateRequest,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[clusters.Cluster, pagination.Response]:
    raw, response = await api.put(
        url=api.build_url('clusters', cluster_id),
        payload=request.as_raw(),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return envelopes.unwrap_one(clusters.Cluster.from_raw, raw, 'kubernetes_cluster', response=response), response


@auth.authenticated
async def get_upgrades(
        cluster_id: str,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[list[clusters.Version], pagination.Response]:
    """
    Get the versions the cluster can be upgraded to (see `upgrade_cluster`).
    """
    raw, response = await api.get(
        url=api.build_url('clusters', cluster_id, 'upgrades'),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return envelopes.unwrap_many(clusters.Version.from_raw, raw, 'available_upgrade_versions', response=response), response


@auth.authenticated
async def upgrade_cluster(
        cluster_id: str,
        request: clusters.ClusterUpgradeRequest,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> pagination.Response:
    _, response = await api.post(
        url=api.build_url('clusters', cluster_id, 'upgrade'),
        payload=request.as_raw(),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return response


@auth.authenticated
async def delete_cluster(
        cluster_id: str,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> pagination.Response:
    """
    Delete the cluster. There is no way to recover it once deleted.
    """
    _, response = await api.delete(
        url=api.build_url('clusters', cluster_id),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return response


@auth.authenticated
async def delete_cluster_selective(
        cluster_id: str,
        request: clusters.ClusterDeleteSelectiveRequest,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> pagination.Response:
    """
    Delete the cluster and the selected associated resources.

    The candidates can be seen with `list_associated_resources_for_deletion`.
    There is no way to recover the cluster or the resources once deleted.
    """
    _, response = await api.delete(
        url=api.build_url('clusters', cluster_id, 'destroy_with_associated_resources', 'selective'),
        payload=request.as_raw(),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return response


@auth.authenticated
async def delete_cluster_dangerous(
        cluster_id: str,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> pagination.Response:
    """
    Delete the cluster and ALL its associated resources, without selecting them.

    The volumes, volume snapshots & load balancers are deleted unconditionally.
    There is no way to recover the cluster or the resources once deleted.
    """
    _, response = await api.delete(
        url=api.build_url('clusters', cluster_id, 'destroy_with_associated_resources', 'dangerous'),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return response


@auth.authenticated
async def list_associated_resources_for_deletion(
        cluster_id: str,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[clusters.AssociatedResources, pagination.Response]:
    raw, response = await api.get(
        url=api.build_url('clusters', cluster_id, 'destroy_with_associated_resources'),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return envelopes.decode(clusters.AssociatedResources.from_raw, raw, response=response), response


@auth.authenticated
async def get_kubeconfig(
        cluster_id: str,
        *,
        expiry_seconds: int | None = None,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[clusters.ClusterConfig, pagination.Response]:
    """
    Get the kubeconfig YAML for the cluster, as is: no parsing, no envelopes.
    """
    params = {'expiry_seconds': str(expiry_seconds)} if expiry_seconds is not None else None
    content, response = await api.read(
        url=api.build_url('clusters', cluster_id, 'kubeconfig', params=params),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return clusters.ClusterConfig(kubeconfig_yaml=content), response


@auth.authenticated
async def get_credentials(
        cluster_id: str,
        request: clusters.ClusterCredentialsGetRequest | None = None,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[clusters.ClusterCredentials, pagination.Response]:
    request = request if request is not None else clusters.ClusterCredentialsGetRequest()
    raw, response = await api.get(
        url=api.build_url('clusters', cluster_id, 'credentials', params=request.as_params()),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return envelopes.decode(clusters.ClusterCredentials.from_raw, raw, response=response), response


@auth.authenticated
async def get_cluster_status_messages(
        cluster_id: str,
        request: clusters.GetClusterStatusMessagesRequest | None = None,
        *,
        stopper: api.Stopper | None = None,
        context: auth.APIContext | None = None,  # injected by the decorator
        logger: typedefs.Logger | None = None,
) -> tuple[list[clusters.ClusterStatusMessage], pagination.Response]:
    request = request if request is not None else clusters.GetClusterStatusMessagesRequest()
    raw, response = await api.get(
        url=api.build_url('clusters', cluster_id, 'status_messages', params=request.as_params()),
        stopper=stopper,
        context=context,
        logger=logger,
    )
    return envelopes.unwrap_many(clusters.ClusterStatusMessage.from_raw, raw, 'messages', response=response), response
