"""
The main dokube module for all the exported functions & classes.
"""
# isort: skip_file

# Unlike all other places, where we import other modules and refer
# the functions via the modules, this is the library's top-level interface,
# as it is seen by the users. So, we export the individual functions.

from dokube._cogs.configs.configuration import (
    ClientSettings,
    NetworkingSettings,
    ListingSettings,
)
from dokube._cogs.helpers.typedefs import (
    Logger,
)
from dokube._cogs.helpers.versions import (
    version as __version__,
)
from dokube._cogs.structs.credentials import (
    LoginError,
    ConnectionInfo,
)
from dokube._cogs.structs.enums import (
    MaintenanceDay,
    UnknownDayError,
    InvalidDayError,
    ClusterState,
    UnknownClusterStateError,
    to_day,
    day_name,
)
from dokube._cogs.structs.clusters import (
    Cluster,
    ClusterStatus,
    ClusterUser,
    ClusterCredentials,
    ClusterConfig,
    MaintenancePolicy,
    ControlPlaneFirewall,
    ClusterAutoscalerConfiguration,
    PluginToggle,
    Version,
    Region,
    NodeSize,
    Options,
    AssociatedResource,
    AssociatedResources,
    ClusterlintOwner,
    ClusterlintObject,
    ClusterlintDiagnostic,
    ClusterStatusMessage,
    ClusterCreateRequest,
    ClusterUpdateRequest,
    ClusterUpgradeRequest,
    ClusterDeleteSelectiveRequest,
    ClusterCredentialsGetRequest,
    ClusterRegistryRequest,
    RunClusterlintRequest,
    GetClusterlintRequest,
    GetClusterStatusMessagesRequest,
)
from dokube._cogs.structs.nodepools import (
    Taint,
    Node,
    NodeStatus,
    NodePool,
    NodePoolResources,
    NodeTemplate,
    NodePoolTemplate,
    NodePoolCreateRequest,
    NodePoolUpdateRequest,
    NodePoolRecycleNodesRequest,
    NodeDeleteRequest,
)
from dokube._cogs.structs.pagination import (
    ListOptions,
    Links,
    Pages,
    LinkAction,
    Meta,
    Rate,
    Response,
)
from dokube._cogs.clients.errors import (
    APIError,
    APIUnauthorizedError,
    APIForbiddenError,
    APINotFoundError,
    APIConflictError,
    APIUnprocessableError,
    APITooManyRequestsError,
    APIServerError,
    APIRequestError,
    APIDecodeError,
    APICancelledError,
)
from dokube._cogs.clients.auth import (
    APIContext,
    connected,
)
from dokube._cogs.clients.clusters import (
    create_cluster,
    get_cluster,
    get_cluster_user,
    list_clusters,
    update_cluster,
    get_upgrades,
    upgrade_cluster,
    delete_cluster,
    delete_cluster_selective,
    delete_cluster_dangerous,
    list_associated_resources_for_deletion,
    get_kubeconfig,
    get_credentials,
    get_cluster_status_messages,
)
from dokube._cogs.clients.nodepools import (
    create_node_pool,
    get_node_pool,
    get_node_pool_template,
    list_node_pools,
    update_node_pool,
    recycle_node_pool_nodes,
    delete_node_pool,
    delete_node,
)
from dokube._cogs.clients.clusterlint import (
    run_clusterlint,
    get_clusterlint_results,
)
from dokube._cogs.clients.options import (
    get_options,
    add_registry,
    remove_registry,
)
from dokube._cogs.clients.paging import (
    iter_clusters,
    iter_node_pools,
)
from dokube._kits.loggers import (
    LogFormat,
    configure as configure_logging,
)

__all__ = [
    'ClientSettings', 'NetworkingSettings', 'ListingSettings',
    'Logger',
    'LoginError', 'ConnectionInfo',
    'MaintenanceDay', 'UnknownDayError', 'InvalidDayError',
    'ClusterState', 'UnknownClusterStateError',
    'to_day', 'day_name',
    'Cluster', 'ClusterStatus', 'ClusterUser', 'ClusterCredentials', 'ClusterConfig',
    'MaintenancePolicy', 'ControlPlaneFirewall', 'ClusterAutoscalerConfiguration', 'PluginToggle',
    'Version', 'Region', 'NodeSize', 'Options',
    'AssociatedResource', 'AssociatedResources',
    'ClusterlintOwner', 'ClusterlintObject', 'ClusterlintDiagnostic',
    'ClusterStatusMessage',
    'ClusterCreateRequest', 'ClusterUpdateRequest', 'ClusterUpgradeRequest',
    'ClusterDeleteSelectiveRequest', 'ClusterCredentialsGetRequest', 'ClusterRegistryRequest',
    'RunClusterlintRequest', 'GetClusterlintRequest', 'GetClusterStatusMessagesRequest',
    'Taint', 'Node', 'NodeStatus', 'NodePool', 'NodePoolResources', 'NodeTemplate', 'NodePoolTemplate',
    'NodePoolCreateRequest', 'NodePoolUpdateRequest', 'NodePoolRecycleNodesRequest', 'NodeDeleteRequest',
    'ListOptions', 'Links', 'Pages', 'LinkAction', 'Meta', 'Rate', 'Response',
    'APIError', 'APIUnauthorizedError', 'APIForbiddenError', 'APINotFoundError',
    'APIConflictError', 'APIUnprocessableError', 'APITooManyRequestsError', 'APIServerError',
    'APIRequestError', 'APIDecodeError', 'APICancelledError',
    'APIContext', 'connected',
    'create_cluster', 'get_cluster', 'get_cluster_user', 'list_clusters', 'update_cluster',
    'get_upgrades', 'upgrade_cluster',
    'delete_cluster', 'delete_cluster_selective', 'delete_cluster_dangerous',
    'list_associated_resources_for_deletion',
    'get_kubeconfig', 'get_credentials', 'get_cluster_status_messages',
    'create_node_pool', 'get_node_pool', 'get_node_pool_template', 'list_node_pools',
    'update_node_pool', 'recycle_node_pool_nodes', 'delete_node_pool', 'delete_node',
    'run_clusterlint', 'get_clusterlint_results',
    'get_options', 'add_registry', 'remove_registry',
    'iter_clusters', 'iter_node_pools',
    'LogFormat', 'configure_logging',
]
