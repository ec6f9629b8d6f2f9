"""
Clusters and everything attached to them, as coming from/to the API.

For strict type-checking, the raw payloads are detailed to the per-field level
(e.g. `TypedDict` instead of just ``Mapping[Any, Any]``) for the main entities.
The auxiliary entities are parsed from arbitrary mappings.

The parsed entities are immutable: they are constructed fresh from every
response and are never modified in place. The requests are immutable too,
and are rendered to the raw payloads only when sent.
"""
import dataclasses
import datetime
from collections.abc import Mapping, Sequence
from typing import Any

import yaml
from typing_extensions import TypedDict

from dokube._cogs.structs import enums, nodepools, wire


class RawMaintenancePolicy(TypedDict, total=False):
    start_time: str
    duration: str
    day: str


class RawClusterStatus(TypedDict, total=False):
    state: str
    message: str


class RawCluster(TypedDict, total=False):
    id: str
    name: str
    region: str
    version: str
    cluster_subnet: str
    service_subnet: str
    ipv4: str
    endpoint: str
    tags: list[str]
    vpc_uuid: str
    ha: bool
    node_pools: list[nodepools.RawNodePool]
    maintenance_policy: RawMaintenancePolicy
    auto_upgrade: bool
    surge_upgrade: bool
    registry_enabled: bool
    control_plane_firewall: Mapping[str, Any]
    cluster_autoscaler_configuration: Mapping[str, Any]
    routing_agent: Mapping[str, Any]
    amd_gpu_device_plugin: Mapping[str, Any]
    amd_gpu_device_metrics_exporter_plugin: Mapping[str, Any]
    status: RawClusterStatus
    created_at: str
    updated_at: str


class RawCredentials(TypedDict, total=False):
    server: str
    certificate_authority_data: str  # base64
    client_certificate_data: str  # base64
    client_key_data: str  # base64
    token: str
    expires_at: str


@dataclasses.dataclass(frozen=True)
class MaintenancePolicy:
    """
    The maintenance window of a cluster: e.g. ``"12:00"`` for ``"4h"`` on Mondays.

    An absent day means any day; an explicit ``null`` or empty day is an unknown day.
    """
    start_time: str = ''
    duration: str = ''
    day: enums.MaintenanceDay = enums.MaintenanceDay.ANY

    @classmethod
    def from_raw(cls, raw: RawMaintenancePolicy) -> 'MaintenancePolicy':
        return cls(
            start_time=raw.get('start_time', ''),
            duration=raw.get('duration', ''),
            day=enums.MaintenanceDay.parse(raw['day']) if 'day' in raw else enums.MaintenanceDay.ANY,
        )

    def as_raw(self) -> RawMaintenancePolicy:
        return RawMaintenancePolicy(
            start_time=self.start_time,
            duration=self.duration,
            day=enums.day_name(self.day),
        )


@dataclasses.dataclass(frozen=True)
class ControlPlaneFirewall:
    enabled: bool | None = None
    allowed_addresses: Sequence[str] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'ControlPlaneFirewall':
        return cls(
            enabled=raw.get('enabled'),
            allowed_addresses=wire.strings(raw.get('allowed_addresses')),
        )

    def as_raw(self) -> dict[str, Any]:
        return {'enabled': self.enabled, 'allowed_addresses': list(self.allowed_addresses)}


@dataclasses.dataclass(frozen=True)
class ClusterAutoscalerConfiguration:
    scale_down_utilization_threshold: float | None = None
    scale_down_unneeded_time: str | None = None  # e.g. "1m30s"
    expanders: Sequence[str] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'ClusterAutoscalerConfiguration':
        return cls(
            scale_down_utilization_threshold=raw.get('scale_down_utilization_threshold'),
            scale_down_unneeded_time=raw.get('scale_down_unneeded_time'),
            expanders=wire.strings(raw.get('expanders')),
        )

    def as_raw(self) -> dict[str, Any]:
        return {
            'scale_down_utilization_threshold': self.scale_down_utilization_threshold,
            'scale_down_unneeded_time': self.scale_down_unneeded_time,
            'expanders': list(self.expanders),
        }


@dataclasses.dataclass(frozen=True)
class PluginToggle:
    """
    A cluster plugin's switch: the routing agent, the AMD GPU plugins, etc.

    ``None`` means "as decided by the server" (e.g. the AMD GPU device plugin
    is enabled by default if the cluster has a node pool with AMD GPUs).
    """
    enabled: bool | None = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'PluginToggle':
        return cls(enabled=raw.get('enabled'))

    def as_raw(self) -> dict[str, Any]:
        return {'enabled': self.enabled}


@dataclasses.dataclass(frozen=True)
class ClusterStatus:
    state: enums.ClusterState = enums.ClusterState.INVALID
    message: str = ''

    @classmethod
    def from_raw(cls, raw: RawClusterStatus) -> 'ClusterStatus':
        return cls(
            state=enums.ClusterState.parse(raw.get('state')),
            message=raw.get('message', ''),
        )


def _optional(factory: Any, raw: Any) -> Any:
    return factory(raw) if raw is not None else None


@dataclasses.dataclass(frozen=True)
class Cluster:
    id: str
    name: str = ''
    region: str = ''
    version: str = ''
    cluster_subnet: str = ''
    service_subnet: str = ''
    ipv4: str = ''
    endpoint: str = ''
    tags: Sequence[str] = ()
    vpc_uuid: str = ''
    ha: bool = False
    node_pools: Sequence[nodepools.NodePool] = ()
    maintenance_policy: MaintenancePolicy | None = None
    auto_upgrade: bool = False
    surge_upgrade: bool = False
    registry_enabled: bool = False
    control_plane_firewall: ControlPlaneFirewall | None = None
    cluster_autoscaler_configuration: ClusterAutoscalerConfiguration | None = None
    routing_agent: PluginToggle | None = None
    amd_gpu_device_plugin: PluginToggle | None = None
    amd_gpu_device_metrics_exporter_plugin: PluginToggle | None = None
    status: ClusterStatus | None = None
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None

    @property
    def urn(self) -> str:
        return f'do:kubernetes:{self.id}'

    @classmethod
    def from_raw(cls, raw: RawCluster) -> 'Cluster':
        return cls(
            id=raw.get('id', ''),
            name=raw.get('name', ''),
            region=raw.get('region', ''),
            version=raw.get('version', ''),
            cluster_subnet=raw.get('cluster_subnet', ''),
            service_subnet=raw.get('service_subnet', ''),
            ipv4=raw.get('ipv4', ''),
            endpoint=raw.get('endpoint', ''),
            tags=wire.strings(raw.get('tags')),
            vpc_uuid=raw.get('vpc_uuid', ''),
            ha=raw.get('ha', False),
            node_pools=[nodepools.NodePool.from_raw(pool) for pool in raw.get('node_pools') or []],
            maintenance_policy=_optional(MaintenancePolicy.from_raw, raw.get('maintenance_policy')),
            auto_upgrade=raw.get('auto_upgrade', False),
            surge_upgrade=raw.get('surge_upgrade', False),
            registry_enabled=raw.get('registry_enabled', False),
            control_plane_firewall=_optional(ControlPlaneFirewall.from_raw, raw.get('control_plane_firewall')),
            cluster_autoscaler_configuration=_optional(ClusterAutoscalerConfiguration.from_raw, raw.get('cluster_autoscaler_configuration')),
            routing_agent=_optional(PluginToggle.from_raw, raw.get('routing_agent')),
            amd_gpu_device_plugin=_optional(PluginToggle.from_raw, raw.get('amd_gpu_device_plugin')),
            amd_gpu_device_metrics_exporter_plugin=_optional(PluginToggle.from_raw, raw.get('amd_gpu_device_metrics_exporter_plugin')),
            status=_optional(ClusterStatus.from_raw, raw.get('status')),
            created_at=wire.parse_timestamp(raw.get('created_at')),
            updated_at=wire.parse_timestamp(raw.get('updated_at')),
        )


@dataclasses.dataclass(frozen=True)
class ClusterUser:
    id: str = ''
    username: str = ''
    groups: Sequence[str] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'ClusterUser':
        return cls(
            id=raw.get('id', ''),
            username=raw.get('username', ''),
            groups=wire.strings(raw.get('groups')),
        )


@dataclasses.dataclass(frozen=True)
class ClusterCredentials:
    server: str = ''
    certificate_authority_data: bytes = b''
    client_certificate_data: bytes = b''
    client_key_data: bytes = b''
    token: str = ''
    expires_at: datetime.datetime | None = None

    @classmethod
    def from_raw(cls, raw: RawCredentials) -> 'ClusterCredentials':
        return cls(
            server=raw.get('server', ''),
            certificate_authority_data=wire.decode_bytes(raw.get('certificate_authority_data')),
            client_certificate_data=wire.decode_bytes(raw.get('client_certificate_data')),
            client_key_data=wire.decode_bytes(raw.get('client_key_data')),
            token=raw.get('token', ''),
            expires_at=wire.parse_timestamp(raw.get('expires_at')),
        )


@dataclasses.dataclass(frozen=True)
class ClusterConfig:
    """
    The content of a kubeconfig file, as served by the API, byte-for-byte.

    It can be used to interact with the cluster using ``kubectl``.
    """
    kubeconfig_yaml: bytes

    def parse(self) -> Any:
        return yaml.safe_load(self.kubeconfig_yaml)


@dataclasses.dataclass(frozen=True)
class Version:
    slug: str = ''
    kubernetes_version: str = ''
    supported_features: Sequence[str] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'Version':
        return cls(
            slug=raw.get('slug', ''),
            kubernetes_version=raw.get('kubernetes_version', ''),
            supported_features=wire.strings(raw.get('supported_features')),
        )


@dataclasses.dataclass(frozen=True)
class Region:
    name: str = ''
    slug: str = ''


@dataclasses.dataclass(frozen=True)
class NodeSize:
    name: str = ''
    slug: str = ''


@dataclasses.dataclass(frozen=True)
class Options:
    """ What is available for creating the clusters: versions, regions, sizes. """
    versions: Sequence[Version] = ()
    regions: Sequence[Region] = ()
    sizes: Sequence[NodeSize] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'Options':
        return cls(
            versions=[Version.from_raw(v) for v in raw.get('versions') or []],
            regions=[Region(name=r.get('name', ''), slug=r.get('slug', '')) for r in raw.get('regions') or []],
            sizes=[NodeSize(name=s.get('name', ''), slug=s.get('slug', '')) for s in raw.get('sizes') or []],
        )


@dataclasses.dataclass(frozen=True)
class AssociatedResource:
    id: str = ''
    name: str = ''


@dataclasses.dataclass(frozen=True)
class AssociatedResources:
    """ Resources that can be deleted together with a cluster, if selected. """
    volumes: Sequence[AssociatedResource] = ()
    volume_snapshots: Sequence[AssociatedResource] = ()
    load_balancers: Sequence[AssociatedResource] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'AssociatedResources':
        def _resources(key: str) -> list[AssociatedResource]:
            return [AssociatedResource(id=r.get('id', ''), name=r.get('name', '')) for r in raw.get(key) or []]
        return cls(
            volumes=_resources('volumes'),
            volume_snapshots=_resources('volume_snapshots'),
            load_balancers=_resources('load_balancers'),
        )


@dataclasses.dataclass(frozen=True)
class ClusterlintOwner:
    kind: str = ''
    name: str = ''


@dataclasses.dataclass(frozen=True)
class ClusterlintObject:
    kind: str = ''
    name: str = ''
    namespace: str = ''
    owners: Sequence[ClusterlintOwner] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'ClusterlintObject':
        return cls(
            kind=raw.get('kind', ''),
            name=raw.get('name', ''),
            namespace=raw.get('namespace', ''),
            owners=[ClusterlintOwner(kind=o.get('kind', ''), name=o.get('name', '')) for o in raw.get('owners') or []],
        )


@dataclasses.dataclass(frozen=True)
class ClusterlintDiagnostic:
    check_name: str = ''
    severity: str = ''
    message: str = ''
    object: ClusterlintObject | None = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'ClusterlintDiagnostic':
        return cls(
            check_name=raw.get('check_name', ''),
            severity=raw.get('severity', ''),
            message=raw.get('message', ''),
            object=_optional(ClusterlintObject.from_raw, raw.get('object')),
        )


@dataclasses.dataclass(frozen=True)
class ClusterStatusMessage:
    message: str = ''
    timestamp: datetime.datetime | None = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'ClusterStatusMessage':
        return cls(
            message=raw.get('message', ''),
            timestamp=wire.parse_timestamp(raw.get('timestamp')),
        )


#
# Requests.
#


def _plugins(request: Any) -> dict[str, Any]:
    return dict(
        control_plane_firewall=_optional(ControlPlaneFirewall.as_raw, request.control_plane_firewall),
        cluster_autoscaler_configuration=_optional(ClusterAutoscalerConfiguration.as_raw, request.cluster_autoscaler_configuration),
        routing_agent=_optional(PluginToggle.as_raw, request.routing_agent),
        amd_gpu_device_plugin=_optional(PluginToggle.as_raw, request.amd_gpu_device_plugin),
        amd_gpu_device_metrics_exporter_plugin=_optional(PluginToggle.as_raw, request.amd_gpu_device_metrics_exporter_plugin),
    )


@dataclasses.dataclass(frozen=True)
class ClusterCreateRequest:
    name: str = ''
    region: str = ''
    version: str = ''
    tags: Sequence[str] = ()
    vpc_uuid: str = ''
    cluster_subnet: str = ''
    service_subnet: str = ''
    ha: bool = False  # a highly available control plane
    node_pools: Sequence[nodepools.NodePoolCreateRequest] = ()
    maintenance_policy: MaintenancePolicy | None = None
    auto_upgrade: bool = False
    surge_upgrade: bool = False
    control_plane_firewall: ControlPlaneFirewall | None = None
    cluster_autoscaler_configuration: ClusterAutoscalerConfiguration | None = None
    routing_agent: PluginToggle | None = None
    amd_gpu_device_plugin: PluginToggle | None = None
    amd_gpu_device_metrics_exporter_plugin: PluginToggle | None = None

    def as_raw(self) -> dict[str, Any]:
        return wire.compact(dict(
            name=self.name,
            region=self.region,
            version=self.version,
            tags=list(self.tags),
            vpc_uuid=self.vpc_uuid,
            cluster_subnet=self.cluster_subnet,
            service_subnet=self.service_subnet,
            ha=self.ha,
            node_pools=[pool.as_raw() for pool in self.node_pools],
            maintenance_policy=_optional(MaintenancePolicy.as_raw, self.maintenance_policy),
            auto_upgrade=self.auto_upgrade,
            surge_upgrade=self.surge_upgrade,
            **_plugins(self),
        ), required={'ha', 'auto_upgrade', 'surge_upgrade'})


@dataclasses.dataclass(frozen=True)
class ClusterUpdateRequest:
    """
    A partial update of a cluster.

    ``auto_upgrade`` and ``ha`` are nullable: ``None`` leaves them as is,
    ``False`` is sent explicitly (e.g. to disable the auto-upgrades).
    """
    name: str = ''
    tags: Sequence[str] = ()
    maintenance_policy: MaintenancePolicy | None = None
    auto_upgrade: bool | None = None
    surge_upgrade: bool = False
    control_plane_firewall: ControlPlaneFirewall | None = None
    cluster_autoscaler_configuration: ClusterAutoscalerConfiguration | None = None
    routing_agent: PluginToggle | None = None
    amd_gpu_device_plugin: PluginToggle | None = None
    amd_gpu_device_metrics_exporter_plugin: PluginToggle | None = None
    ha: bool | None = None  # convert to a highly available control plane

    def as_raw(self) -> dict[str, Any]:
        return wire.compact(dict(
            name=self.name,
            tags=list(self.tags),
            maintenance_policy=_optional(MaintenancePolicy.as_raw, self.maintenance_policy),
            auto_upgrade=self.auto_upgrade,
            surge_upgrade=self.surge_upgrade,
            ha=self.ha,
            **_plugins(self),
        ), nullable={'auto_upgrade', 'ha'})


@dataclasses.dataclass(frozen=True)
class ClusterUpgradeRequest:
    version: str = ''

    def as_raw(self) -> dict[str, Any]:
        return wire.compact(dict(version=self.version))


@dataclasses.dataclass(frozen=True)
class ClusterDeleteSelectiveRequest:
    """ IDs of the associated resources to delete together with the cluster. """
    volumes: Sequence[str] = ()
    volume_snapshots: Sequence[str] = ()
    load_balancers: Sequence[str] = ()

    def as_raw(self) -> dict[str, Any]:
        return dict(
            volumes=list(self.volumes),
            volume_snapshots=list(self.volume_snapshots),
            load_balancers=list(self.load_balancers),
        )


@dataclasses.dataclass(frozen=True)
class ClusterCredentialsGetRequest:
    expiry_seconds: int | None = None

    def as_params(self) -> dict[str, str]:
        return {'expiry_seconds': str(self.expiry_seconds)} if self.expiry_seconds is not None else {}


@dataclasses.dataclass(frozen=True)
class ClusterRegistryRequest:
    cluster_uuids: Sequence[str] = ()

    def as_raw(self) -> dict[str, Any]:
        return wire.compact(dict(cluster_uuids=list(self.cluster_uuids)))


@dataclasses.dataclass(frozen=True)
class RunClusterlintRequest:
    include_groups: Sequence[str] = ()
    exclude_groups: Sequence[str] = ()
    include_checks: Sequence[str] = ()
    exclude_checks: Sequence[str] = ()

    def as_raw(self) -> dict[str, Any]:
        return dict(
            include_groups=list(self.include_groups),
            exclude_groups=list(self.exclude_groups),
            include_checks=list(self.include_checks),
            exclude_checks=list(self.exclude_checks),
        )


@dataclasses.dataclass(frozen=True)
class GetClusterlintRequest:
    run_id: str = ''  # empty for the latest run

    def as_params(self) -> dict[str, str]:
        return {'run_id': self.run_id} if self.run_id else {}


@dataclasses.dataclass(frozen=True)
class GetClusterStatusMessagesRequest:
    since: datetime.datetime | None = None

    def as_params(self) -> dict[str, str]:
        return {'since': wire.format_rfc3339(self.since)} if self.since is not None else {}
