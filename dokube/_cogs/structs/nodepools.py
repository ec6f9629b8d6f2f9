"""
Node pools, their nodes and taints, as coming from/to the API.

Everything marked "raw" is the plain JSON-decoded data as sent by the API
or as sent to the API. The dataclasses are the parsed views of the raw data,
constructed fresh from every response and never modified in place.
"""
import dataclasses
import datetime
from collections.abc import Mapping, Sequence
from typing import Any

from typing_extensions import TypedDict

from dokube._cogs.structs import wire


class RawTaint(TypedDict, total=False):
    key: str
    value: str
    effect: str


class RawNodeStatus(TypedDict, total=False):
    state: str
    message: str


class RawNode(TypedDict, total=False):
    id: str
    name: str
    status: RawNodeStatus
    droplet_id: str
    created_at: str
    updated_at: str


class RawNodePool(TypedDict, total=False):
    id: str
    name: str
    size: str
    count: int
    tags: list[str]
    labels: dict[str, str]
    taints: list[RawTaint]
    auto_scale: bool
    min_nodes: int
    max_nodes: int
    nodes: list[RawNode]


@dataclasses.dataclass(frozen=True)
class Taint:
    """
    A taint of a node pool (and, transitively, of all nodes of that pool).
    """
    key: str
    effect: str
    value: str = ''

    def __str__(self) -> str:
        if not self.value:
            return f'{self.key}:{self.effect}'
        return f'{self.key}={self.value}:{self.effect}'

    @classmethod
    def from_raw(cls, raw: RawTaint) -> 'Taint':
        return cls(key=raw.get('key', ''), value=raw.get('value', ''), effect=raw.get('effect', ''))

    def as_raw(self) -> RawTaint:
        return RawTaint(key=self.key, value=self.value, effect=self.effect)


@dataclasses.dataclass(frozen=True)
class NodeStatus:
    state: str = ''
    message: str = ''

    @classmethod
    def from_raw(cls, raw: RawNodeStatus) -> 'NodeStatus':
        return cls(state=raw.get('state', ''), message=raw.get('message', ''))


@dataclasses.dataclass(frozen=True)
class Node:
    id: str
    name: str = ''
    status: NodeStatus | None = None
    droplet_id: str = ''
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None

    @classmethod
    def from_raw(cls, raw: RawNode) -> 'Node':
        status = raw.get('status')
        return cls(
            id=raw.get('id', ''),
            name=raw.get('name', ''),
            status=NodeStatus.from_raw(status) if status is not None else None,
            droplet_id=raw.get('droplet_id', ''),
            created_at=wire.parse_timestamp(raw.get('created_at')),
            updated_at=wire.parse_timestamp(raw.get('updated_at')),
        )


@dataclasses.dataclass(frozen=True)
class NodePool:
    id: str
    name: str = ''
    size: str = ''
    count: int = 0
    tags: Sequence[str] = ()
    labels: Mapping[str, str] = dataclasses.field(default_factory=dict)
    taints: Sequence[Taint] = ()
    auto_scale: bool = False
    min_nodes: int = 0
    max_nodes: int = 0
    nodes: Sequence[Node] = ()

    @classmethod
    def from_raw(cls, raw: RawNodePool) -> 'NodePool':
        return cls(
            id=raw.get('id', ''),
            name=raw.get('name', ''),
            size=raw.get('size', ''),
            count=raw.get('count', 0),
            tags=wire.strings(raw.get('tags')),
            labels=wire.mapping(raw.get('labels')),
            taints=[Taint.from_raw(taint) for taint in raw.get('taints') or []],
            auto_scale=raw.get('auto_scale', False),
            min_nodes=raw.get('min_nodes', 0),
            max_nodes=raw.get('max_nodes', 0),
            nodes=[Node.from_raw(node) for node in raw.get('nodes') or []],
        )


@dataclasses.dataclass(frozen=True)
class NodePoolResources:
    cpu: int = 0
    memory: str = ''
    pods: int = 0

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'NodePoolResources':
        return cls(cpu=raw.get('cpu', 0), memory=raw.get('memory', ''), pods=raw.get('pods', 0))


@dataclasses.dataclass(frozen=True)
class NodeTemplate:
    """
    A template of a node as it would be if the pool scaled up from zero.

    The taints are already rendered to their string form by the server.
    """
    cluster_uuid: str = ''
    name: str = ''
    slug: str = ''
    labels: Mapping[str, str] = dataclasses.field(default_factory=dict)
    taints: Sequence[str] = ()
    capacity: NodePoolResources | None = None
    allocatable: NodePoolResources | None = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'NodeTemplate':
        capacity = raw.get('capacity')
        allocatable = raw.get('allocatable')
        return cls(
            cluster_uuid=raw.get('cluster_uuid', ''),
            name=raw.get('name', ''),
            slug=raw.get('slug', ''),
            labels=wire.mapping(raw.get('labels')),
            taints=wire.strings(raw.get('taints')),
            capacity=NodePoolResources.from_raw(capacity) if capacity is not None else None,
            allocatable=NodePoolResources.from_raw(allocatable) if allocatable is not None else None,
        )


@dataclasses.dataclass(frozen=True)
class NodePoolTemplate:
    template: NodeTemplate | None = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'NodePoolTemplate':
        template = raw.get('template')
        return cls(template=NodeTemplate.from_raw(template) if template is not None else None)


@dataclasses.dataclass(frozen=True)
class NodePoolCreateRequest:
    name: str = ''
    size: str = ''
    count: int = 0
    tags: Sequence[str] = ()
    labels: Mapping[str, str] = dataclasses.field(default_factory=dict)
    taints: Sequence[Taint] = ()
    auto_scale: bool = False
    min_nodes: int = 0
    max_nodes: int = 0

    def as_raw(self) -> dict[str, Any]:
        return wire.compact(dict(
            name=self.name,
            size=self.size,
            count=self.count,
            tags=list(self.tags),
            labels=dict(self.labels),
            taints=[taint.as_raw() for taint in self.taints],
            auto_scale=self.auto_scale,
            min_nodes=self.min_nodes,
            max_nodes=self.max_nodes,
        ))


@dataclasses.dataclass(frozen=True)
class NodePoolUpdateRequest:
    """
    A partial update of a node pool.

    The scaling fields and the taints are nullable: ``None`` leaves them as is,
    while zeros, ``False`` & empty lists are sent and reset the pool's values.
    """
    name: str = ''
    count: int | None = None
    tags: Sequence[str] = ()
    labels: Mapping[str, str] = dataclasses.field(default_factory=dict)
    taints: Sequence[Taint] | None = None
    auto_scale: bool | None = None
    min_nodes: int | None = None
    max_nodes: int | None = None

    def as_raw(self) -> dict[str, Any]:
        return wire.compact(dict(
            name=self.name,
            count=self.count,
            tags=list(self.tags),
            labels=dict(self.labels),
            taints=[taint.as_raw() for taint in self.taints] if self.taints is not None else None,
            auto_scale=self.auto_scale,
            min_nodes=self.min_nodes,
            max_nodes=self.max_nodes,
        ), nullable={'count', 'taints', 'auto_scale', 'min_nodes', 'max_nodes'})


@dataclasses.dataclass(frozen=True)
class NodePoolRecycleNodesRequest:
    """ Deprecated: use the single-node deletion with replacement instead. """
    nodes: Sequence[str] = ()

    def as_raw(self) -> dict[str, Any]:
        return wire.compact(dict(nodes=list(self.nodes)))


@dataclasses.dataclass(frozen=True)
class NodeDeleteRequest:
    replace: bool = False
    """ Create a new node to replace the deleted one. """

    skip_drain: bool = False
    """ Do not drain the node before deleting it. """

    def as_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.skip_drain:
            params['skip_drain'] = '1'
        if self.replace:
            params['replace'] = '1'
        return params
