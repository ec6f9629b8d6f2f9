import asyncio
import dataclasses
import json
import logging
from collections.abc import Mapping
from typing import Any

import aiohttp.test_utils
import aiohttp.web
import pytest
from multidict import CIMultiDict, CIMultiDictProxy

from dokube._cogs.clients.auth import APIContext
from dokube._cogs.configs.configuration import ClientSettings
from dokube._cogs.structs.credentials import ConnectionInfo
from dokube._kits.loggers import _DokubeStreamHandler


#
# A fake API server. Reasons:
# 1. We do test the client here, so the requests must really go through aiohttp,
#    with all its URL quoting, body encoding, headers, timeouts, etc.
# 2. No external calls must be made under any circumstances.
#    The unit-tests must be fully isolated from the environment.
#


@dataclasses.dataclass(frozen=True)
class RecordedRequest:
    method: str
    path: str  # raw, as sent: with the percent-encoding, but without the query.
    query: dict[str, str]
    headers: Mapping[str, str]  # case-insensitive
    data: Any  # JSON-decoded if possible, text otherwise, None if empty.


@dataclasses.dataclass(frozen=True)
class FakeResponse:
    status: int = 200
    payload: Any = None
    body: bytes | None = None
    headers: dict[str, str] | None = None
    hang: bool = False  # until the test is over.


class FakeAPI:
    """
    The pre-programmed responses of the fake API, and the recorded requests.

    The responses are matched by the method & the path (without the query),
    and are consumed in the order of addition (each response is used only once).
    The unexpected requests get a 418 status, so that they fail the operations.

    Sample usage::

        async def test_me(fake_api, context):
            fake_api.add('get', '/v2/kubernetes/options', payload={'options': {}})
            await get_options(context=context)
            assert fake_api.requests[0].method == 'GET'
    """

    def __init__(self) -> None:
        super().__init__()
        self.requests: list[RecordedRequest] = []
        self.responses: list[tuple[str, str, FakeResponse]] = []
        self.released = asyncio.Event()
        self.server: aiohttp.test_utils.TestServer | None = None

    @property
    def url(self) -> str:
        assert self.server is not None
        return f'http://{self.server.host}:{self.server.port}'

    def add(
            self,
            method: str,
            path: str,
            *,
            status: int = 200,
            payload: Any = None,
            body: bytes | None = None,
            headers: dict[str, str] | None = None,
            hang: bool = False,
    ) -> None:
        response = FakeResponse(status=status, payload=payload, body=body, headers=headers, hang=hang)
        self.responses.append((method.upper(), path, response))

    async def handle(self, request: aiohttp.web.Request) -> aiohttp.web.StreamResponse:

        # The request's content can be read inside of the handler only. We preserve
        # the data into a conventional field, so that they could be asserted later.
        content = await request.read()
        try:
            data = json.loads(content) if content else None
        except ValueError:
            data = content.decode()
        path = request.raw_path.split('?', 1)[0]
        self.requests.append(RecordedRequest(
            method=request.method,
            path=path,
            query=dict(request.query),
            headers=CIMultiDictProxy(CIMultiDict(request.headers)),
            data=data,
        ))

        for index, (method, expected_path, response) in enumerate(self.responses):
            if method == request.method and expected_path == path:
                del self.responses[index]
                break
        else:
            return aiohttp.web.json_response({'id': 'unexpected', 'message': path}, status=418)

        if response.hang:
            await self.released.wait()
        if response.payload is not None:
            return aiohttp.web.json_response(response.payload, status=response.status, headers=response.headers)
        return aiohttp.web.Response(status=response.status, body=response.body, headers=response.headers)


@pytest.fixture()
async def fake_api():
    api = FakeAPI()
    app = aiohttp.web.Application()
    app.router.add_route('*', '/{tail:.*}', api.handle)
    server = aiohttp.test_utils.TestServer(app)
    await server.start_server()
    api.server = server
    try:
        yield api
    finally:
        api.released.set()
        await server.close()


@pytest.fixture()
def settings():
    return ClientSettings()


@pytest.fixture()
def info(fake_api):
    return ConnectionInfo(server=fake_api.url, token='fake-token')


@pytest.fixture()
async def context(info, settings):
    """
    An explicit context for the operations, as if from `dokube.connected()`.

    The operations get it via ``context=``: the context variables of the async
    fixtures are not guaranteed to be visible in the tests themselves.
    """
    context = APIContext(info, settings=settings)
    try:
        yield context
    finally:
        await context.close()


#
# Sample payloads, as served by the API.
#

@pytest.fixture()
def raw_node_pool():
    return {
        'id': 'p1',
        'name': 'workers',
        'size': 's-1vcpu-2gb',
        'count': 2,
        'tags': ['k8s', 'k8s:worker'],
        'labels': {'service': 'backend'},
        'taints': [{'key': 'dedicated', 'value': 'db', 'effect': 'NoSchedule'}],
        'auto_scale': True,
        'min_nodes': 1,
        'max_nodes': 3,
        'nodes': [{
            'id': 'n1',
            'name': 'workers-n1',
            'status': {'state': 'running'},
            'droplet_id': '12345',
            'created_at': '2024-01-02T03:04:05Z',
            'updated_at': '2024-01-02T03:04:06Z',
        }],
    }


@pytest.fixture()
def raw_cluster(raw_node_pool):
    return {
        'id': 'c1',
        'name': 'prod',
        'region': 'nyc1',
        'version': '1.29.1-do.0',
        'cluster_subnet': '10.244.0.0/16',
        'service_subnet': '10.245.0.0/16',
        'ipv4': '203.0.113.1',
        'endpoint': 'https://c1.k8s.ondigitalocean.com',
        'tags': ['k8s', 'k8s:c1'],
        'vpc_uuid': 'v1',
        'ha': True,
        'node_pools': [raw_node_pool],
        'maintenance_policy': {'start_time': '00:00', 'duration': '4h0m0s', 'day': 'monday'},
        'auto_upgrade': True,
        'surge_upgrade': False,
        'registry_enabled': False,
        'control_plane_firewall': {'enabled': True, 'allowed_addresses': ['198.51.100.0/24']},
        'routing_agent': {'enabled': None},
        'status': {'state': 'running', 'message': 'Cluster is running'},
        'created_at': '2024-01-02T03:04:05Z',
        'updated_at': '2024-01-02T03:04:06Z',
    }


@pytest.fixture(autouse=True)
def _restore_logging():
    """ Undo the global logging setup of the CLI runs and the `configure()` calls. """
    root = logging.getLogger()
    root_level = root.level
    states = {name: (logging.getLogger(name).propagate, logging.getLogger(name).handlers[:])
              for name in ['asyncio', 'aiohttp']}
    try:
        yield
    finally:
        root.setLevel(root_level)
        root.handlers[:] = [h for h in root.handlers if not isinstance(h, _DokubeStreamHandler)]
        for name, (propagate, handlers) in states.items():
            logging.getLogger(name).propagate = propagate
            logging.getLogger(name).handlers[:] = handlers
