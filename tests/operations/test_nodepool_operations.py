import pytest

from dokube._cogs.clients.errors import APIRequestError
from dokube._cogs.clients.nodepools import create_node_pool, delete_node, delete_node_pool, \
                                           get_node_pool, get_node_pool_template, list_node_pools, \
                                           recycle_node_pool_nodes, update_node_pool
from dokube._cogs.structs.nodepools import NodeDeleteRequest, NodePoolCreateRequest, \
                                           NodePoolRecycleNodesRequest, NodePoolUpdateRequest, Taint

PAGES = 'https://api.digitalocean.com/v2/kubernetes/clusters/c1/node_pools'


async def test_create_node_pool(fake_api, context, raw_node_pool):
    fake_api.add('post', '/v2/kubernetes/clusters/c1/node_pools', status=201, payload={'node_pool': raw_node_pool})
    request = NodePoolCreateRequest(
        name='workers',
        size='s-1vcpu-2gb',
        count=2,
        taints=[Taint(key='dedicated', value='db', effect='NoSchedule')],
    )
    pool, response = await create_node_pool('c1', request, context=context)
    assert pool.id == 'p1'
    assert response.status == 201
    assert fake_api.requests[0].data == {
        'name': 'workers',
        'size': 's-1vcpu-2gb',
        'count': 2,
        'taints': [{'key': 'dedicated', 'value': 'db', 'effect': 'NoSchedule'}],
    }


async def test_get_node_pool(fake_api, context, raw_node_pool):
    fake_api.add('get', '/v2/kubernetes/clusters/c1/node_pools/p1', payload={'node_pool': raw_node_pool})
    pool, _ = await get_node_pool('c1', 'p1', context=context)
    assert pool.name == 'workers'
    assert str(pool.taints[0]) == 'dedicated=db:NoSchedule'
    assert pool.nodes[0].name == 'workers-n1'


async def test_get_node_pool_template(fake_api, context):
    fake_api.add('get', '/v2/kubernetes/clusters/c1/node_pools_template/workers', payload={'template': {
        'cluster_uuid': 'c1',
        'name': 'workers',
        'slug': 's-1vcpu-2gb',
        'taints': ['dedicated=db:NoSchedule'],
        'capacity': {'cpu': 1, 'memory': '2048Mi', 'pods': 110},
    }})
    template, _ = await get_node_pool_template('c1', 'workers', context=context)
    assert template.template.slug == 's-1vcpu-2gb'
    assert template.template.taints == ['dedicated=db:NoSchedule']
    assert template.template.capacity.pods == 110
    assert template.template.allocatable is None


async def test_list_node_pools(fake_api, context, raw_node_pool):
    fake_api.add('get', '/v2/kubernetes/clusters/c1/node_pools', payload={
        'node_pools': [raw_node_pool],
        'links': {'pages': {'prev': f'{PAGES}?page=1', 'first': f'{PAGES}?page=1'}},
    })
    pools, response = await list_node_pools('c1', context=context)
    assert [pool.id for pool in pools] == ['p1']
    assert response.links.current_page() == 2
    assert response.links.is_last_page()
    assert response.meta is None


async def test_update_node_pool_with_explicit_zeros(fake_api, context, raw_node_pool):
    fake_api.add('put', '/v2/kubernetes/clusters/c1/node_pools/p1', status=202, payload={'node_pool': raw_node_pool})
    request = NodePoolUpdateRequest(name='workers', count=0, taints=[], auto_scale=False)
    pool, response = await update_node_pool('c1', 'p1', request, context=context)
    assert pool.id == 'p1'
    assert response.status == 202
    assert fake_api.requests[0].method == 'PUT'
    assert fake_api.requests[0].data == {'name': 'workers', 'count': 0, 'taints': [], 'auto_scale': False}


async def test_recycle_node_pool_nodes_is_deprecated(fake_api, context):
    fake_api.add('post', '/v2/kubernetes/clusters/c1/node_pools/p1/recycle', status=202)
    with pytest.warns(DeprecationWarning):
        response = await recycle_node_pool_nodes(
            'c1', 'p1', NodePoolRecycleNodesRequest(nodes=['n1']), context=context)
    assert response.status == 202
    assert fake_api.requests[0].data == {'nodes': ['n1']}


async def test_delete_node_pool(fake_api, context):
    fake_api.add('delete', '/v2/kubernetes/clusters/c1/node_pools/p1', status=204)
    response = await delete_node_pool('c1', 'p1', context=context)
    assert response.status == 204
    assert fake_api.requests[0].method == 'DELETE'


@pytest.mark.parametrize('request_, expected_query', [
    (None, {}),
    (NodeDeleteRequest(), {}),
    (NodeDeleteRequest(skip_drain=True), {'skip_drain': '1'}),
    (NodeDeleteRequest(replace=True), {'replace': '1'}),
    (NodeDeleteRequest(replace=True, skip_drain=True), {'skip_drain': '1', 'replace': '1'}),
])
async def test_delete_node(fake_api, context, request_, expected_query):
    fake_api.add('delete', '/v2/kubernetes/clusters/c1/node_pools/p1/nodes/n1', status=202)
    response = await delete_node('c1', 'p1', 'n1', request_, context=context)
    assert response.status == 202
    assert fake_api.requests[0].query == expected_query
    assert fake_api.requests[0].data is None


@pytest.mark.parametrize('args', [
    ('', 'p1', 'n1'),
    ('c1', '', 'n1'),
    ('c1', 'p1', ''),
])
async def test_delete_node_with_empty_ids(fake_api, context, args):
    with pytest.raises(APIRequestError):
        await delete_node(*args, context=context)
    assert not fake_api.requests
