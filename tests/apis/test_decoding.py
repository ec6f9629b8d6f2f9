import pytest

from dokube._cogs.clients.clusters import get_cluster, list_clusters
from dokube._cogs.clients.nodepools import list_node_pools
from dokube._cogs.clients.errors import APIDecodeError
from dokube._cogs.structs.enums import UnknownClusterStateError, UnknownDayError


async def test_invalid_json(fake_api, context):
    fake_api.add('get', '/v2/kubernetes/clusters/c1', body=b'{"kubernetes_cluster":')
    with pytest.raises(APIDecodeError) as err:
        await get_cluster('c1', context=context)
    assert err.value.response.status == 200


async def test_missing_envelope(fake_api, context):
    fake_api.add('get', '/v2/kubernetes/clusters/c1', payload={'something': {}})
    with pytest.raises(APIDecodeError):
        await get_cluster('c1', context=context)


async def test_empty_body_instead_of_an_entity(fake_api, context):
    fake_api.add('get', '/v2/kubernetes/clusters/c1', status=200)
    with pytest.raises(APIDecodeError):
        await get_cluster('c1', context=context)


async def test_non_object_entity(fake_api, context):
    fake_api.add('get', '/v2/kubernetes/clusters/c1', payload={'kubernetes_cluster': 'c1'})
    with pytest.raises(APIDecodeError):
        await get_cluster('c1', context=context)


async def test_non_list_in_listing(fake_api, context):
    fake_api.add('get', '/v2/kubernetes/clusters', payload={'kubernetes_clusters': {'id': 'c1'}})
    with pytest.raises(APIDecodeError):
        await list_clusters(context=context)


async def test_unknown_cluster_state(fake_api, context):
    fake_api.add('get', '/v2/kubernetes/clusters/c1',
                 payload={'kubernetes_cluster': {'id': 'c1', 'status': {'state': 'frobnicated'}}})
    with pytest.raises(APIDecodeError) as err:
        await get_cluster('c1', context=context)
    assert 'frobnicated' in str(err.value)
    assert isinstance(err.value.__cause__, UnknownClusterStateError)


async def test_unknown_maintenance_day(fake_api, context):
    fake_api.add('get', '/v2/kubernetes/clusters/c1',
                 payload={'kubernetes_cluster': {'id': 'c1', 'maintenance_policy': {'day': 'funday'}}})
    with pytest.raises(APIDecodeError) as err:
        await get_cluster('c1', context=context)
    assert 'funday' in str(err.value)
    assert isinstance(err.value.__cause__, UnknownDayError)


@pytest.mark.parametrize('envelope', [
    {'links': 'oops'},
    {'links': {'pages': []}},
    {'links': {'pages': {'next': 123}}},
    {'links': {'actions': ['oops']}},
    {'meta': 'oops'},
])
async def test_malformed_pagination_in_cluster_listing(fake_api, context, envelope):
    fake_api.add('get', '/v2/kubernetes/clusters', payload=dict(envelope, kubernetes_clusters=[]))
    with pytest.raises(APIDecodeError) as err:
        await list_clusters(context=context)
    assert err.value.response.status == 200


@pytest.mark.parametrize('envelope', [
    {'links': 'oops'},
    {'links': {'pages': []}},
    {'meta': 'oops'},
])
async def test_malformed_pagination_in_node_pool_listing(fake_api, context, envelope):
    fake_api.add('get', '/v2/kubernetes/clusters/c1/node_pools', payload=dict(envelope, node_pools=[]))
    with pytest.raises(APIDecodeError):
        await list_node_pools('c1', context=context)
