from dokube._cogs.clients.options import add_registry, get_options, remove_registry
from dokube._cogs.structs.clusters import ClusterRegistryRequest


async def test_get_options(fake_api, context):
    fake_api.add('get', '/v2/kubernetes/options', payload={'options': {
        'versions': [{'slug': '1.29.1-do.0', 'kubernetes_version': '1.29.1'}],
        'regions': [{'name': 'New York 1', 'slug': 'nyc1'}],
        'sizes': [{'name': 's-1vcpu-2gb', 'slug': 's-1vcpu-2gb'}],
    }})
    options, _ = await get_options(context=context)
    assert [v.slug for v in options.versions] == ['1.29.1-do.0']
    assert [r.slug for r in options.regions] == ['nyc1']
    assert [s.slug for s in options.sizes] == ['s-1vcpu-2gb']


async def test_add_registry(fake_api, context):
    fake_api.add('post', '/v2/kubernetes/registry', status=204)
    response = await add_registry(ClusterRegistryRequest(cluster_uuids=['c1', 'c2']), context=context)
    assert response.status == 204
    assert fake_api.requests[0].method == 'POST'
    assert fake_api.requests[0].data == {'cluster_uuids': ['c1', 'c2']}


async def test_remove_registry(fake_api, context):
    fake_api.add('delete', '/v2/kubernetes/registry', status=204)
    response = await remove_registry(ClusterRegistryRequest(cluster_uuids=['c1']), context=context)
    assert response.status == 204
    assert fake_api.requests[0].method == 'DELETE'
    assert fake_api.requests[0].data == {'cluster_uuids': ['c1']}
