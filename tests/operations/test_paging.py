from dokube._cogs.clients.paging import iter_clusters, iter_node_pools
from dokube._cogs.structs.pagination import ListOptions

PAGES = 'https://api.digitalocean.com/v2/kubernetes/clusters'


async def test_iterating_over_all_pages(fake_api, context, raw_cluster):
    fake_api.add('get', '/v2/kubernetes/clusters', payload={
        'kubernetes_clusters': [dict(raw_cluster, id='c1'), dict(raw_cluster, id='c2')],
        'links': {'pages': {'next': f'{PAGES}?page=2&per_page=2', 'last': f'{PAGES}?page=2&per_page=2'}},
        'meta': {'total': 3},
    })
    fake_api.add('get', '/v2/kubernetes/clusters', payload={
        'kubernetes_clusters': [dict(raw_cluster, id='c3')],
        'links': {'pages': {'first': f'{PAGES}?page=1&per_page=2', 'prev': f'{PAGES}?page=1&per_page=2'}},
        'meta': {'total': 3},
    })
    clusters = [cluster async for cluster in iter_clusters(ListOptions(per_page=2), context=context)]
    assert [cluster.id for cluster in clusters] == ['c1', 'c2', 'c3']
    assert [request.query for request in fake_api.requests] == [
        {'per_page': '2'},
        {'page': '2', 'per_page': '2'},
    ]


async def test_iterating_over_a_single_page_without_links(fake_api, context, raw_node_pool):
    fake_api.add('get', '/v2/kubernetes/clusters/c1/node_pools', payload={'node_pools': [raw_node_pool]})
    pools = [pool async for pool in iter_node_pools('c1', context=context)]
    assert [pool.id for pool in pools] == ['p1']
    assert len(fake_api.requests) == 1


async def test_iterating_over_nothing(fake_api, context):
    fake_api.add('get', '/v2/kubernetes/clusters', payload={'kubernetes_clusters': []})
    clusters = [cluster async for cluster in iter_clusters(context=context)]
    assert clusters == []
