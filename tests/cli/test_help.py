def test_help_in_root(invoke):
    result = invoke(['--help'])
    assert result.exit_code == 0
    assert 'Usage: dokube' in result.output
    for command in ['clusters', 'cluster', 'node-pools', 'kubeconfig', 'options', 'upgrades', 'lint', 'run-lint']:
        assert command in result.output


def test_help_in_subcommand(invoke):
    result = invoke(['cluster', '--help'])
    assert result.exit_code == 0
    assert 'CLUSTER_ID' in result.output
    assert '--token' in result.output
    assert '--output' in result.output
    assert '--log-format' in result.output
