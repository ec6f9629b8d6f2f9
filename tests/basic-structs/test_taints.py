import pytest

from dokube._cogs.structs.nodepools import Taint


@pytest.mark.parametrize('taint, expected', [
    (Taint(key='dedicated', value='db', effect='NoSchedule'), 'dedicated=db:NoSchedule'),
    (Taint(key='dedicated', effect='NoSchedule'), 'dedicated:NoSchedule'),
    (Taint(key='gpu', value='', effect='NoExecute'), 'gpu:NoExecute'),
])
def test_taint_string_representation(taint, expected):
    assert str(taint) == expected


def test_taint_parsing():
    taint = Taint.from_raw({'key': 'k', 'value': 'v', 'effect': 'PreferNoSchedule'})
    assert taint == Taint(key='k', value='v', effect='PreferNoSchedule')


def test_taint_parsing_without_value():
    taint = Taint.from_raw({'key': 'k', 'effect': 'NoSchedule'})
    assert taint.value == ''
    assert str(taint) == 'k:NoSchedule'


def test_taint_rendering():
    taint = Taint(key='k', value='v', effect='NoSchedule')
    assert taint.as_raw() == {'key': 'k', 'value': 'v', 'effect': 'NoSchedule'}


def test_taints_are_immutable():
    taint = Taint(key='k', effect='NoSchedule')
    with pytest.raises(AttributeError):
        taint.key = 'other'  # type: ignore
