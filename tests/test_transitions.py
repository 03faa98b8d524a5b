import pytest

from foodorders.models.order import OrderStatus as S
from foodorders.services.transitions import TransitionTable


def test_permissive_allows_everything():
    table = TransitionTable.permissive()
    for current in S:
        for new in S:
            assert table.allows(current, new)


def test_strict_final_states():
    table = TransitionTable.strict()
    for final in (S.DELIVERED, S.CANCELLED):
        assert table.next_statuses(final) == frozenset()
        assert table.allows(final, final)
        assert not table.allows(final, S.PENDING)


def test_strict_forward_path():
    table = TransitionTable.strict()
    path = [S.PENDING, S.ACCEPTED, S.PREPARING, S.OUT_FOR_DELIVERY, S.DELIVERED]
    for current, new in zip(path, path[1:]):
        assert table.allows(current, new)
    assert not table.allows(S.OUT_FOR_DELIVERY, S.PREPARING)
    assert not table.allows(S.OUT_FOR_DELIVERY, S.CANCELLED)


def test_custom_table_missing_states_are_closed():
    table = TransitionTable({S.PENDING: [S.ACCEPTED]})
    assert table.allows(S.PENDING, S.ACCEPTED)
    assert not table.allows(S.ACCEPTED, S.PREPARING)


def test_from_name():
    assert TransitionTable.from_name(" Strict ").allows(S.PENDING, S.ACCEPTED)
    assert TransitionTable.from_name("permissive").allows(S.DELIVERED, S.PENDING)
    with pytest.raises(ValueError, match="Unknown order transition policy"):
        TransitionTable.from_name("chaotic")
