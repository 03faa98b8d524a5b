from typing import Dict, FrozenSet, Mapping, Iterable
from foodorders.models.order import OrderStatus


class TransitionTable:
    """
    Explicit order status policy: current status -> statuses it may move to.

    Moving to the current status is always allowed (it is a no-op).
    """

    def __init__(self, allowed: Mapping[OrderStatus, Iterable[OrderStatus]]):
        self._allowed: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
            status: frozenset(allowed.get(status, ())) for status in OrderStatus
        }

    @classmethod
    def permissive(cls) -> "TransitionTable":
        return cls({status: set(OrderStatus) for status in OrderStatus})

    @classmethod
    def strict(cls) -> "TransitionTable":
        """Forward-only delivery lifecycle; Delivered and Cancelled are final."""
        S = OrderStatus
        return cls({
            S.PENDING: {S.ACCEPTED, S.CANCELLED, S.RESCHEDULED},
            S.ACCEPTED: {S.PREPARING, S.CANCELLED, S.RESCHEDULED},
            S.PREPARING: {S.OUT_FOR_DELIVERY, S.CANCELLED, S.RESCHEDULED},
            S.OUT_FOR_DELIVERY: {S.DELIVERED, S.RESCHEDULED},
            S.RESCHEDULED: {S.PENDING, S.ACCEPTED, S.PREPARING, S.OUT_FOR_DELIVERY, S.CANCELLED},
            S.DELIVERED: set(),
            S.CANCELLED: set(),
        })

    @classmethod
    def from_name(cls, name: str) -> "TransitionTable":
        policies = {"permissive": cls.permissive, "strict": cls.strict}
        try:
            return policies[name.strip().lower()]()
        except KeyError:
            raise ValueError(f"Unknown order transition policy: {name!r}") from None

    def allows(self, current: OrderStatus, new: OrderStatus) -> bool:
        return current == new or new in self._allowed[current]

    def next_statuses(self, current: OrderStatus) -> FrozenSet[OrderStatus]:
        return self._allowed[current]
