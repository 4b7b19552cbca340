from dataclasses import dataclass
from datetime import datetime
from typing import Generic, Optional, Sequence, TypeVar

from shareit.booking.availability import TimeWindow


BookingT = TypeVar('BookingT', bound=TimeWindow)


@dataclass(frozen=True)
class LastNextSelection(Generic[BookingT]):
    """Результат выбора последней и ближайшей брони.

    Если `needs_past_lookup` истинно, последняя бронь ищется отдельно
    среди завершившихся.
    """

    last: Optional[BookingT] = None
    next: Optional[BookingT] = None
    needs_past_lookup: bool = False


def select_last_and_next(
    active: Sequence[BookingT],
    now: datetime,
) -> LastNextSelection[BookingT]:
    """Делит активные брони вещи на текущую и следующую.

    Args:
        active: Активные брони, отсортированные по началу
        now: Текущий момент по часам сервиса

    Returns:
        LastNextSelection

    """
    if not active:
        # без активных броней завершившиеся не ищутся
        return LastNextSelection()

    first = active[0]
    if first.start_time < now:
        second = active[1] if len(active) > 1 else None
        return LastNextSelection(last=first, next=second)

    return LastNextSelection(next=first, needs_past_lookup=True)
