from datetime import date, datetime
from typing import Callable, Optional

from catatuang.domain import Direction, Granularity, PeriodRange
from catatuang.logging_setup import get_logger
from catatuang.periods import as_date, custom_range, period_range, shift_reference_date

logger = get_logger(__name__)


class NavigationState:
    """Active granularity, reference date and optional custom range of one view.

    Without a custom range the visible range is always derived from
    ``(granularity, reference_date)``; it is never stored separately.
    """

    def __init__(
        self,
        granularity: Granularity = Granularity.MONTH,
        reference_date: Optional[date] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._clock = clock
        self._granularity = Granularity.parse(granularity)
        self._reference_date = as_date(reference_date if reference_date is not None else clock())
        self._custom_range: Optional[PeriodRange] = None

    @classmethod
    def for_reports(cls, clock: Callable[[], datetime] = datetime.now) -> "NavigationState":
        return cls(Granularity.MONTH, clock=clock)

    @classmethod
    def for_transaction_list(cls, clock: Callable[[], datetime] = datetime.now) -> "NavigationState":
        return cls(Granularity.DAY, clock=clock)

    @property
    def granularity(self) -> Granularity:
        return self._granularity

    @property
    def reference_date(self) -> date:
        return self._reference_date

    @property
    def custom_range_active(self) -> bool:
        return self._custom_range is not None

    @property
    def range(self) -> PeriodRange:
        if self._custom_range is not None:
            return self._custom_range
        return period_range(self._granularity, self._reference_date)

    @property
    def range_start(self) -> datetime:
        return self.range.start

    @property
    def range_end(self) -> datetime:
        return self.range.end

    def set_granularity(self, granularity: Granularity) -> None:
        self._granularity = Granularity.parse(granularity)
        self._custom_range = None
        logger.debug("Granularity set to %s at %s", self._granularity.value, self._reference_date)

    def navigate(self, direction: Direction) -> None:
        self._reference_date = shift_reference_date(self._granularity, self._reference_date, direction)
        self._custom_range = None
        logger.debug("Navigated %s to %s", Direction(direction).value, self._reference_date)

    def apply_custom_range(self, start: date, end: date) -> None:
        self._custom_range = custom_range(start, end)
        logger.debug("Custom range %s - %s applied", self._custom_range.start, self._custom_range.end)

    def reset_to_today(self) -> None:
        self._reference_date = as_date(self._clock())
        self._custom_range = None
        logger.debug("Reset to today (%s)", self._reference_date)

    def __repr__(self) -> str:
        return (
            f"NavigationState(granularity={self._granularity.value!r}, "
            f"reference_date={self._reference_date!r}, custom_range_active={self.custom_range_active})"
        )
