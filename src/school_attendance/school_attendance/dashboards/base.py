from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Callable, Optional

from ..analytics.service import AttendanceReportService
from ..common.datetime_utils import today_local
from ..core.enums import Role
from ..realtime.channel import Unsubscribe, UpdateChannel

logger = logging.getLogger(__name__)


class DashboardView(ABC):
    """An open dashboard: recomputes its analytics state on every attendance update."""

    role: Role

    def __init__(
        self,
        channel: UpdateChannel,
        reports: AttendanceReportService,
        *,
        today: Callable[[], date] = today_local,
    ):
        self._channel = channel
        self._reports = reports
        self._today = today
        self._unsubscribe: Optional[Unsubscribe] = None
        self.state: Any = None
        self.refresh_count = 0
        self.last_event: Any = None

    @property
    def is_open(self) -> bool:
        return self._unsubscribe is not None

    def open(self):
        if not self.is_open:
            self._unsubscribe = self._channel.on_attendance_update(self._on_update)
        return self.refresh()

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def refresh(self):
        self.state = self.compute()
        self.refresh_count += 1
        return self.state

    def _on_update(self, payload: Any) -> None:
        self.last_event = payload
        logger.debug("%s dashboard refreshing after attendance update", self.role.value)
        self.refresh()

    @abstractmethod
    def compute(self):
        raise NotImplementedError
