################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Injectable time sources for stamping spline samples
"""

from __future__ import annotations

import time
from typing import Optional

from pose_spline.timing.spline_time import SplineDuration
from pose_spline.timing.spline_time import SplineTime


# Polling period while waiting for a time source to become valid
_VALID_POLL_PERIOD_SEC: float = 0.001


class TimeSource:
    """
    Clock abstraction handed to consumers instead of a process-wide clock
    """

    def now(self) -> SplineTime:
        """
        Return the current time
        """

        raise NotImplementedError

    def is_system_time(self) -> bool:
        raise NotImplementedError

    def is_sim_time(self) -> bool:
        return not self.is_system_time()

    def is_valid(self) -> bool:
        """
        True when now() can be called and returns a meaningful time
        """

        return True

    def wait_for_valid(self, timeout: Optional[SplineDuration] = None) -> bool:
        """
        Block until the source becomes valid

        Args:
            timeout: Longest wall-clock wait, or None to wait indefinitely

        Returns:
            True if the source is valid, False if the timeout expired first
        """

        deadline_ns: Optional[int] = None
        if timeout is not None:
            deadline_ns = time.monotonic_ns() + timeout.to_nsec()

        while not self.is_valid():
            if deadline_ns is not None and time.monotonic_ns() >= deadline_ns:
                return False
            time.sleep(_VALID_POLL_PERIOD_SEC)
        return True

    def sleep_until(self, end: SplineTime) -> bool:
        """
        Block until the given time is reached

        Returns:
            True if the time was reached, False if the source cannot wait
        """

        raise NotImplementedError


class SystemTimeSource(TimeSource):
    """
    Time source backed by the system wall clock
    """

    def now(self) -> SplineTime:
        return SplineTime.from_nsec(time.time_ns())

    def is_system_time(self) -> bool:
        return True

    def sleep_until(self, end: SplineTime) -> bool:
        remaining_ns: int = end.to_nsec() - time.time_ns()
        if remaining_ns > 0:
            time.sleep(remaining_ns / 1e9)
        return True


class SimulatedTimeSource(TimeSource):
    """
    Manually driven time source for replay and tests

    The source must be initialized with init() before use. Time only moves
    when set_now() or advance() is called, and it may never move backwards.
    """

    def __init__(self) -> None:
        self._initialized: bool = False
        self._now: Optional[SplineTime] = None

    def init(self, start: Optional[SplineTime] = None) -> None:
        """
        Start the source, optionally at a given time
        """

        self._initialized = True
        self._now = start

    def shutdown(self) -> None:
        self._initialized = False
        self._now = None

    def set_now(self, new_now: SplineTime) -> None:
        self._require_initialized()
        if self._now is not None and new_now < self._now:
            raise ValueError("simulated time must not move backwards")
        self._now = new_now

    def advance(self, duration: SplineDuration) -> SplineTime:
        """
        Move simulated time forward and return the new time
        """

        if duration.to_nsec() < 0:
            raise ValueError("duration must be non-negative")
        self.set_now(self.now() + duration)
        return self.now()

    def now(self) -> SplineTime:
        self._require_initialized()
        if self._now is None:
            # An initialized source without a time reads as zero, matching an
            # unset simulated clock
            return SplineTime(sec=0, nanosec=0)
        return self._now

    def is_system_time(self) -> bool:
        return False

    def is_valid(self) -> bool:
        return self._initialized and self._now is not None and not self._now.is_zero()

    def wait_for_valid(self, timeout: Optional[SplineDuration] = None) -> bool:
        # Simulated time only moves through set_now() or advance()
        return self.is_valid()

    def sleep_until(self, end: SplineTime) -> bool:
        # Simulated time is driven externally, so waiting would never finish
        return self.now() >= end

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("simulated time source is not initialized")
