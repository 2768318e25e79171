"""Background worker that reclaims expired sessions."""

from __future__ import annotations

from detector_sessions.application.ports.sweeper import SweepCallback
from detector_sessions.runtime.base_worker import BaseWorker

# Default sweep period in seconds
DEFAULT_SWEEP_INTERVAL = 60.0


class ExpirationSweeper(BaseWorker):
    """Periodically sweeps a registry and stops itself once it is empty.

    The registry hands the sweeper a callback that performs one sweep under
    the registry lock and returns False when no sessions remain (or when this
    sweeper has been superseded by a newer one).
    """

    worker_name = "session-expiration-sweeper"
    logger_name = "detector_sessions.sweeper"
    default_poll_interval = DEFAULT_SWEEP_INTERVAL

    def __init__(
        self,
        *,
        sweep: SweepCallback,
        interval_seconds: float = DEFAULT_SWEEP_INTERVAL,
    ) -> None:
        super().__init__(poll_interval=interval_seconds)
        self._sweep = sweep

    def _tick(self) -> None:
        if not self._sweep():
            self._logger.debug("sweeper loop exiting", extra={"data": {"worker": self.worker_name}})
            self._request_stop()


def create_expiration_sweeper(sweep: SweepCallback, interval_seconds: float) -> ExpirationSweeper:
    """Factory matching ``SweeperFactory`` for registry wiring."""
    return ExpirationSweeper(sweep=sweep, interval_seconds=interval_seconds)


__all__ = ["DEFAULT_SWEEP_INTERVAL", "ExpirationSweeper", "create_expiration_sweeper"]
