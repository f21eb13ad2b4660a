"""Busy flag and epoch counter shared by the builders."""

from contextlib import contextmanager
from dataclasses import dataclass

from loguru import logger

from ..errors import GenerationBusyError


@dataclass(frozen=True)
class Ticket:
    epoch: int


class GenerationGuard:
    """Allows one pending call at a time and detects stale results.

    ``cancel()`` moves the epoch forward; any ticket issued before that is
    stale and its result must be dropped by the caller.
    """

    def __init__(self):
        self._epoch = 0
        self.busy = False

    @contextmanager
    def acquire(self, label: str = "generation"):
        if self.busy:
            raise GenerationBusyError(f"A {label} request is already in progress.")
        self.busy = True
        try:
            yield Ticket(self._epoch)
        finally:
            self.busy = False

    def cancel(self) -> None:
        self._epoch += 1
        logger.debug(f"Generation epoch advanced to {self._epoch}")

    def is_current(self, ticket: Ticket) -> bool:
        return ticket.epoch == self._epoch
