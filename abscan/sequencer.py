"""Commit values strictly in ascending sequence order across threads."""

from __future__ import annotations

import logging
import threading
from typing import Protocol

logger = logging.getLogger(__name__)


class SequencerError(RuntimeError):
    """Raised when the sequencer is initialised twice."""


class Sequenceable(Protocol):
    @property
    def sequence(self) -> int: ...


class Committable(Protocol):
    def commit(self, value: Sequenceable) -> None: ...


class Sequencer:
    """Holds back each commit until every lower sequence has been committed."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._sequence = 0
        self._cond = threading.Condition()

    def init(self, sequence: int) -> None:
        """Set the first sequence number that will be committed."""
        logger.info("init sequencer: sequence=%d", sequence)
        with self._cond:
            if self._sequence != 0:
                raise SequencerError(
                    f"sequencer already initialised: sequence={sequence}, "
                    f"old sequence={self._sequence}"
                )
            self._sequence = sequence - 1

    def commit_with_sequence(self, value: Sequenceable, output: Committable) -> None:
        """Commit value to output once it is next in line; commit at once if disabled."""
        if not self.enabled:
            output.commit(value)
            return

        sequence = value.sequence
        with self._cond:
            self._cond.wait_for(lambda: self._sequence + 1 == sequence)
            output.commit(value)
            self._sequence = sequence
            self._cond.notify_all()