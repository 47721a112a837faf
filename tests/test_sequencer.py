import threading
from dataclasses import dataclass, field

import pytest

from abscan.sequencer import Sequencer, SequencerError


@dataclass
class _Item:
    sequence: int


@dataclass
class _Recorder:
    values: list = field(default_factory=list)

    def commit(self, value):
        self.values.append(value.sequence)


def _start(sequencer, item, output):
    thread = threading.Thread(
        target=sequencer.commit_with_sequence, args=(item, output), daemon=True
    )
    thread.start()
    return thread


def test_commits_in_order():
    sequencer = Sequencer()
    sequencer.init(1)
    out = _Recorder()
    threads = [_start(sequencer, _Item(n), out) for n in (3, 2)]
    sequencer.commit_with_sequence(_Item(1), out)
    for thread in threads:
        thread.join(timeout=5)
    assert out.values == [1, 2, 3]


def test_waits_for_missing_sequence():
    sequencer = Sequencer()
    sequencer.init(10)
    out = _Recorder()
    waiting = _start(sequencer, _Item(11), out)
    waiting.join(timeout=0.2)
    assert waiting.is_alive()
    assert out.values == []
    sequencer.commit_with_sequence(_Item(10), out)
    waiting.join(timeout=5)
    assert out.values == [10, 11]


def test_disabled_passes_through():
    sequencer = Sequencer(enabled=False)
    out = _Recorder()
    sequencer.commit_with_sequence(_Item(42), out)
    sequencer.commit_with_sequence(_Item(7), out)
    assert out.values == [42, 7]


def test_init_twice_raises():
    sequencer = Sequencer()
    sequencer.init(5)
    with pytest.raises(SequencerError):
        sequencer.init(6)