"""
Tests for the session decorators.
"""

import logging

import pytest

from poker_chips.controller import atomic, logged_action


class Counter:
    def __init__(self):
        self.value = 0
        self.history = []
        self._logger = logging.getLogger("tests.counter")

    def _capture(self):
        return self.value, list(self.history)

    def _rollback(self, memento):
        self.value, self.history = memento

    @atomic
    @logged_action("add")
    def add(self, amount):
        self.value += amount
        self.history.append(amount)
        if self.value > 10:
            raise ValueError("too big")
        return self.value


class NoMemento:
    @atomic
    def run(self):
        return "ran"


@pytest.mark.unit
@pytest.mark.fast
class TestAtomic:

    def test_success_keeps_changes(self):
        counter = Counter()
        assert counter.add(4) == 4
        assert counter.history == [4]

    def test_failure_restores_state(self):
        counter = Counter()
        counter.add(4)

        with pytest.raises(ValueError, match="too big"):
            counter.add(20)

        assert counter.value == 4
        assert counter.history == [4]

    def test_requires_capture_and_rollback(self):
        with pytest.raises(AttributeError, match="_capture"):
            NoMemento().run()

    def test_preserves_function_metadata(self):
        assert Counter.add.__name__ == "add"


@pytest.mark.unit
@pytest.mark.fast
class TestLoggedAction:

    def test_logs_start_and_completion(self, caplog):
        counter = Counter()
        with caplog.at_level(logging.DEBUG, logger="tests.counter"):
            counter.add(1)

        messages = [r.getMessage() for r in caplog.records]
        assert "Starting add" in messages
        assert any(m.startswith("Completed add -> 1") for m in messages)

    def test_logs_failure(self, caplog):
        counter = Counter()
        with caplog.at_level(logging.DEBUG, logger="tests.counter"):
            with pytest.raises(ValueError):
                counter.add(11)

        messages = [r.getMessage() for r in caplog.records]
        assert "Failed add: too big" in messages
        assert any(m.startswith("Rolled back add") for m in messages)
