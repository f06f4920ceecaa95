import logging
import unittest

from focus import ActiveTaskBinding, TimerEngine
from focus.constants import WORK_DURATION_SECONDS
from tasks import InMemoryTaskStore, Task, TaskStoreError


class _FlakyStore(InMemoryTaskStore):
    def __init__(self, tasks):
        super().__init__(tasks)
        self.fail_reads = False
        self.fail_writes = False

    def read_task(self, task_id: str) -> Task:
        if self.fail_reads:
            raise TaskStoreError("disk on fire")
        return super().read_task(task_id)

    def write_remaining(self, task_id: str, seconds: int) -> None:
        if self.fail_writes:
            raise TaskStoreError("disk full")
        super().write_remaining(task_id, seconds)


def _build(tasks=None, *, cycle="work_break"):
    store = _FlakyStore(
        tasks
        if tasks is not None
        else [
            Task(id="a", title="Write report"),
            Task(id="b", title="Review PR", remaining_seconds=600),
        ]
    )
    engine = TimerEngine(cycle=cycle, logger=logging.getLogger("test.focus.engine"))
    binding = ActiveTaskBinding(
        engine,
        store,
        logger=logging.getLogger("test.focus.binding"),
    )
    return binding, engine, store


def _tick(binding: ActiveTaskBinding, count: int = 1) -> None:
    for _ in range(count):
        binding.on_tick(binding.engine.tick())


class SelectTaskTests(unittest.TestCase):
    def test_select_loads_saved_remaining_and_stays_paused(self) -> None:
        binding, engine, _ = _build()

        task = binding.select_task("b")

        self.assertEqual("b", task.id)
        self.assertEqual("b", binding.active_task_id)
        self.assertEqual(600, engine.remaining_seconds)
        self.assertFalse(engine.running)

    def test_zero_saved_remaining_falls_back_to_work_duration(self) -> None:
        binding, engine, _ = _build([Task(id="z", title="Done-ish", remaining_seconds=0)])

        binding.select_task("z")

        self.assertEqual(WORK_DURATION_SECONDS, engine.remaining_seconds)

    def test_switching_tasks_pauses_running_engine(self) -> None:
        binding, engine, _ = _build()
        binding.select_task("a")
        binding.start()

        binding.select_task("b")

        self.assertFalse(engine.running)
        self.assertEqual("b", binding.active_task_id)
        self.assertEqual(600, engine.remaining_seconds)

    def test_reselecting_active_task_keeps_running(self) -> None:
        binding, engine, _ = _build()
        binding.select_task("a")
        binding.start()
        _tick(binding, 5)

        binding.select_task("a")

        self.assertTrue(engine.running)
        self.assertEqual(WORK_DURATION_SECONDS - 5, engine.remaining_seconds)

    def test_selecting_from_no_binding_pauses_running_engine(self) -> None:
        binding, engine, _ = _build()
        engine.start()

        binding.select_task("a")

        self.assertFalse(engine.running)

    def test_failed_read_is_a_no_op(self) -> None:
        binding, engine, store = _build()
        binding.select_task("a")
        binding.start()
        _tick(binding, 3)
        before = engine.snapshot()
        store.fail_reads = True

        with self.assertLogs("test.focus.binding", level="WARNING"):
            result = binding.select_task("b")

        self.assertIsNone(result)
        self.assertEqual("a", binding.active_task_id)
        self.assertEqual(before, engine.snapshot())

    def test_invalid_saved_remaining_is_a_no_op(self) -> None:
        binding, engine, _ = _build(
            [
                Task(id="a", title="Write report"),
                Task(id="bad", title="Corrupted", remaining_seconds=-3),
            ]
        )
        binding.select_task("a")
        binding.start()
        before = engine.snapshot()

        with self.assertLogs("test.focus.binding", level="WARNING"):
            result = binding.select_task("bad")

        self.assertIsNone(result)
        self.assertEqual("a", binding.active_task_id)
        self.assertEqual(before, engine.snapshot())
        self.assertTrue(engine.running)

    def test_unknown_task_is_a_no_op(self) -> None:
        binding, engine, _ = _build()

        with self.assertLogs("test.focus.binding", level="WARNING"):
            self.assertIsNone(binding.select_task("missing"))

        self.assertIsNone(binding.active_task_id)
        self.assertEqual(WORK_DURATION_SECONDS, engine.remaining_seconds)


class PersistenceTests(unittest.TestCase):
    def test_ticks_are_written_to_active_task(self) -> None:
        binding, _, store = _build()
        binding.select_task("a")
        binding.start()

        _tick(binding, 7)

        self.assertEqual(WORK_DURATION_SECONDS - 7, store.read_task("a").remaining_seconds)

    def test_switch_round_trip_restores_position(self) -> None:
        binding, engine, store = _build()
        binding.select_task("a")
        binding.start()
        _tick(binding, 42)

        binding.select_task("b")
        binding.start()
        _tick(binding, 10)
        binding.select_task("a")

        self.assertEqual(WORK_DURATION_SECONDS - 42, engine.remaining_seconds)
        self.assertEqual(590, store.read_task("b").remaining_seconds)

    def test_ticks_without_binding_write_nothing(self) -> None:
        binding, engine, store = _build()
        engine.start()

        _tick(binding, 10)

        self.assertEqual(WORK_DURATION_SECONDS, store.read_task("a").remaining_seconds)
        self.assertEqual(600, store.read_task("b").remaining_seconds)

    def test_paused_ticks_write_nothing(self) -> None:
        binding, _, store = _build()
        binding.select_task("b")

        _tick(binding, 3)

        self.assertEqual(600, store.read_task("b").remaining_seconds)

    def test_single_shot_completion_persists_zero(self) -> None:
        binding, engine, store = _build(
            [Task(id="a", title="Short", remaining_seconds=2)],
            cycle="none",
        )
        binding.select_task("a")
        binding.start()

        _tick(binding, 2)

        self.assertFalse(engine.running)
        self.assertEqual(0, store.read_task("a").remaining_seconds)

    def test_reset_writes_reset_value(self) -> None:
        binding, engine, store = _build()
        binding.select_task("b")
        binding.start()
        _tick(binding, 5)

        binding.reset()

        self.assertFalse(engine.running)
        self.assertEqual(WORK_DURATION_SECONDS, store.read_task("b").remaining_seconds)

    def test_write_failure_is_logged_and_timer_keeps_running(self) -> None:
        binding, engine, store = _build()
        binding.select_task("a")
        binding.start()
        store.fail_writes = True

        with self.assertLogs("test.focus.binding", level="ERROR"):
            _tick(binding)

        self.assertTrue(engine.running)
        self.assertEqual("a", binding.active_task_id)


class DeletedTaskTests(unittest.TestCase):
    def test_deleting_active_task_unbinds_and_pauses(self) -> None:
        binding, engine, store = _build()
        binding.select_task("a")
        binding.start()
        store.delete_task("a")

        self.assertTrue(binding.task_deleted("a"))

        self.assertIsNone(binding.active_task_id)
        self.assertFalse(engine.running)

    def test_deleting_other_task_keeps_binding(self) -> None:
        binding, engine, store = _build()
        binding.select_task("a")
        binding.start()
        store.delete_task("b")

        self.assertFalse(binding.task_deleted("b"))

        self.assertEqual("a", binding.active_task_id)
        self.assertTrue(engine.running)

    def test_write_to_vanished_task_clears_binding(self) -> None:
        binding, engine, store = _build()
        binding.select_task("a")
        binding.start()
        store.delete_task("a")

        with self.assertLogs("test.focus.binding", level="WARNING"):
            _tick(binding)

        self.assertIsNone(binding.active_task_id)
        self.assertFalse(engine.running)


class SnapshotTests(unittest.TestCase):
    def test_snapshot_includes_active_task_title(self) -> None:
        binding, _, _ = _build()
        binding.select_task("b")

        snapshot = binding.snapshot()

        self.assertEqual("b", snapshot.active_task_id)
        self.assertEqual("Review PR", snapshot.active_task_title)
        self.assertEqual(600, snapshot.timer.remaining_seconds)

    def test_clear_active_task_keeps_timer_state(self) -> None:
        binding, engine, _ = _build()
        binding.select_task("b")
        binding.start()

        binding.clear_active_task()

        self.assertIsNone(binding.active_task_id)
        self.assertIsNone(binding.snapshot().active_task_title)
        self.assertTrue(engine.running)


if __name__ == "__main__":
    unittest.main()
