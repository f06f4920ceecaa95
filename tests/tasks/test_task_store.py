import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from focus.constants import WORK_DURATION_SECONDS
from tasks import (
    InMemoryTaskStore,
    JsonTaskStore,
    Task,
    TaskNotFoundError,
    TaskStoreError,
    TaskValidationError,
)


class TaskModelTests(unittest.TestCase):
    def test_from_dict_defaults_invalid_remaining_to_work_duration(self) -> None:
        for value in (None, -3, "90", 1.5, True):
            with self.subTest(value=value):
                task = Task.from_dict({"id": "a", "title": "x", "remaining_seconds": value})
                self.assertEqual(WORK_DURATION_SECONDS, task.remaining_seconds)

    def test_from_dict_keeps_zero_remaining(self) -> None:
        task = Task.from_dict({"id": "a", "title": "x", "remaining_seconds": 0})
        self.assertEqual(0, task.remaining_seconds)

    def test_from_dict_requires_id(self) -> None:
        with self.assertRaises(TaskValidationError):
            Task.from_dict({"title": "no id"})

    def test_title_whitespace_is_collapsed(self) -> None:
        task = Task.from_dict({"id": "a", "title": "  write \n  report  "})
        self.assertEqual("write report", task.title)


class InMemoryTaskStoreTests(unittest.TestCase):
    def test_add_task_prepends_with_default_remaining(self) -> None:
        store = InMemoryTaskStore()
        first = store.add_task("first")
        second = store.add_task("second")

        self.assertEqual([second.id, first.id], [task.id for task in store.list_tasks()])
        self.assertEqual(WORK_DURATION_SECONDS, first.remaining_seconds)
        self.assertFalse(first.completed)
        self.assertNotEqual(first.id, second.id)

    def test_add_task_rejects_blank_title(self) -> None:
        store = InMemoryTaskStore()
        with self.assertRaises(TaskValidationError):
            store.add_task("   ")

    def test_write_remaining_updates_only_that_task(self) -> None:
        store = InMemoryTaskStore([Task(id="a", title="A"), Task(id="b", title="B")])

        store.write_remaining("a", 321)

        self.assertEqual(321, store.read_task("a").remaining_seconds)
        self.assertEqual(WORK_DURATION_SECONDS, store.read_task("b").remaining_seconds)

    def test_write_remaining_rejects_negative(self) -> None:
        store = InMemoryTaskStore([Task(id="a", title="A")])
        with self.assertRaises(TaskValidationError):
            store.write_remaining("a", -1)

    def test_missing_task_raises_not_found(self) -> None:
        store = InMemoryTaskStore()
        with self.assertRaises(TaskNotFoundError):
            store.read_task("nope")
        with self.assertRaises(TaskNotFoundError):
            store.write_remaining("nope", 10)
        with self.assertRaises(TaskNotFoundError):
            store.delete_task("nope")

    def test_toggle_task_flips_completed(self) -> None:
        store = InMemoryTaskStore([Task(id="a", title="A")])

        self.assertTrue(store.toggle_task("a").completed)
        self.assertFalse(store.toggle_task("a").completed)

    def test_list_tasks_returns_a_copy(self) -> None:
        store = InMemoryTaskStore([Task(id="a", title="A")])
        listed = store.list_tasks()
        listed.clear()
        self.assertEqual(1, len(store.list_tasks()))


class JsonTaskStoreTests(unittest.TestCase):
    def test_mutations_are_persisted_and_reloaded(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "data" / "tasks.json"
            store = JsonTaskStore(path)
            task = store.add_task("Write report")
            store.write_remaining(task.id, 777)

            reloaded = JsonTaskStore(path)

            self.assertEqual(
                [Task(id=task.id, title="Write report", remaining_seconds=777)],
                reloaded.list_tasks(),
            )
            raw = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(777, raw[0]["remaining_seconds"])

    def test_missing_file_starts_empty(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = JsonTaskStore(Path(temp_dir) / "tasks.json")
            self.assertEqual([], store.list_tasks())

    def test_corrupt_file_is_logged_and_treated_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "tasks.json"
            path.write_text("{not json", encoding="utf-8")

            with self.assertLogs("tasks", level="ERROR"):
                store = JsonTaskStore(path)

            self.assertEqual([], store.list_tasks())

    def test_invalid_entries_are_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "tasks.json"
            path.write_text(
                json.dumps(
                    [
                        {"id": "a", "title": "Keep", "remaining_seconds": 60},
                        {"title": "no id"},
                        "garbage",
                    ]
                ),
                encoding="utf-8",
            )

            store = JsonTaskStore(path)

            self.assertEqual(["a"], [task.id for task in store.list_tasks()])

    def test_write_failure_raises_task_store_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = JsonTaskStore(Path(temp_dir) / "tasks.json")
            with patch("tasks.store.tempfile.mkstemp", side_effect=OSError("read-only")):
                with self.assertRaises(TaskStoreError):
                    store.add_task("Write report")


if __name__ == "__main__":
    unittest.main()
