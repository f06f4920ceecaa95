import tempfile
import unittest
from pathlib import Path

from server import UIServer, UIServerConfig
from server.service import _StaticRoutes


class UIServerPublishTests(unittest.TestCase):
    def test_publish_before_start_keeps_sticky_events(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            index = Path(temp_dir) / "index.html"
            index.write_text("<html></html>", encoding="utf-8")
            server = UIServer(UIServerConfig(index_file=str(index)))

            server.publish("timer", remaining_seconds=1500)
            server.publish("hello", state="idle")
            server.publish_state("paused", message="Work paused")

            self.assertFalse(server.is_running)
            self.assertEqual(1500, server.latest_event("timer")["remaining_seconds"])
            self.assertIsNone(server.latest_event("hello"))
            state = server.latest_event("state_update")
            self.assertEqual("paused", state["state"])
            self.assertEqual("Work paused", state["message"])

    def test_stop_without_start_is_a_no_op(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            index = Path(temp_dir) / "index.html"
            index.write_text("<html></html>", encoding="utf-8")
            server = UIServer(UIServerConfig(index_file=str(index)))

            server.stop()

            self.assertFalse(server.is_running)


class StaticRoutesTests(unittest.TestCase):
    def test_index_and_root_serve_page(self) -> None:
        routes = _StaticRoutes(b"<html>timer</html>")

        for path in ("/", "/index.html"):
            with self.subTest(path=path):
                response = routes.respond(path)
                self.assertEqual(200, response.status_code)
                self.assertEqual(b"<html>timer</html>", response.body)
                self.assertEqual("no-store", response.headers["Cache-Control"])

    def test_healthz_and_unknown_paths(self) -> None:
        routes = _StaticRoutes(b"")

        self.assertEqual(b"ok\n", routes.respond("/healthz").body)
        missing = routes.respond("/favicon.ico")
        self.assertEqual(404, missing.status_code)
        self.assertEqual("text/plain; charset=utf-8", missing.headers["Content-Type"])


if __name__ == "__main__":
    unittest.main()
