import unittest

from runtime.commands import Command, CommandError, parse_command


class ParseCommandTests(unittest.TestCase):
    def test_blank_line_yields_none(self) -> None:
        self.assertIsNone(parse_command(""))
        self.assertIsNone(parse_command("   \n"))

    def test_command_names_are_case_insensitive(self) -> None:
        self.assertEqual(Command("start"), parse_command("START\n"))

    def test_argument_keeps_inner_spacing(self) -> None:
        self.assertEqual(
            Command("add", "Write the  report"),
            parse_command("add   Write the  report  "),
        )

    def test_aliases_map_to_commands(self) -> None:
        self.assertEqual(Command("quit"), parse_command("exit"))
        self.assertEqual(Command("list"), parse_command("ls"))
        self.assertEqual(Command("delete", "2"), parse_command("rm 2"))

    def test_unknown_command_raises(self) -> None:
        with self.assertRaises(CommandError):
            parse_command("launch")

    def test_missing_argument_raises(self) -> None:
        for line in ("select", "add", "delete", "done"):
            with self.subTest(line=line):
                with self.assertRaises(CommandError):
                    parse_command(line)

    def test_unexpected_argument_raises(self) -> None:
        with self.assertRaises(CommandError):
            parse_command("pause now")


if __name__ == "__main__":
    unittest.main()
