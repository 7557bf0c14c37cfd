import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from rich.console import Console

import app
from tools import encode_text, table_inspect


class AppTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.log_dir = Path(self.tmp.name) / "logs"
        self.config_path = Path(self.tmp.name) / "runtime_config.json"
        self.write_config(log_runs=True)

        self.buffer = io.StringIO()
        patcher = mock.patch.object(app, "console", Console(file=self.buffer, width=200, color_system=None))
        patcher.start()
        self.addCleanup(patcher.stop)

    def write_config(self, **overrides) -> None:
        config = {"output_directory": str(self.log_dir), "log_file_prefix": "run_", "show_banner": False}
        config.update(overrides)
        self.config_path.write_text(json.dumps(config), encoding="utf-8")

    def run_app(self, *argv) -> int:
        return app.main(["--config", str(self.config_path), *argv])

    def test_encodes_character_from_flag(self) -> None:
        self.assertEqual(self.run_app("--char", "A"), 0)
        output = self.buffer.getvalue()
        self.assertIn("Binary code of 'A': 01000001", output)
        self.assertIn("Final tape: 01000001", output)
        self.assertIn("[_] _  _  _  _  _  _  _", output)
        self.assertIn("0,q1,R", output)
        self.assertIn("1,q8,R", output)
        for column in ("Tape with head", "Read", "Operation", "New state"):
            self.assertIn(column, output)

    def test_only_first_character_is_used(self) -> None:
        self.assertEqual(self.run_app("--char", "AB"), 0)
        self.assertIn("Final tape: 01000001", self.buffer.getvalue())

    def test_run_is_logged(self) -> None:
        self.run_app("--char", "A")
        run_logs = list(self.log_dir.glob("run_*.jsonl"))
        trace_logs = list(self.log_dir.glob("trace_*.jsonl"))
        self.assertEqual(len(run_logs), 1)
        self.assertEqual(len(trace_logs), 1)
        with open(trace_logs[0], "r", encoding="utf-8") as f:
            rows = [json.loads(line) for line in f]
        self.assertEqual(len(rows), 8)
        self.assertEqual(rows[-1]["new_state"], "q8")

    def test_logging_can_be_disabled(self) -> None:
        self.write_config(log_runs=False)
        self.run_app("--char", "A")
        self.assertFalse(self.log_dir.exists())

    def test_empty_prompt_builds_no_machine(self) -> None:
        with mock.patch("builtins.input", return_value=""), \
                mock.patch.object(app, "TuringMachine") as machine_cls:
            self.assertEqual(self.run_app(), 0)
        machine_cls.assert_not_called()
        self.assertIn("No character provided.", self.buffer.getvalue())

    def test_prompted_character(self) -> None:
        with mock.patch("builtins.input", return_value="0"):
            self.assertEqual(self.run_app(), 0)
        self.assertIn("Final tape: 00110000", self.buffer.getvalue())

    def test_prompted_space_is_encoded(self) -> None:
        with mock.patch("builtins.input", return_value=" "):
            self.assertEqual(self.run_app(), 0)
        output = self.buffer.getvalue()
        self.assertNotIn("No character provided.", output)
        self.assertIn("Final tape: 00100000", output)

    def test_leading_space_is_the_encoded_character(self) -> None:
        with mock.patch("builtins.input", return_value=" A"):
            self.run_app()
        self.assertIn("Final tape: 00100000", self.buffer.getvalue())

    def test_step_limit_keeps_partial_trace(self) -> None:
        self.write_config(max_steps=3)
        self.assertEqual(self.run_app("--char", "A"), 1)
        output = self.buffer.getvalue()
        self.assertIn("0,q1,R", output)
        self.assertIn("0,q3,R", output)
        self.assertNotIn("0,q4,R", output)
        self.assertNotIn("Final tape", output)
        self.assertIn("Error:", output)

    def test_oversized_character_fails(self) -> None:
        self.assertEqual(self.run_app("--char", "€"), 1)
        self.assertIn("Error:", self.buffer.getvalue())

    def test_bad_config_fails(self) -> None:
        self.write_config(max_steps="many")
        self.assertEqual(self.run_app("--char", "A"), 1)
        self.assertIn("Configuration error", self.buffer.getvalue())

    def test_banner(self) -> None:
        self.write_config(show_banner=True, log_runs=False)
        self.run_app("--char", "A")
        self.assertIn("ASCII to Binary Turing Machine", self.buffer.getvalue())


class ToolsTests(unittest.TestCase):
    def test_table_inspect_prints_grid_and_latex(self) -> None:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            self.assertEqual(table_inspect.main(["--char", "A", "--latex"]), 0)
        output = buffer.getvalue()
        self.assertIn("Binary: 01000001", output)
        self.assertIn("q0\t-\t-\t0Rq1", output)
        self.assertIn("q8\t-\t-\t_Nq8", output)
        self.assertIn(r"\begin{array}{c|ccc}", output)

    def test_table_inspect_rejects_oversized_character(self) -> None:
        errors = io.StringIO()
        stdout = io.StringIO()
        with mock.patch.object(table_inspect, "error_console", Console(file=errors, width=200, color_system=None)), \
                redirect_stdout(stdout):
            self.assertEqual(table_inspect.main(["--char", "€"]), 1)
        self.assertIn("Error:", errors.getvalue())
        self.assertIn("needs more than 8 bits", errors.getvalue())
        self.assertEqual(stdout.getvalue(), "")

    def test_encode_text_writes_verified_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, redirect_stdout(io.StringIO()):
            entries, mismatches = encode_text.encode_text("Hi€", output_directory=tmp, log_file_prefix="t_")
            log_files = list(Path(tmp).glob("t_*.jsonl"))
            with open(log_files[0], "r", encoding="utf-8") as f:
                logged = [json.loads(line) for line in f]
        self.assertEqual(mismatches, [])
        self.assertEqual([entry["input"] for entry in entries], ["H", "i"])
        self.assertTrue(all(entry["verified"] for entry in entries))
        self.assertEqual(logged[1]["tape"], "01101001")


if __name__ == "__main__":
    unittest.main()
