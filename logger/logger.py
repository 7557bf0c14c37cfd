import json
import os
from datetime import datetime, timezone

from simulator.turing_machine import state_label


class JSONLogger:
    """Appends JSON lines to dated run and trace files in one directory."""

    def __init__(self, output_directory="logs/", log_file_prefix="encoder_"):
        os.makedirs(output_directory, exist_ok=True)
        self.output_directory = output_directory
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.run_log_name = f"{log_file_prefix}{self.today}.jsonl"
        self.trace_log_name = f"trace_{self.today}.jsonl"

    @property
    def current_log(self):
        return os.path.join(self.output_directory, self.run_log_name)

    def _append(self, filename, entries):
        path = os.path.join(self.output_directory, filename)
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    def log(self, entry: dict):
        self._append(self.run_log_name, [entry])

    def log_batch(self, entries: list):
        self._append(self.run_log_name, entries)

    def log_run(self, input_char, binary, tape, machine):
        """Log the outcome of one machine run with the table it executed."""
        self.log({
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "input": input_char,
            "code_point": ord(input_char),
            "binary": binary,
            "tape": tape,
            "steps": machine.steps,
            "final_state": state_label(machine.current_state),
            "halt_reason": machine.halt_reason,
            "matches": tape == binary,
            "transitions": machine.serialize()
        })

    def log_trace(self, input_char, rows: list):
        """Log every trace row of a run, tagged with its input character."""
        self._append(self.trace_log_name, [dict(row, input=input_char) for row in rows])
