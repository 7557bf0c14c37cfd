# app.py

import argparse
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from config.config_loader import load_config
from logger.logger import JSONLogger
from simulator.trace import TRACE_COLUMNS, row_cells, row_to_dict
from simulator.transition_builder import EncodingOverflow, build_transitions
from simulator.turing_machine import HeadOutOfBounds, StepLimitExceeded, TuringMachine

console = Console()

CONFIG_PATH = Path("config/runtime_config.json")

# === Utilities ===
def load_runtime_config(path=None):
    """Load the given config file, else the default one if present, else built-in defaults."""
    if path is not None:
        return load_config(path)
    if CONFIG_PATH.exists():
        return load_config(str(CONFIG_PATH))
    return load_config(None)

def show_banner():
    console.print("\n[bold cyan]ASCII to Binary Turing Machine[/bold cyan]")
    console.print("Encodes one character into 8 tape cells, one bit per step.\n")

def new_trace_table():
    table = Table(show_header=True, header_style="bold magenta")
    for column in TRACE_COLUMNS:
        table.add_column(column, justify="left", no_wrap=True)
    return table

def encode_and_report(input_char, config, logger=None):
    """Run one machine for ``input_char``, printing the trace table and final tape."""
    transitions, binary = build_transitions(input_char)
    console.print(f"Binary code of '{escape(input_char)}': [bold]{binary}[/bold]")

    table = new_trace_table()
    logged_rows = []

    def report(row):
        table.add_row(*(Text(cell) for cell in row_cells(row)))
        if logger is not None:
            logged_rows.append(row_to_dict(row))

    machine = TuringMachine(transitions)
    try:
        tape = machine.run(on_step=report, max_steps=config["max_steps"])
    finally:
        # a failed run still shows the steps it completed
        console.print(table)

    if machine.halt_reason == "no_instruction":
        console.print("[yellow]Machine halted: no instruction for the current state and symbol.[/yellow]")
    console.print(f"\nFinal tape: [green]{tape}[/green]")

    if logger is not None:
        logger.log_run(input_char, binary, tape, machine)
        logger.log_trace(input_char, logged_rows)

    return tape

def main(argv=None):
    parser = argparse.ArgumentParser(description="ASCII to Binary Turing Machine")
    parser.add_argument("--char", help="Character to encode (skips the prompt)")
    parser.add_argument("--config", help="Path to a runtime config JSON file")
    args = parser.parse_args(argv)

    try:
        config = load_runtime_config(args.config)
    except (FileNotFoundError, ValueError, TypeError) as exc:
        console.print(f"[red]Configuration error: {escape(str(exc))}[/red]")
        return 1

    if config["show_banner"]:
        show_banner()

    if args.char is not None:
        line = args.char
    else:
        # raw line; a lone space is a character
        line = console.input("Enter one character to encode: ")

    if not line:
        console.print("[yellow]No character provided.[/yellow]")
        return 0

    logger = None
    if config["log_runs"]:
        logger = JSONLogger(config["output_directory"], config["log_file_prefix"])

    try:
        encode_and_report(line[0], config, logger)
    except (EncodingOverflow, HeadOutOfBounds, StepLimitExceeded) as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
