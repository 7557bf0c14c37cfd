# tools/encode_text.py

import argparse
import os
from pathlib import Path

from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from logger.logger import JSONLogger
from simulator.evaluator import evaluate_batch

def console_message(msg):
    print(f"[{Path(os.getcwd()).name}] {msg}")

# === Main Encoding Runner ===
def encode_text(text, output_directory="results", log_file_prefix="encoded_", max_steps=1000):
    """
    Encode every character of ``text`` on its own machine, verify the tapes
    and append one result entry per character to a JSON lines log.
    Characters that do not fit in 8 bits are reported and skipped.
    Returns ``(entries, mismatches)``.
    """
    logger = JSONLogger(output_directory, log_file_prefix)
    console_message(f"Encoding {len(text):,} characters...")

    with Progress(
            SpinnerColumn(),
            BarColumn(),
            "[progress.percentage]{task.percentage:>3.0f}%",
            TextColumn("{task.completed}/{task.total} Characters"),
            TimeElapsedColumn()
    ) as progress:

        task = progress.add_task("[cyan]Encoding...", total=len(text))

        results, mismatches, skipped = evaluate_batch(
            text,
            max_steps=max_steps,
            on_char=lambda position: progress.update(task, advance=1)
        )

    for position, error in skipped:
        console_message(f"[WARNING] Skipping position {position}: {error}")

    entries = []
    for position, ch, binary, tape, machine in results:
        entries.append({
            "position": position,
            "input": ch,
            "binary": binary,
            "tape": tape,
            "steps": machine.steps,
            "halt_reason": machine.halt_reason,
            "verified": position not in mismatches
        })

    # === BULK WRITE once per text ===
    logger.log_batch(entries)

    if mismatches:
        console_message(f"[ERROR] {len(mismatches)} tapes disagree with the reference encoding: {mismatches}")
    else:
        console_message(f"[SUCCESS] {len(entries):,} characters encoded. Results saved to {logger.current_log}")

    return entries, mismatches


# === CLI ===
def main(argv=None):
    parser = argparse.ArgumentParser(description="Encode a string one character per Turing machine run.")
    parser.add_argument("--text", required=True, help="Text to encode")
    parser.add_argument("--output", default="results", help="Output directory (default: results)")
    parser.add_argument("--prefix", default="encoded_", help="Result file prefix")
    parser.add_argument("--max_steps", type=int, default=1000, help="Maximum steps per machine")
    args = parser.parse_args(argv)

    _, mismatches = encode_text(args.text, args.output, args.prefix, max_steps=args.max_steps)
    return 1 if mismatches else 0

if __name__ == "__main__":
    raise SystemExit(main())
