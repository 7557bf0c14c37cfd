import argparse

from rich.console import Console
from rich.markup import escape

from simulator.transition_builder import EncodingOverflow, build_transitions
from simulator.turing_machine import ALPHABET, FINAL_STATE, INITIAL_STATE, state_label

error_console = Console(stderr=True)


def format_action(transition):
    """Compact ``<write><move><next state>`` notation, e.g. ``0Rq1``."""
    if transition is None:
        return "-"
    write, move, next_state = transition
    return f"{write}{move}{state_label(next_state)}"


def transition_grid(transitions):
    """Rows of ``[state, action per symbol...]`` for every state q0..q8."""
    grid = []
    for state in range(INITIAL_STATE, FINAL_STATE + 1):
        row = [state_label(state)]
        for symbol in ALPHABET:
            row.append(format_action(transitions.get((state, symbol))))
        grid.append(row)
    return grid


def pretty_print_transitions(transitions, latex=False):
    """Pretty print the table as a state x symbol grid, optionally as LaTeX too."""
    grid = transition_grid(transitions)

    # === Terminal Human-Readable Table ===
    print("\n=== Transition Table ===")
    print("\t".join([" "] + list(ALPHABET)))
    for row in grid:
        print("\t".join(row))

    if not latex:
        return

    # === LaTeX Table Output ===
    print("\n=== LaTeX Table ===")
    print(r"\begin{array}{c|" + "c" * len(ALPHABET) + "}")
    print("State/Symbol & " + " & ".join([f"\\text{{{s}}}".replace("_", r"\_") for s in ALPHABET]) + r" \\ \hline")
    for row in grid:
        print(" & ".join(cell.replace("_", r"\_") for cell in row) + r" \\")
    print(r"\end{array}")

def main(argv=None):
    parser = argparse.ArgumentParser(description="Transition table inspector")
    parser.add_argument("--char", required=True, help="Character whose encoder table to print")
    parser.add_argument("--latex", action="store_true", help="Also print the table as a LaTeX array")
    args = parser.parse_args(argv)
    if not args.char:
        parser.error("--char must not be empty")

    try:
        transitions, binary = build_transitions(args.char[0])
    except EncodingOverflow as exc:
        error_console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1
    print(f"[INFO] Character {args.char[0]!r}")
    print(f"  Code point: {ord(args.char[0])}")
    print(f"  Binary: {binary}")
    pretty_print_transitions(transitions, latex=args.latex)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
