import numpy as np

from simulator.transition_builder import EncodingOverflow, build_transitions
from simulator.turing_machine import TuringMachine


def encode_character(input_char, on_step=None, max_steps=None):
    """Build a fresh machine for ``input_char`` and run it once.

    Returns ``(binary, tape, machine)``; the machine is returned halted so the
    caller can inspect ``halt_reason`` and ``steps``.
    """
    transitions, binary = build_transitions(input_char)
    machine = TuringMachine(transitions)
    tape = machine.run(on_step=on_step, max_steps=max_steps)
    return binary, tape, machine


def expected_bits(text):
    """Reference bit matrix for ``text``: one row of 8 bits per character."""
    codes = np.array([ord(ch) for ch in text], dtype=np.uint8)
    return np.unpackbits(codes.reshape(-1, 1), axis=1)


def tapes_to_bits(tapes):
    # blank cells become 2 so they never match a bit
    cell_values = {"0": 0, "1": 1}
    return np.array([[cell_values.get(cell, 2) for cell in tape] for tape in tapes], dtype=np.uint8).reshape(-1, 8)


def find_mismatches(text, tapes):
    """Indices of characters whose tape disagrees with numpy's bit unpacking."""
    if not tapes:
        return []
    diff = np.any(tapes_to_bits(tapes) != expected_bits(text), axis=1)
    return [int(idx) for idx in np.flatnonzero(diff)]


def evaluate_batch(text, max_steps=None, on_char=None):
    """
    Encode every character of ``text`` on its own machine and compare the
    tapes with numpy's unpacking of the code points.

    Characters that need more than 8 bits are skipped. Returns
    ``(results, mismatches, skipped)``: results are
    ``(position, char, binary, tape, machine)`` tuples, mismatches lists the
    positions whose tape is wrong and skipped holds ``(position, error)``.
    ``on_char`` is called with each position once it has been handled.
    """
    results = []
    skipped = []
    for position, ch in enumerate(text):
        try:
            binary, tape, machine = encode_character(ch, max_steps=max_steps)
        except EncodingOverflow as exc:
            skipped.append((position, exc))
        else:
            results.append((position, ch, binary, tape, machine))
        if on_char is not None:
            on_char(position)

    encoded = "".join(result[1] for result in results)
    tapes = [result[3] for result in results]
    mismatches = [results[idx][0] for idx in find_mismatches(encoded, tapes)]
    return results, mismatches, skipped
