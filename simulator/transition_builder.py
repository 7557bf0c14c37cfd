from simulator.turing_machine import BLANK, FINAL_STATE, RIGHT, STAY, Transition

WORD_SIZE = 8


class EncodingOverflow(ValueError):
    """Raised when a character's code point does not fit in one tape word."""


def to_binary(input_char):
    """Return the zero-padded 8-bit binary string of a single character."""
    if not isinstance(input_char, str) or len(input_char) != 1:
        raise ValueError(f"Expected a single character, got {input_char!r}")
    code_point = ord(input_char)
    if code_point >= 2 ** WORD_SIZE:
        raise EncodingOverflow(
            f"Character {input_char!r} (code point {code_point}) needs more than {WORD_SIZE} bits."
        )
    return format(code_point, f"0{WORD_SIZE}b")


def build_transitions(input_char):
    """Build the encoder's transition table for one character.

    State i reads a blank, writes bit i and moves right into state i + 1.
    The final state keeps a blank self-loop that never moves the head.
    Returns ``(transitions, binary)``.
    """
    binary = to_binary(input_char)
    transitions = {}
    for state, bit in enumerate(binary):
        transitions[(state, BLANK)] = Transition(bit, RIGHT, state + 1)
    transitions[(FINAL_STATE, BLANK)] = Transition(BLANK, STAY, FINAL_STATE)
    return transitions, binary
