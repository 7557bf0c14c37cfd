from collections import namedtuple
from dataclasses import dataclass
from typing import List, Optional

BLANK = "_"
ALPHABET = ("0", "1", BLANK)

LEFT = "L"
RIGHT = "R"
STAY = "N"
HEAD_MOVES = {LEFT: -1, RIGHT: 1, STAY: 0}

TAPE_SIZE = 8
INITIAL_STATE = 0
FINAL_STATE = 8

Transition = namedtuple("Transition", ["write", "move", "next_state"])


class HeadOutOfBounds(IndexError):
    """Raised when the head has to read a cell outside the fixed tape."""


class StepLimitExceeded(RuntimeError):
    """Raised when a run exceeds the caller's step budget."""


def state_label(state):
    return f"q{state}"


@dataclass(frozen=True)
class TraceRow:
    step: int
    tape: str
    head: int
    symbol: str
    state: int
    transition: Optional[Transition]

    @property
    def written(self):
        return None if self.transition is None else self.transition.write

    @property
    def new_state(self):
        return None if self.transition is None else self.transition.next_state


class TuringMachine:
    def __init__(self, transitions=None, tape_size=TAPE_SIZE):
        self.tape_size = tape_size
        self.transitions = {}
        for (state, symbol), transition in (transitions or {}).items():
            self.add_transition(state, symbol, *transition)
        self.tape: List[str] = []
        self.reset()

    def add_transition(self, state, symbol, new_symbol, direction, new_state):
        if symbol not in ALPHABET or new_symbol not in ALPHABET:
            raise ValueError(f"Symbols must be one of {ALPHABET}, got {symbol!r} -> {new_symbol!r}")
        if direction not in HEAD_MOVES:
            raise ValueError(f"Unknown head move {direction!r}")
        self.transitions[(state, symbol)] = Transition(new_symbol, direction, new_state)

    def remove_transition(self, state, symbol):
        del self.transitions[(state, symbol)]

    def reset(self):
        self.tape = [BLANK] * self.tape_size
        self.head = 0
        self.current_state = INITIAL_STATE
        self.steps = 0
        self.halted = False
        self.halt_reason = None

    def step(self) -> Optional[TraceRow]:
        """Execute one transition and return its trace row.

        A missing transition halts the machine and yields a row whose
        ``transition`` is ``None``; the tape and state are left as they are.
        """
        if self.halted:
            return None
        if not 0 <= self.head < self.tape_size:
            raise HeadOutOfBounds(
                f"Head at {self.head} is outside the tape (0..{self.tape_size - 1}) in state {state_label(self.current_state)}"
            )
        symbol = self.tape[self.head]
        transition = self.transitions.get((self.current_state, symbol))
        self.steps += 1
        row = TraceRow(
            step=self.steps,
            tape=self.tape_string(),
            head=self.head,
            symbol=symbol,
            state=self.current_state,
            transition=transition,
        )
        if transition is None:
            self.halted = True
            self.halt_reason = "no_instruction"
            return row

        self.tape[self.head] = transition.write
        self.head += HEAD_MOVES[transition.move]
        self.current_state = transition.next_state
        if self.current_state == FINAL_STATE:
            self.halted = True
            self.halt_reason = "final"
        return row

    def run(self, on_step=None, max_steps=None):
        """Step until the final state or a missing transition; return the tape.

        Without ``max_steps`` the loop only ends through one of those two
        conditions, so a table that cycles outside the final state never halts.
        """
        while not self.halted and self.current_state != FINAL_STATE:
            if max_steps is not None and self.steps >= max_steps:
                raise StepLimitExceeded(f"Machine exceeded {max_steps} steps in state {state_label(self.current_state)}")
            row = self.step()
            if on_step is not None:
                on_step(row)
        return self.tape_string()

    def tape_string(self):
        return "".join(self.tape)

    def serialize(self):
        """Return the transition table as JSON-friendly rows sorted by key."""
        rows = []
        for (state, symbol), (write, move, next_state) in sorted(self.transitions.items()):
            rows.append({
                "state": state_label(state),
                "read": symbol,
                "write": write,
                "move": move,
                "next_state": state_label(next_state),
            })
        return rows
