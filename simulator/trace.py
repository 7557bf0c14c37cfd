from simulator.turing_machine import state_label

TRACE_COLUMNS = ["Tape with head", "Read", "State", "Operation", "Write", "New state"]
NO_INSTRUCTION = "no instruction"


def tape_with_head(tape, head):
    """Render the tape with the head cell as ``[x]`` and the others as `` x ``."""
    cells = []
    for pos, symbol in enumerate(tape):
        cells.append(f"[{symbol}]" if pos == head else f" {symbol} ")
    return "".join(cells)


def describe_operation(row):
    if row.transition is None:
        return NO_INSTRUCTION
    write, move, next_state = row.transition
    return f"{write},{state_label(next_state)},{move}"


def row_cells(row):
    """Return the six display cells of a trace row, in column order."""
    return [
        tape_with_head(row.tape, row.head),
        row.symbol,
        state_label(row.state),
        describe_operation(row),
        row.written or "",
        "" if row.new_state is None else state_label(row.new_state),
    ]


def row_to_dict(row):
    return {
        "step": row.step,
        "tape": row.tape,
        "head": row.head,
        "read": row.symbol,
        "state": state_label(row.state),
        "operation": describe_operation(row),
        "write": row.written,
        "new_state": None if row.new_state is None else state_label(row.new_state),
    }
