class HandheldError(Exception):
    """Base class for interpreter and repair errors."""
    pass


class ParseError(HandheldError):
    """Raised when a line is not a valid `<opcode> <signed integer>` instruction."""
    def __init__(self, line_number: int, text: str, reason: str = ""):
        self.line_number = line_number
        self.text = text
        self.reason = reason
        super().__init__(f"Line {line_number}: cannot parse {text!r}" + (f" ({reason})" if reason else ""))


class AddressFault(HandheldError):
    """Raised when the program counter leaves [0, n] other than by landing exactly on n."""
    def __init__(self, instruction, state, target: int):
        self.instruction = instruction
        self.state = state
        self.target = target
        super().__init__(
            f"Address fault at {instruction.address}: `{instruction}` moved pc from {state.pc} to {target} "
            f"(accumulator {state.accumulator})"
        )


class NoFixFound(HandheldError):
    """Raised when no single jmp/nop swap makes the program terminate."""
    def __init__(self, program_length: int, candidates: int):
        self.program_length = program_length
        self.candidates = candidates
        super().__init__(
            f"No single jmp/nop swap terminates the program ({candidates} candidates tried, {program_length} instructions)"
        )
