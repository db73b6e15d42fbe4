from typing import Sequence

from handheld.asm_ops import Instruction


class Formatter:
    def __init__(self, with_addresses=False):
        self.with_addresses = with_addresses

    def format_instruction(self, instr: Instruction) -> str:
        """Format an instruction as `<opcode> <signed operand>`, optionally prefixed by its address"""
        if self.with_addresses:
            return f"{instr.address:>4}: {instr}"
        return str(instr)

    def format(self, program: Sequence[Instruction]) -> str:
        """Format a whole program, one instruction per line"""
        return "".join(self.format_instruction(instr) + "\n" for instr in program)
