from typing import Iterable, List

from pyparsing import ParseException, Regex, White, one_of

from handheld.asm_ops import Instruction, make_instruction
from handheld.errors import ParseError


class Parser:
    """Parses program text, one `<opcode> <signed integer>` instruction per line."""

    def __init__(self):
        self.line_number = 0

    def make_integer(self, tokens):
        return int(tokens[0])

    def build_grammar(self):
        opcode = one_of("acc jmp nop")("opcode")
        # Exactly one space; the operand must follow it directly.
        separator = White(" ", exact=1).suppress()
        operand = Regex(r"[+-]?\d+")("operand").leave_whitespace()
        operand.set_parse_action(self.make_integer)
        return opcode + separator + operand

    def parse_line(self, line: str, address: int = 0) -> Instruction:
        self.line_number = address + 1
        text = line.strip()
        try:
            tokens = self.build_grammar().parse_string(text, parse_all=True)
        except ParseException as e:
            raise ParseError(self.line_number, line.rstrip("\r\n"), e.msg) from e
        return make_instruction(tokens["opcode"], tokens["operand"], address)

    def parse_program(self, lines: Iterable[str]) -> List[Instruction]:
        return [self.parse_line(line, address) for address, line in enumerate(lines)]


def parse(line: str, address: int = 0) -> Instruction:
    """Convenience function to parse a single instruction."""
    return Parser().parse_line(line, address)


def parse_program(lines: Iterable[str]) -> List[Instruction]:
    """Convenience function to parse a program. Addresses follow line order."""
    return Parser().parse_program(lines)
