from dataclasses import dataclass
from typing import ClassVar, Dict, Type


@dataclass(frozen=True)
class MachineState:
    pc: int = 0
    accumulator: int = 0

    def advance(self, shift: int = 1, delta: int = 0) -> "MachineState":
        return MachineState(self.pc + shift, self.accumulator + delta)


@dataclass(frozen=True)
class Instruction:
    """One program instruction. `address` is its 0-based position in the program."""
    opcode: ClassVar[str] = ""

    operand: int
    address: int = 0

    def apply(self, state: MachineState) -> MachineState:
        raise ValueError(f"Unsupported instruction: {self}")

    def swapped(self) -> "Instruction":
        return self

    def __str__(self):
        return f"{self.opcode} {self.operand:+d}"


@dataclass(frozen=True)
class AccI(Instruction):
    opcode: ClassVar[str] = "acc"

    def apply(self, state: MachineState) -> MachineState:
        return state.advance(delta=self.operand)


@dataclass(frozen=True)
class JmpI(Instruction):
    opcode: ClassVar[str] = "jmp"

    def apply(self, state: MachineState) -> MachineState:
        return state.advance(shift=self.operand)

    def swapped(self) -> Instruction:
        return NopI(self.operand, self.address)


@dataclass(frozen=True)
class NopI(Instruction):
    opcode: ClassVar[str] = "nop"

    def apply(self, state: MachineState) -> MachineState:
        return state.advance()

    def swapped(self) -> Instruction:
        return JmpI(self.operand, self.address)


OPCODES: Dict[str, Type[Instruction]] = {cls.opcode: cls for cls in (AccI, JmpI, NopI)}


def make_instruction(opcode: str, operand: int, address: int = 0) -> Instruction:
    try:
        cls = OPCODES[opcode]
    except KeyError:
        raise ValueError(f"Unsupported opcode: {opcode}") from None
    return cls(operand, address)


def swap_opcode(instr: Instruction) -> Instruction:
    """Exchanges jmp and nop; acc instructions are returned unchanged."""
    return instr.swapped()
