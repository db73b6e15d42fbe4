import unittest

from handheld.asm_ops import AccI, JmpI, NopI
from handheld.asm_parser import parse_program
from handheld.errors import NoFixFound
from handheld.interpreter import Terminated, run
from handheld.repair import candidates, find_fix, repair

EXAMPLE = """
nop +0
acc +1
jmp +4
acc +3
jmp -3
acc -99
acc +1
jmp -4
acc +6
""".strip().splitlines()


class TestCandidates(unittest.TestCase):
    def test_skips_acc_and_keeps_order(self):
        program = parse_program(EXAMPLE)
        self.assertEqual([a for a, _ in candidates(program)], [0, 2, 4, 7])

    def test_each_candidate_differs_in_one_place(self):
        program = parse_program(EXAMPLE)
        for address, candidate in candidates(program):
            diff = [i for i in range(len(program)) if program[i] != candidate[i]]
            self.assertEqual(diff, [address])


class TestFindFix(unittest.TestCase):
    def test_example(self):
        self.assertEqual(find_fix(parse_program(EXAMPLE)), (7, 8))

    def test_input_is_not_modified(self):
        program = parse_program(EXAMPLE)
        snapshot = list(program)
        first = find_fix(program)
        self.assertEqual(program, snapshot)
        self.assertEqual(find_fix(program), first)

    def test_workers_give_same_answer(self):
        program = parse_program(EXAMPLE)
        self.assertEqual(find_fix(program, workers=4), (7, 8))

    def test_lowest_address_wins(self):
        # Swapping address 0 ends with 5, swapping address 2 ends with 6.
        program = parse_program(["nop +3", "acc +1", "jmp +0", "acc +5"])
        self.assertEqual(find_fix(program), (0, 5))
        self.assertEqual(find_fix(program, workers=3), (0, 5))

    def test_nop_becomes_jmp(self):
        program = parse_program(["nop +2", "jmp +0", "acc +4"])
        self.assertEqual(find_fix(program), (0, 4))

    def test_faulting_candidates_are_skipped(self):
        # Turning the nop into `jmp -7` faults; the jmp at address 2 is the fix.
        program = parse_program(["nop -7", "acc +2", "jmp -1"])
        self.assertEqual(find_fix(program), (2, 2))

    def test_no_fix(self):
        program = parse_program(["acc +1", "jmp +0", "jmp -1"])
        with self.assertRaises(NoFixFound) as ctx:
            find_fix(program)
        self.assertEqual(ctx.exception.candidates, 2)
        self.assertEqual(ctx.exception.program_length, 3)

    def test_no_candidates(self):
        with self.assertRaises(NoFixFound):
            find_fix([AccI(1, 0)])

    def test_no_fix_with_workers(self):
        program = parse_program(["jmp +0", "jmp -1"])
        with self.assertRaises(NoFixFound):
            find_fix(program, workers=2)


class TestRepair(unittest.TestCase):
    def test_repaired_program_terminates(self):
        program = parse_program(EXAMPLE)
        fixed = repair(program)
        self.assertEqual(fixed[7], NopI(-4, 7))
        self.assertEqual(program[7], JmpI(-4, 7))
        self.assertEqual(run(fixed), Terminated(8, 6))


if __name__ == '__main__':
    unittest.main()
