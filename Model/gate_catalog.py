"""
Gate definitions for the mMPU demo.

Each gate maps onto a tiny row of memristors: input A at (0,0), input B at
(0,1), scratch cells after that and one output cell. The instruction
sequences are what the log shows; the truth functions decide the output.
"""
import logging
from collections import namedtuple
from types import MappingProxyType

from Model.logic_engine import Instruction

logger = logging.getLogger(__name__)

Gate_Definition = namedtuple(
    "Gate_Definition",
    ["name", "description", "rows", "cols", "n_inputs", "output_cell", "instruction_sequence", "truth"],
)


def _not_sequence(inputs):
    return (
        Instruction("ISO"),
        Instruction("MNOT", ((0, 2),)),
    )


def _and_sequence(inputs):
    return (
        Instruction("ISO"),
        Instruction("MNOT", ((0, 1),)),
        Instruction("MNOT", ((0, 2),)),
        Instruction("MNOR", ((0, 3), (0, 1), (0, 2))),
    )


def _or_sequence(inputs):
    return (
        Instruction("ISO"),
        Instruction("MNOR", ((0, 3), (0, 0), (0, 1))),
        Instruction("MNOT", ((0, 3),)),
    )


def _nand_sequence(inputs):
    return (
        Instruction("ISO"),
        Instruction("MNOT", ((0, 1),)),
        Instruction("MNOT", ((0, 2),)),
        Instruction("MNOR", ((0, 3), (0, 1), (0, 2))),
        Instruction("MNOT", ((0, 4),)),
    )


def _xnor_core(inputs):
    # n1 = NOR(A,B), n2 = NOR(A,n1), n3 = NOR(B,n1)  ->  XNOR = NOR(n2,n3)
    return (
        Instruction("ISO"),
        Instruction("MNOR", ((1, 0), (0, 0), (0, 1))),
        Instruction("MNOR", ((1, 1), (0, 0), (1, 0))),
        Instruction("MNOR", ((1, 2), (0, 1), (1, 0))),
    )


def _xor_sequence(inputs):
    return _xnor_core(inputs) + (
        Instruction("MNOR", ((1, 3), (1, 1), (1, 2))),
        Instruction("MNOR", ((0, 3), (1, 3), (1, 3))),
        Instruction("COM"),
    )


def _xnor_sequence(inputs):
    return _xnor_core(inputs) + (
        Instruction("MNOR", ((0, 3), (1, 1), (1, 2))),
        Instruction("COM"),
    )


GATES = {
    "NOT": Gate_Definition("NOT", "Inverts the input: output = !A", 1, 3, 1, (0, 2),
                           _not_sequence, lambda a, b=0: 0 if a else 1),
    "AND": Gate_Definition("AND", "A AND B", 1, 4, 2, (0, 3),
                           _and_sequence, lambda a, b: 1 if (a and b) else 0),
    "OR": Gate_Definition("OR", "A OR B", 1, 4, 2, (0, 3),
                          _or_sequence, lambda a, b: 1 if (a or b) else 0),
    "NAND": Gate_Definition("NAND", "NOT (A AND B)", 1, 5, 2, (0, 4),
                            _nand_sequence, lambda a, b: 0 if (a and b) else 1),
    "XOR": Gate_Definition("XOR", "(A XOR B)", 2, 4, 2, (0, 3),
                           _xor_sequence, lambda a, b: 1 if (bool(a) != bool(b)) else 0),
    "XNOR": Gate_Definition("XNOR", "NOT (A XOR B)", 2, 4, 2, (0, 3),
                            _xnor_sequence, lambda a, b: 0 if (bool(a) != bool(b)) else 1),
}

# CPU vs mMPU/PIM figures from the thesis slides: energy in nJ, cycles, temp rise in °C.
COMPARISON_STATS = {
    "NOT": {"cpuEnergy": 4.7e6, "pimEnergy": 2.3e3, "cpuCycles": 55, "pimCycles": 6, "cpuTemp": 15.2, "pimTemp": 0.8},
    "AND": {"cpuEnergy": 6.8e6, "pimEnergy": 6.8e3, "cpuCycles": 79, "pimCycles": 18, "cpuTemp": 18.5, "pimTemp": 1.5},
    "OR": {"cpuEnergy": 6.3e6, "pimEnergy": 4.5e3, "cpuCycles": 73, "pimCycles": 12, "cpuTemp": 17.1, "pimTemp": 1.2},
    "NAND": {"cpuEnergy": 7.3e6, "pimEnergy": 9.1e3, "cpuCycles": 85, "pimCycles": 24, "cpuTemp": 19.8, "pimTemp": 2.4},
    "XOR": {"cpuEnergy": 8.4e6, "pimEnergy": 1.4e4, "cpuCycles": 97, "pimCycles": 36, "cpuTemp": 22.4, "pimTemp": 3.8},
    "XNOR": {"cpuEnergy": 6.3e6, "pimEnergy": 1.6e4, "cpuCycles": 73, "pimCycles": 42, "cpuTemp": 16.9, "pimTemp": 4.2},
}


def get_gate(name):
    gate = GATES.get(name)
    if gate is None:
        logger.warning("Unknown gate %r", name)
    return gate


def compute_truth(name, a, b=0):
    """Reference output of gate `name`, or None for an unknown gate."""
    gate = get_gate(name)
    if gate is None:
        return None
    return gate.truth(1 if a else 0, 1 if b else 0)


def truth_table(name):
    gate = get_gate(name)
    if gate is None:
        return []
    return [(a, b, gate.truth(a, b)) for a in (0, 1) for b in (0, 1)]


def comparison_stats(name):
    stats = COMPARISON_STATS.get(name)
    return MappingProxyType(stats) if stats is not None else None
