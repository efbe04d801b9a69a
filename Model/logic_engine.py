import logging
import time
from collections import namedtuple
from types import MappingProxyType

import numpy as np

logger = logging.getLogger(__name__)

Instruction = namedtuple("Instruction", ["op", "args"])
Instruction.__new__.__defaults__ = ((),)

History_Entry = namedtuple("History_Entry", ["op", "t", "val", "a", "b"])
History_Entry.__new__.__defaults__ = (None, None)


class Cell_Address_Error(IndexError):
    pass


class Memristor_Cell:
    """Binary memristor: LRS -> logic 1, HRS -> logic 0."""

    __slots__ = ("state", "history")

    def __init__(self):
        self.state = 0
        self.history = []

    def record(self, op, a=None, b=None):
        self.history.append(History_Entry(op, time.time(), self.state, a, b))


class MPU_Simulator:
    """
    Emulates the mMPU instruction set (MNOT, MNOR, ISO, COM, JSET, JRES)
    on a small grid of binary memristors.

    Only MNOT and MNOR change cell state. The control ops are kept so an
    instruction log reads like a real mMPU sequence.
    """

    def __init__(self, rows=2, cols=4):
        self.rows = 0
        self.cols = 0
        self.cells = {}
        self.reset_grid(rows, cols)

        self._ops = {
            "MNOT": (self.mnot, 1),
            "MNOR": (self.mnor, 3),
            "ISO": (self.iso, 0),
            "COM": (self.com, 0),
            "JSET": (self.jset, 0),
            "JRES": (self.jres, 0),
        }

    def _cell(self, r, c):
        if not (0 <= r < self.rows and 0 <= c < self.cols):
            raise Cell_Address_Error(f"cell ({r}, {c}) outside {self.rows}x{self.cols} grid")
        return self.cells[(r, c)]

    def reset_grid(self, rows, cols):
        self.cells.clear()
        self.rows = rows
        self.cols = cols
        for r in range(rows):
            for c in range(cols):
                self.cells[(r, c)] = Memristor_Cell()

    def set_state(self, r, c, value):
        m = self._cell(r, c)
        m.state = 1 if value else 0
        m.record("SET")

    def get_state(self, r, c):
        return self._cell(r, c).state

    def history(self, r, c):
        return tuple(self._cell(r, c).history)

    # --- Logic ops ---
    def mnot(self, target):
        m = self._cell(*target)
        m.state = 0 if m.state else 1
        m.record("MNOT")
        return m.state

    def mnor(self, target, a, b):
        va = self._cell(*a).state
        vb = self._cell(*b).state
        m = self._cell(*target)
        m.state = 0 if (va or vb) else 1
        m.record("MNOR", va, vb)
        return m.state

    # --- Control ops (no state change) ---
    def iso(self):
        pass

    def com(self):
        pass

    def jset(self):
        pass

    def jres(self):
        pass

    def execute(self, instruction):
        """Apply one instruction. Unknown or malformed ones leave the grid untouched."""
        entry = self._ops.get(instruction.op)
        if entry is None:
            logger.warning("Unknown op-code %r ignored", instruction.op)
            return None
        fn, n_args = entry
        args = tuple(instruction.args or ())
        if len(args) != n_args:
            logger.warning("%s expects %d operands, got %d; ignored", instruction.op, n_args, len(args))
            return None
        for coord in args:
            if not (isinstance(coord, tuple) and len(coord) == 2 and all(isinstance(v, int) for v in coord)):
                logger.warning("%s operand %r is not a (row, col) pair; ignored", instruction.op, coord)
                return None
            if not (0 <= coord[0] < self.rows and 0 <= coord[1] < self.cols):
                logger.warning("%s operand %s outside %dx%d grid; ignored",
                               instruction.op, coord, self.rows, self.cols)
                return None
        return fn(*args)

    def snapshot(self):
        return MappingProxyType({k: m.state for k, m in self.cells.items()})

    def as_array(self):
        grid = np.zeros((self.rows, self.cols), dtype=int)
        for (r, c), m in self.cells.items():
            grid[r, c] = m.state
        return grid
