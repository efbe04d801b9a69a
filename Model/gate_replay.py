"""
Step-by-step replay of a gate's instruction sequence.

The replay is a small state machine (IDLE -> RUNNING -> DONE, or CANCELLED)
driven one instruction per tick. Every `start` bumps a run generation so a
tick scheduled by an earlier run is dropped instead of touching the new grid.
"""
import logging
import time
from collections import namedtuple

from Model import parameters
from Model.gate_catalog import get_gate

logger = logging.getLogger(__name__)

IDLE = "IDLE"
RUNNING = "RUNNING"
DONE = "DONE"
CANCELLED = "CANCELLED"

Replay_Step = namedtuple("Replay_Step", ["index", "instruction", "snapshot"])


class Gate_Replay:
    def __init__(self, sim, step_delay=parameters.STEP_DELAY, sleep=None):
        self.sim = sim
        self.step_delay = step_delay
        self.sleep = sleep if sleep is not None else time.sleep

        self.state = IDLE
        self.generation = 0
        self.gate = None
        self.inputs = (0, 0)
        self.instructions = ()
        self.steps = []
        self.active_index = None
        self.replayed_output = None
        self.output = None

    def start(self, gate_name, a, b=0):
        gate = get_gate(gate_name)
        if gate is None:
            return False

        self.generation += 1
        self.gate = gate
        self.inputs = (1 if a else 0, 1 if b else 0)
        self.steps = []
        self.active_index = None
        self.replayed_output = None
        self.output = None

        self.sim.reset_grid(gate.rows, gate.cols)
        self.sim.set_state(0, 0, self.inputs[0])
        if gate.n_inputs > 1:
            self.sim.set_state(0, 1, self.inputs[1])

        self.instructions = tuple(gate.instruction_sequence({"A": self.inputs[0], "B": self.inputs[1]}))
        self.state = RUNNING
        if not self.instructions:
            self._finish()
        logger.debug("replay #%d: %s A=%d B=%d, %d instructions",
                     self.generation, gate.name, self.inputs[0], self.inputs[1], len(self.instructions))
        return True

    def tick(self, generation=None):
        """Apply the next instruction. Returns the Replay_Step, or None if nothing ran."""
        if generation is not None and generation != self.generation:
            logger.debug("stale tick for replay #%d dropped (current #%d)", generation, self.generation)
            return None
        if self.state != RUNNING:
            return None

        index = len(self.steps)
        instruction = self.instructions[index]
        self.sim.execute(instruction)
        step = Replay_Step(index, instruction, self.sim.snapshot())
        self.steps.append(step)
        self.active_index = index

        if index == len(self.instructions) - 1:
            self._finish()
        return step

    def _finish(self):
        r, c = self.gate.output_cell
        # 1. Read what the replay left behind
        self.replayed_output = self.sim.get_state(r, c)
        # 2. Commit the reference result to the output cell
        self.sim.set_state(r, c, self.gate.truth(*self.inputs))
        self.output = self.sim.get_state(r, c)
        self.state = DONE

    def cancel(self):
        if self.state == RUNNING:
            self.state = CANCELLED
            logger.debug("replay #%d cancelled at step %s", self.generation, self.active_index)

    def clear(self):
        """Drop the current run and its log; ticks still in flight become stale."""
        self.cancel()
        self.generation += 1
        self.state = IDLE
        self.gate = None
        self.instructions = ()
        self.steps = []
        self.active_index = None
        self.replayed_output = None
        self.output = None

    def run(self, gate_name, a, b=0, on_step=None):
        if not self.start(gate_name, a, b):
            return None
        generation = self.generation
        while self.state == RUNNING and generation == self.generation:
            step = self.tick(generation)
            if step is None:
                break
            if on_step is not None:
                on_step(step)
            self.sleep(self.step_delay)
        return self.output if generation == self.generation else None

    def instruction_log(self):
        return [
            {"idx": i, "op": ins.op, "args": ins.args, "active": i == self.active_index}
            for i, ins in enumerate(self.instructions)
        ]
