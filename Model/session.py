import logging

from Model import parameters
from Model.crossbar_model import RRAM_Crossbar_Read_Model
from Model.gate_catalog import comparison_stats, compute_truth, get_gate
from Model.gate_replay import Gate_Replay
from Model.logic_engine import MPU_Simulator

logger = logging.getLogger(__name__)


class Simulator_Session:
    """
    One view's worth of simulator state: the mMPU grid, the 4x4 crossbar and
    the replay that animates the grid. Renderers hold a session and call
    `derive_state()` after every input change.
    """

    def __init__(self, gate="NOT", v_drive=parameters.V_DRIVE, step_delay=parameters.STEP_DELAY,
                 sleep=None, crossbar=None):
        self.sim = MPU_Simulator()
        self.crossbar = crossbar if crossbar is not None else RRAM_Crossbar_Read_Model(v_drive=v_drive)
        self.replay = Gate_Replay(self.sim, step_delay=step_delay, sleep=sleep)
        self.v_drive = v_drive
        self.inputs = {"A": 0, "B": 0}
        self.selected_gate = None
        self.select_gate(gate)

    def select_gate(self, name):
        gate = get_gate(name)
        if gate is None:
            return False
        self.replay.clear()
        self.selected_gate = gate.name
        self.sim.reset_grid(gate.rows, gate.cols)
        return True

    def reset(self):
        self.replay.clear()
        self.sim.reset_grid(self.sim.rows, self.sim.cols)

    def set_inputs(self, a, b=0):
        self.inputs = {"A": 1 if a else 0, "B": 1 if b else 0}

    def toggle_input(self, name):
        if name not in self.inputs:
            logger.warning("Unknown input %r", name)
            return
        self.inputs[name] = 0 if self.inputs[name] else 1

    def set_v_drive(self, v_drive):
        if v_drive < 0:
            raise ValueError(f"drive voltage must be non-negative, got {v_drive}")
        self.v_drive = v_drive

    def toggle_cell(self, r, c):
        self.sim.set_state(r, c, 0 if self.sim.get_state(r, c) else 1)

    def toggle_crossbar_cell(self, r, c):
        self.crossbar.toggle_cell_resistance(r, c)

    def toggle_selector(self, r, c):
        self.crossbar.toggle_selector(r, c)

    def run_gate(self, on_step=None):
        """Animate the selected gate and mirror each step onto the crossbar."""
        a, b = self.inputs["A"], self.inputs["B"]
        gate = get_gate(self.selected_gate)
        r, c = gate.output_cell

        def _mirror(step):
            self.crossbar.load_logic_pattern(a, b, step.snapshot[(r, c)])
            if on_step is not None:
                on_step(step)

        output = self.replay.run(self.selected_gate, a, b, on_step=_mirror)
        if output is not None:
            self.crossbar.load_logic_pattern(a, b, output)
        return output

    def derive_state(self):
        a, b = self.inputs["A"], self.inputs["B"]
        result = self.crossbar.run(a, b, v_drive=self.v_drive)
        return {
            "gate": self.selected_gate,
            "inputs": dict(self.inputs),
            "output": compute_truth(self.selected_gate, a, b),
            "grid": self.sim.snapshot(),
            "rows": self.sim.rows,
            "cols": self.sim.cols,
            "instruction_log": self.replay.instruction_log(),
            "crossbar": result,
            "crossbar_output": result.output,
            "stats": comparison_stats(self.selected_gate),
        }
