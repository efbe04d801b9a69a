import logging
from collections import namedtuple

import numpy as np

from Model import parameters

logger = logging.getLogger(__name__)

Crossbar_Result = namedtuple("Crossbar_Result", ["currents", "bl_totals", "output", "driven", "v_drive"])


class RRAM_Crossbar_Read_Model:
    def __init__(self, r_lrs=parameters.R_LRS, r_hrs=parameters.R_HRS, v_drive=parameters.V_DRIVE,
                 threshold_ratio=parameters.THRESHOLD_RATIO, ref_column=parameters.REF_COLUMN,
                 array_size=parameters.ARRAY_SIZE):
        # --- 1. System Parameters ---
        self.v_drive = v_drive  # Default WL drive voltage (V)
        self.array_size = tuple(array_size)  # 1T1R crossbar (WL x BL)
        self.ref_column = ref_column  # BL sensed for the logic readout

        # --- 2. Device Physical Parameters ---
        self.r_lrs = r_lrs  # Low Resistance State (logic 1)
        self.r_hrs = r_hrs  # High Resistance State (logic 0)
        self.g_lrs = 1 / self.r_lrs
        self.g_hrs = 1 / self.r_hrs

        # --- 3. Sense Threshold ---
        self.threshold_ratio = threshold_ratio

        # --- 4. Cell State: every cell HRS with its selector (1T) on ---
        self.lrs_mask = np.zeros(self.array_size, dtype=bool)
        self.selector = np.ones(self.array_size, dtype=bool)

    # --- Cell programming ---
    def _check(self, r, c):
        rows, cols = self.array_size
        if not (0 <= r < rows and 0 <= c < cols):
            raise IndexError(f"cell ({r}, {c}) outside {rows}x{cols} crossbar")

    def set_cell_resistance(self, r, c, level):
        self._check(r, c)
        if level not in parameters.LEVELS:
            raise ValueError(f"unknown resistance level {level!r}, expected one of {parameters.LEVELS}")
        self.lrs_mask[r, c] = level == parameters.LEVEL_LOW

    def cell_resistance(self, r, c):
        self._check(r, c)
        return parameters.LEVEL_LOW if self.lrs_mask[r, c] else parameters.LEVEL_HIGH

    def toggle_cell_resistance(self, r, c):
        self._check(r, c)
        self.lrs_mask[r, c] = not self.lrs_mask[r, c]

    def set_selector(self, r, c, enabled):
        self._check(r, c)
        self.selector[r, c] = bool(enabled)

    def toggle_selector(self, r, c):
        self._check(r, c)
        self.selector[r, c] = not self.selector[r, c]

    def load_logic_pattern(self, a, b, output):
        """
        Map a gate's logic values onto the array:
        A -> (0,0), B -> (0,1), output -> (1,0), logic 1 stored as LRS.
        Every other cell is parked in HRS and all selectors are switched on.
        """
        self.lrs_mask[:, :] = False
        self.selector[:, :] = True
        self.lrs_mask[0, 0] = bool(a)
        self.lrs_mask[0, 1] = bool(b)
        self.lrs_mask[1, 0] = bool(output)

    # --- Read path ---
    def conductance_matrix(self):
        """G_rc = 1/R_lrs or 1/R_hrs; a cell whose selector is off conducts nothing."""
        g = np.where(self.lrs_mask, self.g_lrs, self.g_hrs)
        return np.where(self.selector, g, 0.0)

    def drive_rows(self, a, b):
        """WL0 = A, WL1 = B; WL2 (reference) and WL3 (program) stay undriven for reads."""
        driven = np.zeros(self.array_size[0], dtype=bool)
        driven[0] = bool(a)
        driven[1] = bool(b)
        return driven

    def compute_currents(self, driven_rows, v_drive):
        """
        I_rc = (V_wl - V_bl) * G_rc with every BL held at 0 V.
        Each BL total is the sum over all rows, so currents through
        non-addressed cells (sneak paths) land on the same column.
        """
        if v_drive < 0:
            raise ValueError(f"drive voltage must be non-negative, got {v_drive}")
        driven_rows = np.asarray(driven_rows, dtype=bool)
        if driven_rows.shape != (self.array_size[0],):
            raise ValueError(f"expected {self.array_size[0]} row flags, got shape {driven_rows.shape}")

        v_wl = np.where(driven_rows, v_drive, 0.0)
        currents = v_wl[:, np.newaxis] * self.conductance_matrix()
        bl_totals = currents.sum(axis=0)
        return currents, bl_totals

    def threshold(self, v_drive):
        return self.threshold_ratio * v_drive / self.r_lrs

    def readout(self, bl_totals, v_drive):
        """Logic 1 only when the reference BL current is strictly above the threshold."""
        return 1 if bl_totals[self.ref_column] > self.threshold(v_drive) else 0

    def column_breakdown(self, currents, column, addressed_row):
        """Split a BL total into (addressed cell current, sneak current from every other row)."""
        col = np.asarray(currents)[:, column]
        signal = col[addressed_row]
        return signal, col.sum() - signal

    def run(self, a, b, v_drive=None, verbose=False):
        if v_drive is None:
            v_drive = self.v_drive

        # 1. WL drive
        driven = self.drive_rows(a, b)

        # 2. Array read
        currents, bl_totals = self.compute_currents(driven, v_drive)

        # 3. Sense
        output = self.readout(bl_totals, v_drive)

        logger.debug("crossbar read A=%s B=%s V=%.3f -> BL%d=%.3e, out=%d",
                     a, b, v_drive, self.ref_column, bl_totals[self.ref_column], output)

        if verbose:
            signal, sneak = self.column_breakdown(currents, self.ref_column, 0)
            print("-" * 50)
            print(f"Driven WLs: {driven.astype(int)}")
            print(f"Cell currents (A):\n{currents}")
            print(f"BL totals (A): {bl_totals}")
            print(f"BL{self.ref_column} signal/sneak (A): {signal:.3e} / {sneak:.3e}")
            print(f"Threshold (A): {self.threshold(v_drive):.3e}")
            print(f"Readout: {output}")

        return Crossbar_Result(currents, bl_totals, output, driven, v_drive)
