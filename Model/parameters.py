# --- Device parameters (Ohms) ---
R_LRS = 1e3  # Low Resistance State (logic 1)
R_HRS = 1e6  # High Resistance State (logic 0)

# --- Read parameters ---
V_DRIVE = 1.0  # WL drive voltage (V)
THRESHOLD_RATIO = 0.35  # fraction of V_DRIVE / R_LRS on the reference BL
REF_COLUMN = 0
ARRAY_SIZE = (4, 4)  # 4x4 1T1R crossbar

# --- Replay ---
STEP_DELAY = 0.35  # pause between instructions (s)

LEVEL_LOW = "low"
LEVEL_HIGH = "high"
LEVELS = (LEVEL_LOW, LEVEL_HIGH)
