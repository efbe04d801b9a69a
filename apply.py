import numpy as np
import matplotlib.pyplot as plt
from Model.gate_catalog import GATES
from Model.session import Simulator_Session

# 1. One session for the whole demo, no pause between replay steps
session = Simulator_Session(sleep=lambda s: None)

# 2. Walk every gate through every input pair
gate_names = list(GATES)
input_pairs = [(0, 0), (0, 1), (1, 0), (1, 1)]
reference = np.zeros((len(gate_names), len(input_pairs)), dtype=int)
crossbar_out = np.zeros_like(reference)

for i, name in enumerate(gate_names):
    session.select_gate(name)
    for j, (a, b) in enumerate(input_pairs):
        session.set_inputs(a, b)
        session.run_gate()
        state = session.derive_state()
        reference[i, j] = state["output"]
        crossbar_out[i, j] = state["crossbar_output"]

agreement = np.mean(reference == crossbar_out)
print(f"Reference vs crossbar readout agreement: {agreement * 100:.1f}%")

# 3. Visualize both outputs side by side
fig, axes = plt.subplots(1, 2, figsize=(10, 4))
for ax, data, title in zip(axes, (reference, crossbar_out), ("Truth function", "Crossbar readout (BL0)")):
    ax.imshow(data, cmap="Greens", vmin=0, vmax=1)
    ax.set_title(title)
    ax.set_xticks(range(len(input_pairs)))
    ax.set_xticklabels([f"{a}{b}" for a, b in input_pairs])
    ax.set_yticks(range(len(gate_names)))
    ax.set_yticklabels(gate_names)
    ax.set_xlabel("Inputs AB")
    for r in range(data.shape[0]):
        for c in range(data.shape[1]):
            ax.text(c, r, data[r, c], ha="center", va="center")
plt.tight_layout()
plt.show()
