import os
import logging

import numpy as np
import matplotlib
matplotlib.use('Agg')  # This must come before importing pyplot
import matplotlib.pyplot as plt

logger = logging.getLogger(__name__)


def print_matrices(node_info):
    """Prints the assembled admittance matrix and net current vector."""
    label = "Admittance" if node_info.is_ac else "Conductance"
    print(f"\n--- {label} Matrix ({', '.join(node_info.node_names)}) ---")
    print(node_info.admittance_mat)
    print("\n--- Net Currents ---")
    print(node_info.net_currents)


def print_solution(node_results, frequency=None):
    """
    Prints (node name, voltage) pairs. AC phasors are shown as magnitude and
    phase in degrees.
    """
    print(f"\n--- Simulation Results ({'DC' if frequency is None else f'AC @ {frequency:.2f} Hz'}) ---")
    print("Node Voltages:")
    for node, val in node_results:
        if frequency is None:
            print(f"  Node {node}: {val:10.6f} V")
        else:
            mag = abs(val)
            phase = np.degrees(val.argument())
            print(f"  Node {node}: {mag:10.6f} V ∠ {phase:7.2f}°")


def plot_solution(node_results, folder=".", name="node_voltages", frequency=None):
    """
    Saves a bar chart of DC node voltages, or a phasor diagram of AC node
    voltages, to <folder>/<name>.png and returns the path.
    """
    os.makedirs(folder, exist_ok=True)
    path = os.path.join(folder, f"{name}.png")

    nodes = [node for node, _ in node_results]

    if frequency is None:
        fig, ax = plt.subplots(figsize=(6, 3))
        ax.bar(nodes, [val for _, val in node_results])
        ax.axhline(0, color='black', lw=1)
        ax.set_xlabel("Node")
        ax.set_ylabel("Voltage (V)")
        ax.set_title("DC Node Voltages")
        ax.grid(True, axis='y', ls="--", alpha=0.6)
    else:
        fig, ax = plt.subplots(figsize=(5, 5), subplot_kw={'projection': 'polar'})
        for node, val in node_results:
            ax.annotate(
                "", xy=(val.argument(), abs(val)), xytext=(0, 0),
                arrowprops=dict(arrowstyle="->", lw=2),
            )
            ax.plot([val.argument()], [abs(val)], 'o', label=f"Node {node}")
        ax.set_rmin(0)
        ax.set_title(f"Node Voltage Phasors @ {frequency:.2f} Hz")
        ax.legend(loc="lower left", bbox_to_anchor=(1.0, 0.0))

    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)

    logger.info("Saved node voltage plot to %s", path)
    return path
