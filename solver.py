import logging

import numpy as np
from scipy.linalg import solve

from constants import GND
from errors import SingularMatrix
from node_index import find_floating_node

logger = logging.getLogger(__name__)


def _solve_node_voltages(node_info):
    # A node with no path to ground makes Y singular; rounding can hide that
    # from the determinant
    floating = find_floating_node(node_info.node_names, node_info.branches)
    if floating is not None:
        raise SingularMatrix(f"Node {floating} has no path to {GND}, the admittance matrix is singular")

    # V = Y^-1 @ I
    volt_res = node_info.admittance_mat.inverse() @ node_info.net_currents

    node_results = []
    for i in range(volt_res.rows):
        node_results.append((node_info.node_names[i], volt_res.get(i, 0)))
    return node_results


def dc_nodal_analysis(node_info):
    """
    Uses the conductance matrix and net currents to calculate the voltage at
    all nodes. Returns a list of (node name, voltage) pairs in declared order.
    """
    logger.debug("Solving DC nodal analysis for %d nodes", len(node_info.node_names))
    return [(name, float(volt)) for name, volt in _solve_node_voltages(node_info)]


def ac_nodal_analysis(node_info):
    """
    Uses the admittance matrix and net current phasors to calculate the
    voltage phasor at all nodes. Returns (node name, ComplexP) pairs.
    """
    logger.debug(
        "Solving AC nodal analysis for %d nodes at %g Hz",
        len(node_info.node_names), node_info.frequency,
    )
    return _solve_node_voltages(node_info)


def nodal_analysis(node_info):
    if node_info.is_ac:
        return ac_nodal_analysis(node_info)
    return dc_nodal_analysis(node_info)


def check_solution(node_info, node_results):
    """
    Re-solves Y @ V = I with scipy's dense solver and returns the largest
    absolute difference from `node_results`.
    """
    Y = node_info.admittance_mat.to_numpy()
    I = node_info.net_currents.to_numpy()[:, 0]
    V_ref = solve(Y, I)

    V = np.array([complex(volt) for _, volt in node_results])
    max_error = float(np.max(np.abs(V - V_ref)))
    logger.debug("Cross-check against scipy.linalg.solve: max error = %g", max_error)
    return max_error
