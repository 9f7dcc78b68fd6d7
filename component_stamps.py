from constants import GND, TWO_PI
from complex_numbers import ComplexC, cart_to_polar
from errors import MalformedRecord, NotImplementedComponent
from node_index import get_idx

# Every stamp takes (Y, sources, comp, node_map, frequency) and returns a new
# (Y, sources) pair; the matrices passed in are left untouched.
# comp: {"type", "n1", "n2", "value", "line"}, node names already validated.


# =============================================================================
# GENERIC STAMPS
# =============================================================================
def add_admittance(mat, admittance, idx_1, idx_2):
    """
    Returns a copy of `mat` with an admittance between two nodes added.
    idx_1, idx_2: matrix indices of the nodes, None for ground (never both)
    """
    mat = mat.copy()

    if idx_1 is not None:
        mat.set(idx_1, idx_1, mat.get(idx_1, idx_1) + admittance)
        # apply negative to col of opposite node if not ground
        if idx_2 is not None:
            mat.set(idx_1, idx_2, mat.get(idx_1, idx_2) - admittance)

    if idx_2 is not None:
        mat.set(idx_2, idx_2, mat.get(idx_2, idx_2) + admittance)
        if idx_1 is not None:
            mat.set(idx_2, idx_1, mat.get(idx_2, idx_1) - admittance)

    return mat


def add_current(vec, current, idx_1, idx_2):
    """
    Returns a copy of the (n,1) net current vector with a current flowing
    into node 1 and out of node 2. Ground contributes nothing.
    """
    vec = vec.copy()
    if idx_1 is not None:
        vec.set(idx_1, 0, vec.get(idx_1, 0) + current)
    if idx_2 is not None:
        vec.set(idx_2, 0, vec.get(idx_2, 0) - current)
    return vec


def _indices(comp, node_map):
    return get_idx(comp["n1"], node_map), get_idx(comp["n2"], node_map)


# =============================================================================
# PASSIVE STAMPS
# =============================================================================
def stamp_resistor(Y, sources, comp, node_map, frequency=None):
    """
    Stamps a resistor (DC: resistance in Ohms, AC: impedance phasor).
    A resistor has no direction, so a grounded first node is swapped to the
    second position.
    """
    if comp["value"] == 0:
        raise MalformedRecord("Resistor value must be non-zero", comp.get("line"))

    n1, n2 = comp["n1"], comp["n2"]
    if n1 == GND:
        n1, n2 = n2, n1

    g = 1 / comp["value"]
    i, j = get_idx(n1, node_map), get_idx(n2, node_map)
    return add_admittance(Y, g, i, j), sources


def capacitor_admittance(capacitance, frequency):
    """Y_C = j*2*pi*f*C, as a polar phasor."""
    return cart_to_polar(ComplexC(0.0, TWO_PI * frequency * capacitance))


def inductor_admittance(inductance, frequency):
    """Y_L = 1 / (j*2*pi*f*L), as a polar phasor."""
    return cart_to_polar(1 / ComplexC(0.0, TWO_PI * frequency * inductance))


def stamp_capacitor(Y, sources, comp, node_map, frequency=None):
    y = capacitor_admittance(comp["value"], frequency)
    i, j = _indices(comp, node_map)
    return add_admittance(Y, y, i, j), sources


def stamp_inductor(Y, sources, comp, node_map, frequency=None):
    if comp["value"] == 0:
        raise MalformedRecord("Inductor value must be non-zero", comp.get("line"))

    y = inductor_admittance(comp["value"], frequency)
    i, j = _indices(comp, node_map)
    return add_admittance(Y, y, i, j), sources


# =============================================================================
# SOURCE STAMPS
# =============================================================================
def stamp_current_source(Y, sources, comp, node_map, frequency=None):
    """Current source: +value at its first node, -value at its second."""
    i, j = _indices(comp, node_map)
    return Y, add_current(sources, comp["value"], i, j)


def stamp_independent_voltage(Y, sources, comp, node_map, frequency=None):
    # Needs an extra branch-current unknown, which plain nodal analysis lacks
    raise NotImplementedComponent("V is not implemented yet", comp.get("line"))
