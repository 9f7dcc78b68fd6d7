import logging

from complex_numbers import ComplexP
from errors import UnknownSymbol, UnsupportedInDcMode
from matrix import Matrix
import component_stamps as stamps

logger = logging.getLogger(__name__)

# 1. Purely static components (frequency independent)
STATIC_DISPATCH = {
    'R': stamps.stamp_resistor,
}

# 2. Independent sources
SOURCE_DISPATCH = {
    'I': stamps.stamp_current_source,
    'V': stamps.stamp_independent_voltage,
}

# 3. Dynamic components (frequency-dependent, AC analysis only)
DYNAMIC_DISPATCH = {
    'L': stamps.stamp_inductor,
    'C': stamps.stamp_capacitor,
}


def initialize_stamps(total_dim, ac=False):
    """
    Create an empty (n,n) admittance matrix and (n,1) net current vector.
    DC analysis uses real conductances, AC analysis polar phasors.
    """
    scalar = ComplexP if ac else float
    Y = Matrix(total_dim, total_dim, scalar)
    sources = Matrix(total_dim, 1, scalar)
    return Y, sources


def stamp_component(Y, sources, comp, node_map, frequency=None):
    """Stamps a single component, returning the updated (Y, sources) pair."""
    type_char = comp["type"]

    if type_char in STATIC_DISPATCH:
        stamp = STATIC_DISPATCH[type_char]
    elif type_char in SOURCE_DISPATCH:
        stamp = SOURCE_DISPATCH[type_char]
    elif type_char in DYNAMIC_DISPATCH:
        if frequency is None:
            raise UnsupportedInDcMode(
                f"Symbol: {type_char} is not allowed in DC analysis {{I,V,R}}", comp.get("line")
            )
        stamp = DYNAMIC_DISPATCH[type_char]
    else:
        raise UnknownSymbol(f"Symbol: {type_char} is not a valid symbol {{I,V,R,L,C}}", comp.get("line"))

    logger.debug("Stamping %s %s between %s and %s", type_char, comp["value"], comp["n1"], comp["n2"])
    return stamp(Y, sources, comp, node_map, frequency)


def stamp_components(Y, sources, components, node_map, frequency=None):
    for comp in components:
        Y, sources = stamp_component(Y, sources, comp, node_map, frequency)
    return Y, sources
