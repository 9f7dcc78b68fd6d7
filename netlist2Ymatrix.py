"""
Netlist -> nodal analysis bundle.

Netlist format (one record per line, `//` comments and blank lines ignored):

    A B C               space-separated node names (GND is reserved)
    1k                  AC only: analysis frequency in Hz
    R 10k A B           SYMBOL VALUE NODE1 NODE2
    I 1m A GND

DC values are unit-suffixed magnitudes. AC values are phasors in the form
`mag` or `mag,phase` (phase in degrees); capacitors and inductors take a
plain magnitude.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from assembleYmatrix import initialize_stamps, stamp_component
from constants import BRANCH_SYMBOLS, DC_SYMBOLS, GND, VALID_SYMBOLS
from errors import BadPhasor, InvalidFrequency, MalformedRecord, UnknownSymbol, UnsupportedInDcMode
from matrix import Matrix
from node_index import build_node_index, validate_node
from txt2dictionary import blank_comment_lines, decode_phasor, parse_text_content, parse_value, split_phasor, split_tokens

logger = logging.getLogger(__name__)


@dataclass
class NodalAnalysis:
    """
    Everything the solver needs. Order of `node_names` corresponds to both
    the rows/cols of the admittance matrix and the rows of the net currents.
    """
    node_names: List[str]
    admittance_mat: Matrix  # (n,n) conductances (DC) or admittance phasors (AC)
    net_currents: Matrix  # (n,1)
    frequency: Optional[float] = None
    # (n1, n2) of every non-zero R, L and C, for the ground connectivity check
    branches: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def is_ac(self):
        return self.frequency is not None

    @property
    def conductance_mat(self):
        return self.admittance_mat


def _next_content_line(lines, start):
    for i in range(start, len(lines)):
        if lines[i]:
            return i
    return None


# =============================================================================
# RECORD PARSING
# =============================================================================
def parse_frequency(line_text, line=None):
    tokens = split_tokens(line_text)
    if len(tokens) != 1:
        raise InvalidFrequency("Frequency line must hold a single value", line)

    frequency = parse_value(tokens[0], line)
    if frequency <= 0:
        raise InvalidFrequency(f"Frequency must be above 0, got {frequency}", line)
    return frequency


def parse_component(line_text, node_map, ac=False, line=None):
    """
    Parses a `SYMBOL VALUE NODE1 NODE2` record into a component dictionary.
    """
    tokens = split_tokens(line_text)
    if len(tokens) != 4:
        raise MalformedRecord("Bad component command, expected: [Symbol] [Value] [Node1] [Node2]", line)

    symbol, value_str, n1, n2 = tokens

    if symbol not in VALID_SYMBOLS:
        raise UnknownSymbol(f"Symbol: {symbol} is not a valid symbol {{I,V,R,L,C}}", line)

    if not ac and symbol not in DC_SYMBOLS:
        raise UnsupportedInDcMode(f"Symbol: {symbol} is not allowed in DC analysis {{I,V,R}}", line)

    if not ac:
        value = parse_value(value_str, line)
    elif symbol in ('L', 'C'):
        value, phase = split_phasor(value_str, line)
        if phase != 0:
            raise BadPhasor(f"Symbol: {symbol} takes a plain magnitude, not a phasor", line)
    else:
        value = decode_phasor(value_str, line)

    validate_node(n1, node_map, line)
    validate_node(n2, node_map, line)
    if n1 == GND and n2 == GND:
        logger.warning("Component %s on line %s connects %s to itself and is ignored", symbol, line, GND)

    return {"type": symbol, "n1": n1, "n2": n2, "value": value, "line": line}


# =============================================================================
# ANALYSIS FILE READERS
# =============================================================================
def read_analysis(lines, ac=False):
    """
    Compiles netlist lines (comment lines already blanked) into a
    NodalAnalysis. Each component is parsed and stamped in file order, so the
    first bad line is the one reported.
    """
    idx = _next_content_line(lines, 0)
    if idx is None:
        raise MalformedRecord("File has no content")

    # First non-empty line should be a space-separated list of all node names
    node_names = split_tokens(lines[idx])
    node_map = build_node_index(node_names, idx + 1)

    frequency = None
    if ac:
        idx = _next_content_line(lines, idx + 1)
        if idx is None:
            raise InvalidFrequency("AC analysis requires a frequency line after the node names")
        frequency = parse_frequency(lines[idx], idx + 1)

    Y, sources = initialize_stamps(len(node_names), ac=ac)

    # Start at the first line after the header
    component_count = 0
    branches = []
    for i in range(idx + 1, len(lines)):
        if not lines[i]:
            continue
        comp = parse_component(lines[i], node_map, ac=ac, line=i + 1)
        Y, sources = stamp_component(Y, sources, comp, node_map, frequency)
        if comp["type"] in BRANCH_SYMBOLS and comp["value"] != 0:
            branches.append((comp["n1"], comp["n2"]))
        component_count += 1

    logger.info(
        "Assembled %s analysis: %d nodes, %d components",
        "AC" if ac else "DC", len(node_names), component_count,
    )
    return NodalAnalysis(node_names, Y, sources, frequency, branches)


def _as_lines(text):
    if isinstance(text, str):
        text = text.splitlines()
    return blank_comment_lines(text)


def read_dc_analysis(text):
    """Compiles DC netlist text (a string or list of lines) into conductances and net currents."""
    return read_analysis(_as_lines(text), ac=False)


def read_ac_analysis(text):
    """Compiles AC netlist text (a string or list of lines) into admittances and net current phasors."""
    return read_analysis(_as_lines(text), ac=True)


def read_dc_analysis_file(filename):
    return read_analysis(parse_text_content(filename), ac=False)


def read_ac_analysis_file(filename):
    return read_analysis(parse_text_content(filename), ac=True)
