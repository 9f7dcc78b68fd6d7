import re
import logging

import numpy as np

from constants import COMMENT_MARKER, MULTIPLIERS, PHASOR_SEPARATOR
from complex_numbers import ComplexP
from errors import BadMultiplier, BadPhasor, MalformedRecord

logger = logging.getLogger(__name__)

# Digits with at most one decimal point, optionally signed
_NUMERIC = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)$')


# =============================================================================
# TEXT CONTENT
# =============================================================================
def blank_comment_lines(lines):
    """
    Strips leading whitespace from every line and blanks out comment and
    empty lines. Blanked lines stay in the list so that list index + 1 is
    always the file line number.
    """
    content = []
    for line in lines:
        line = line.lstrip().rstrip('\r\n')
        if not line or line.startswith(COMMENT_MARKER):
            content.append("")
        else:
            content.append(line)
    return content


def parse_text_content(file_path):
    """Reads a netlist file into a list of lines with comment lines blanked."""
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            lines = f.read().splitlines()
    except UnicodeDecodeError as e:
        raise MalformedRecord(f"{file_path} is not a UTF-8 text file: {e.reason}") from None

    logger.debug("Read %d lines from %s", len(lines), file_path)
    return blank_comment_lines(lines)


def split_tokens(line):
    return line.split()


# =============================================================================
# VALUE PARSER
# =============================================================================
def parse_value(value_str, line=None):
    """
    Converts a component value string into a float.
    e.g. 20k -> 20000.0, 10m -> 0.01, 5 -> 5.0

    A trailing non-digit character is read as an SI multiplier (p, n, u, m,
    k, M, G); the text before it must then be a plain decimal number. A value
    without a suffix is parsed as an ordinary number.
    """
    value_str = value_str.strip()
    if not value_str:
        raise BadMultiplier("Empty component value", line)

    suffix = value_str[-1]
    if suffix.isdigit() or suffix == '.':
        try:
            return float(value_str)
        except ValueError:
            raise BadMultiplier(f"Value: {value_str} is not a number", line) from None

    if suffix not in MULTIPLIERS:
        raise BadMultiplier(
            f"Value: {value_str} has unknown multiplier '{suffix}' {{{','.join(MULTIPLIERS)}}}", line
        )

    number_part = value_str[:-1]
    if not _NUMERIC.match(number_part):
        raise BadMultiplier(f"Value: {value_str} is not a number followed by a multiplier", line)

    return float(number_part) * MULTIPLIERS[suffix]


# =============================================================================
# PHASOR PARSER
# =============================================================================
def split_phasor(phasor_str, line=None):
    """
    Splits a phasor string in the form [mag] or [mag],[phase] into the
    magnitude (unit-suffixed) and the phase in degrees.
    """
    parts = phasor_str.split(PHASOR_SEPARATOR)
    if len(parts) > 2:
        raise BadPhasor(f"Phasor: {phasor_str} must be in the form mag or mag,phase", line)

    magnitude = parse_value(parts[0], line)
    if len(parts) == 1:
        return magnitude, 0.0

    try:
        phase = float(parts[1])
    except ValueError:
        raise BadPhasor(f"Phasor: {phasor_str} has a non-numeric phase", line) from None

    return magnitude, phase


def decode_phasor(phasor_str, line=None):
    """Decodes a phasor string (phase in degrees) into a polar complex number."""
    magnitude, phase = split_phasor(phasor_str, line)
    return ComplexP(magnitude, np.radians(phase))
