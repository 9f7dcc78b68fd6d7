import scipy.constants as c

# Reserved name of the reference node, never part of the node list
GND = "GND"

# I: current source, V: voltage source, R: resistor, L: inductor, C: capacitor
VALID_SYMBOLS = ('I', 'V', 'R', 'L', 'C')
DC_SYMBOLS = ('I', 'V', 'R')
# Components that conduct between their two nodes
BRANCH_SYMBOLS = ('R', 'L', 'C')

COMMENT_MARKER = "//"
PHASOR_SEPARATOR = ","

# SI multiplier suffixes (case-sensitive: m is milli, M is mega)
MULTIPLIERS = {
    'p': c.pico,
    'n': c.nano,
    'u': c.micro,
    'm': c.milli,
    'k': c.kilo,
    'M': c.mega,
    'G': c.giga,
}

TWO_PI = 2 * c.pi

# Largest deviation from scipy's solution accepted by the --check option
CHECK_TOLERANCE = 1e-6
