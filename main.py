"""
Command line entry point.

    nodal-analysis dc testfiles/voltage_divider.txt
    nodal-analysis ac testfiles/rc_lowpass.txt --check --plot figures/ac
"""
import argparse
import logging
import sys

from constants import CHECK_TOLERANCE
from errors import NodalAnalysisError
from logging_config import setup_logging
from netlist2Ymatrix import read_ac_analysis_file, read_dc_analysis_file
from nodal_eqns_gen import print_nodal_equations
from solver import check_solution, nodal_analysis
from tools import plot_solution, print_matrices, print_solution

logger = logging.getLogger(__name__)

READERS = {
    'dc': read_dc_analysis_file,
    'ac': read_ac_analysis_file,
}


def build_arg_parser():
    parser = argparse.ArgumentParser(
        prog="nodal-analysis",
        description="Solve the node voltages of a linear DC or single-frequency AC network.",
    )
    parser.add_argument("mode", choices=sorted(READERS), help="analysis type")
    parser.add_argument("netlist", help="path to the netlist file")
    parser.add_argument("--check", action="store_true",
                        help="cross-check the solution against scipy.linalg.solve")
    parser.add_argument("--equations", action="store_true",
                        help="print the symbolic nodal equations")
    parser.add_argument("--plot", metavar="DIR",
                        help="save a plot of the node voltages into DIR")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="-v for progress, -vv for debug output")
    parser.add_argument("--log-file", metavar="PATH", help="also write logs to PATH")
    return parser


def run_analysis(mode, netlist, check=False, equations=False, plot_dir=None):
    """Reads, solves and prints one netlist. Returns the (node, voltage) pairs."""
    node_info = READERS[mode](netlist)
    print_matrices(node_info)

    if equations:
        print_nodal_equations(node_info)

    node_results = nodal_analysis(node_info)
    print_solution(node_results, frequency=node_info.frequency)

    if check:
        max_error = check_solution(node_info, node_results)
        if max_error > CHECK_TOLERANCE:
            logger.warning("Solution differs from scipy.linalg.solve by %g", max_error)
        else:
            logger.info("Solution agrees with scipy.linalg.solve (max error %g)", max_error)

    if plot_dir:
        plot_solution(node_results, folder=plot_dir, frequency=node_info.frequency)

    return node_results


def main(argv=None):
    args = build_arg_parser().parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    setup_logging(level, args.log_file)

    try:
        run_analysis(args.mode, args.netlist, check=args.check,
                     equations=args.equations, plot_dir=args.plot)
    except (NodalAnalysisError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
