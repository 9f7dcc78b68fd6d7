"""
End-to-end solver tests: netlist text -> node voltages.

DC results are checked against hand calculations, AC results against
phasor arithmetic done with Python's built-in complex type.
"""

import numpy as np
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from complex_numbers import ComplexP
from errors import SingularMatrix
from netlist2Ymatrix import read_ac_analysis, read_ac_analysis_file, read_dc_analysis, read_dc_analysis_file
from solver import ac_nodal_analysis, check_solution, dc_nodal_analysis, nodal_analysis

TESTFILES = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "testfiles")


def netlist_path(name):
    return os.path.join(TESTFILES, name)


class TestDcSolver:

    def test_single_resistor(self):
        node_results = dc_nodal_analysis(read_dc_analysis("A\nR 10 A GND\nI 1 A GND"))
        assert len(node_results) == 1
        name, volt = node_results[0]
        assert name == "A"
        assert isinstance(volt, float)
        assert volt == pytest.approx(10.0)

    def test_single_resistor_file(self):
        node_results = dc_nodal_analysis(read_dc_analysis_file(netlist_path("single_resistor.txt")))
        assert node_results[0][1] == pytest.approx(10.0)

    def test_voltage_divider(self):
        node_results = dc_nodal_analysis(read_dc_analysis_file(netlist_path("voltage_divider.txt")))
        assert [name for name, _ in node_results] == ["A", "B"]
        assert node_results[0][1] == pytest.approx(2.0)
        assert node_results[1][1] == pytest.approx(1.0)

    def test_ladder_matches_hand_built_system(self):
        node_results = dc_nodal_analysis(read_dc_analysis_file(netlist_path("ladder.txt")))

        Y = np.array([
            [1 / 1e3 + 1 / 4.7e3, -1 / 1e3, 0],
            [-1 / 1e3, 1 / 1e3 + 1 / 2.2e3 + 1 / 10e3, -1 / 2.2e3],
            [0, -1 / 2.2e3, 1 / 2.2e3 + 1 / 3.3e3],
        ])
        I = np.array([2e-3, 0, -500e-6])
        expected = np.linalg.solve(Y, I)

        np.testing.assert_allclose([volt for _, volt in node_results], expected, rtol=1e-9)

    def test_floating_network_is_singular(self):
        with pytest.raises(SingularMatrix):
            dc_nodal_analysis(read_dc_analysis("A B\nR 10 A B\nI 1 A B"))

    def test_floating_network_file(self):
        with pytest.raises(SingularMatrix):
            nodal_analysis(read_dc_analysis_file(netlist_path("floating_node.txt")))

    def test_floating_ring_is_singular(self):
        # Rounding leaves this determinant just off zero
        with pytest.raises(SingularMatrix, match="Node A has no path to GND"):
            dc_nodal_analysis(read_dc_analysis("A B C\nR 3 A B\nR 7 B C\nR 11 C A\nI 1 A B"))

    def test_floating_island_in_grounded_network(self):
        node_info = read_dc_analysis("A B C\nI 1m A GND\nR 1k A GND\nR 1k B C\nI 1m B C")
        with pytest.raises(SingularMatrix, match="Node B"):
            dc_nodal_analysis(node_info)

    def test_no_sources_gives_zero(self):
        node_results = dc_nodal_analysis(read_dc_analysis("A B\nR 1k A B\nR 1k B GND"))
        assert all(volt == 0 for _, volt in node_results)


class TestAcSolver:

    def test_rc_corner(self):
        node_results = ac_nodal_analysis(read_ac_analysis_file(netlist_path("rc_lowpass.txt")))
        name, volt = node_results[0]
        assert name == "A"
        assert isinstance(volt, ComplexP)
        assert abs(volt) == pytest.approx(1 / np.sqrt(2))
        assert np.degrees(volt.argument()) == pytest.approx(-45.0)

    def test_rlc_network_matches_builtin_complex(self):
        node_results = ac_nodal_analysis(read_ac_analysis_file(netlist_path("rlc_network.txt")))

        w = 2 * np.pi * 50
        y_series = 1 / 47 + 1 / (1j * w * 100e-3)
        y_shunt = 1j * w * 22e-6 + 1 / 220
        Y = np.array([[y_series, -y_series], [-y_series, y_series + y_shunt]])
        I = np.array([100e-3 * np.exp(1j * np.radians(30)), 0])
        expected = np.linalg.solve(Y, I)

        for (_, volt), ref in zip(node_results, expected):
            assert complex(volt) == pytest.approx(ref, rel=1e-9)

    def test_resistive_ac_matches_dc(self):
        dc = dc_nodal_analysis(read_dc_analysis("A B\nI 1m A GND\nR 1k A B\nR 1k B GND"))
        ac = ac_nodal_analysis(read_ac_analysis("A B\n60\nI 1m A GND\nR 1k A B\nR 1k B GND"))
        for (_, dc_volt), (_, ac_volt) in zip(dc, ac):
            assert complex(ac_volt) == pytest.approx(dc_volt)

    def test_floating_phasor_pair_is_singular(self):
        with pytest.raises(SingularMatrix, match="Node A"):
            ac_nodal_analysis(read_ac_analysis("A B\n1k\nR 10,30 A B\nI 1 A B"))

    def test_zero_capacitor_does_not_ground_a_node(self):
        with pytest.raises(SingularMatrix):
            ac_nodal_analysis(read_ac_analysis("A\n1k\nC 0 A GND\nI 1 A GND"))

    def test_dispatch_on_mode(self):
        node_results = nodal_analysis(read_ac_analysis("A\n50\nR 2 A GND\nI 1 A GND"))
        assert isinstance(node_results[0][1], ComplexP)
        assert abs(node_results[0][1]) == pytest.approx(2.0)


class TestCheckSolution:

    @pytest.mark.parametrize("reader, name", [
        (read_dc_analysis_file, "voltage_divider.txt"),
        (read_dc_analysis_file, "ladder.txt"),
        (read_ac_analysis_file, "rc_lowpass.txt"),
        (read_ac_analysis_file, "rlc_network.txt"),
    ])
    def test_agrees_with_scipy(self, reader, name):
        node_info = reader(netlist_path(name))
        assert check_solution(node_info, nodal_analysis(node_info)) < 1e-9

    def test_detects_wrong_result(self):
        node_info = read_dc_analysis("A\nR 10 A GND\nI 1 A GND")
        assert check_solution(node_info, [("A", 9.0)]) == pytest.approx(1.0)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
