import sympy as sp


def _to_sympy(val):
    val = complex(val)
    if val.imag == 0:
        return sp.Float(val.real)
    return sp.Float(val.real) + sp.I * sp.Float(val.imag)


def node_voltage_symbols(node_names):
    return sp.Matrix([sp.Symbol(f"V_{name}") for name in node_names])


def generate_nodal_equations(node_info):
    """
    Builds the nodal equations sum_j(Y[i,j] * V_j) = I_i, one per node, as
    sympy equalities over the symbols V_<node name>.
    """
    n = len(node_info.node_names)

    Y = sp.Matrix(n, n, lambda i, j: _to_sympy(node_info.admittance_mat.get(i, j)))
    I = sp.Matrix(n, 1, lambda i, j: _to_sympy(node_info.net_currents.get(i, 0)))
    Vn = node_voltage_symbols(node_info.node_names)

    lhs = Y * Vn
    return [sp.Eq(lhs[i], I[i], evaluate=False) for i in range(n)]


def print_nodal_equations(node_info):
    print("\n=========== NODAL EQUATIONS Y·V = I ===============")
    for eq in generate_nodal_equations(node_info):
        sp.pprint(eq)
