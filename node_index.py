from constants import GND
from errors import MalformedRecord, ReservedName, UnknownNode


def build_node_index(node_names, line=None):
    """
    Builds the mapping from node name to matrix index.

    Index i is row/column i of the admittance matrix and row i of the current
    vector. Ground is never part of the map.
    """
    if GND in node_names:
        raise ReservedName(f"{GND} is a reserved nodename and cannot be in the node list", line)

    node_map = {}
    for node in node_names:
        if node in node_map:
            raise MalformedRecord(f"Node name: {node} is declared more than once", line)
        node_map[node] = len(node_map)

    return node_map


def get_idx(node, node_map):
    """Returns the matrix index for a node name, or None if it is ground."""
    if node == GND:
        return None
    return node_map.get(node)


def find_floating_node(node_names, branches):
    """
    Union-find over the conducting branches (n1, n2). Returns the first
    declared node whose group never reaches ground, or None when every node
    has a path to ground.
    """
    parent = {node: node for node in node_names}
    parent[GND] = GND

    def _find(node):
        while parent[node] != node:
            parent[node] = parent[parent[node]]
            node = parent[node]
        return node

    for n1, n2 in branches:
        root_1, root_2 = _find(n1), _find(n2)
        if root_1 != root_2:
            parent[root_1] = root_2

    ground = _find(GND)
    for node in node_names:
        if _find(node) != ground:
            return node
    return None


def validate_node(node, node_map, line=None):
    """
    Validate that a node exists in the circuit.
    Returns the index for non-ground nodes, None for ground, and raises
    UnknownNode for names missing from the declaration.
    """
    if node == GND:
        return None
    if node not in node_map:
        raise UnknownNode(f"Node name: {node} is not found in the initial node name declaration", line)
    return node_map[node]
