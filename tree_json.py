"""
JSON form of a Huffman tree.

Each node is an object with an explicit "type":

    {"type": "leaf", "symbol": "a"}
    {"type": "internal", "children": [<0 branch>, <1 branch>]}

Merge weights are not stored; they play no part in decoding.
"""
import json

from errors import FormatError
from nodes import Internal, Leaf, symbol_paths

LEAF = "leaf"
INTERNAL = "internal"


def _node_to_dict(node):
    if isinstance(node, Leaf):
        return {"type": LEAF, "symbol": node.symbol}
    return {"type": INTERNAL, "children": [_node_to_dict(node.left), _node_to_dict(node.right)]}


def serialize_tree(root):
    return json.dumps(_node_to_dict(root), separators=(",", ":"), ensure_ascii=False)


def _node_from_dict(obj, path):
    # path is the bit path of this node, used in error messages
    where = f"node at path '{path}'" if path else "root node"
    if not isinstance(obj, dict):
        raise FormatError(f"{where} is not an object")

    node_type = obj.get("type")
    if node_type == LEAF:
        if "children" in obj:
            raise FormatError(f"{where} is a leaf but has children")
        symbol = obj.get("symbol")
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise FormatError(f"{where} needs a single-character 'symbol', got {symbol!r}")
        return Leaf(symbol)

    if node_type == INTERNAL:
        if "symbol" in obj:
            raise FormatError(f"{where} is internal but has a symbol")
        children = obj.get("children")
        if not isinstance(children, list) or len(children) != 2:
            raise FormatError(f"{where} needs exactly two 'children'")
        return Internal(_node_from_dict(children[0], path + "0"),
                        _node_from_dict(children[1], path + "1"))

    raise FormatError(f"{where} has unknown type {node_type!r}")


def deserialize_tree(data):
    """Parse a tree produced by serialize_tree. Raises FormatError if it is malformed."""
    try:
        obj = json.loads(data)
    except (TypeError, ValueError) as e:
        raise FormatError(f"Serialized tree is not valid JSON: {e}") from e
    except RecursionError as e:
        raise FormatError("Serialized tree is nested too deeply") from e

    try:
        root = _node_from_dict(obj, "")
    except RecursionError as e:
        raise FormatError("Serialized tree is nested too deeply") from e

    # A code table has exactly one entry per symbol
    seen = {}
    for path, symbol in symbol_paths(root).items():
        if symbol in seen:
            raise FormatError(f"Symbol {symbol!r} appears at both '{seen[symbol]}' and '{path}'")
        seen[symbol] = path
    return root
