### HUFFMAN NODE CLASSES ###
class Leaf:
    """A tree leaf holding one symbol (a single character)."""
    def __init__(self, symbol, freq=0):
        self.symbol = symbol
        # freq: only used to pick merge order while the tree is built
        self.freq = freq

    def __repr__(self):
        return f"Leaf({self.symbol!r}, {self.freq})"


class Internal:
    """A tree node with exactly two children: left is the '0' branch, right the '1' branch."""
    def __init__(self, left, right, freq=0):
        self.left = left
        self.right = right
        self.freq = freq

    def __repr__(self):
        return f"Internal({self.left!r}, {self.right!r}, {self.freq})"


def symbol_paths(root):
    """Map every leaf's bit path to its symbol. A bare leaf root sits at path ''."""
    paths = {}
    stack = [(root, "")]
    while stack:
        node, path = stack.pop()
        if isinstance(node, Leaf):
            paths[path] = node.symbol
        else:
            stack.append((node.right, path + "1"))
            stack.append((node.left, path + "0"))
    return paths
