""" Module for the node/edge graph underlying the radix tree. """

from typing import Generic, Sequence, TypeVar

K = TypeVar("K", bound=Sequence)  # Key type. Edge labels are slices of keys.
V = TypeVar("V")                  # Value type.


class Edge(Generic[K, V]):
    """ A labeled transition to a node. The edge is the sole owner of its destination. """

    __slots__ = ["label", "dest"]

    def __init__(self, label:K, dest:"Node[K, V]") -> None:
        self.label = label  # Non-empty key fragment consumed by following this edge.
        self.dest = dest    # Node owned by this edge. Nothing else may refer to it.

    def __repr__(self) -> str:
        return f"Edge({self.label!r})"


class Node(Generic[K, V]):
    """ One position in the compressed trie. A key may end here (making it a leaf) even if it has children. """

    __slots__ = ["children", "is_leaf", "value"]

    def __init__(self, value:V=None, is_leaf=False) -> None:
        self.children = []      # Outgoing edges in insertion order. Sibling labels never share a first symbol.
        self.is_leaf = is_leaf  # True if a stored key terminates exactly at this node.
        self.value = value      # Value for that key. Holds the tree default for non-leaf nodes.

    def add_child(self, label:K, child:"Node[K, V]") -> Edge:
        """ Append a new edge to <child> labeled with <label>. """
        edge = Edge(label, child)
        self.children.append(edge)
        return edge

    def split_edge(self, edge:Edge, length:int, default:V=None) -> "Node[K, V]":
        """ Break one of our child edges after <length> symbols by inserting a new branching node there.
            The old destination moves under the new node with the remainder of the label, subtree intact. """
        label = edge.label
        branch = Node(default)
        branch.add_child(label[length:], edge.dest)
        edge.label = label[:length]
        edge.dest = branch
        return branch

    def release(self) -> None:
        """ Tear down every node and edge below this one without recursion. """
        stack = [self]
        while stack:
            node = stack.pop()
            for edge in node.children:
                stack.append(edge.dest)
                edge.dest = None
            node.children = []

    def __repr__(self) -> str:
        return f"Node(is_leaf={self.is_leaf}, value={self.value!r}, children={self.children!r})"
