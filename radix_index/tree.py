""" Module for the compressed trie (radix tree) engine. """

from itertools import islice
from typing import Any, Callable, Iterator, List, Mapping, Optional, Sequence, Tuple, TypeVar

from .node import Node
from .strings import common_prefix_length, is_prefix_of, matches_as_prefix

K = TypeVar("K", bound=Sequence)  # Key type. Must support len(), slicing, symbol equality and concatenation.
V = TypeVar("V")                  # Value type.
List_K = List[K]
LogFunc = Callable[[str], Any]


class RadixTreeError(Exception):
    """ Base class for errors raised by this package. """


class TreeCorruptionError(RadixTreeError):
    """ Raised if a tree operation finds its own invariants broken. This is never a problem with user input. """


def _nop(*_) -> None:
    pass


class RadixTree(Mapping[K, V]):
    """
    String-keyed index with exact lookup and prefix enumeration. Keys sharing a common beginning share the edges
    that spell it out, so long common prefixes are stored only once. Edges are labeled with whole key fragments
    rather than single symbols, and chains of single-child nodes never exist.

    Keys may be any sliceable sequence that supports concatenation: str, bytes and tuples all work, but one tree
    should only ever hold one key type. The empty key is never stored. There is no deletion; clear() drops everything.

    Duplicate insertion does not overwrite: the first value stored for a key wins.

    Lookup and insertion cost is proportional to the length of the key, not the number of keys stored.
    Prefix enumeration is proportional to the size of the subtree under the prefix.

    This class is not thread-safe. A split in progress leaves an edge half-updated.
    """

    def __init__(self, *args, default:V=None, log:LogFunc=None) -> None:
        """ Optionally insert all items from a mapping or iterable of pairs in <args>.
            <default> - value returned by get_value() for missing keys.
            <log> - callable to receive diagnostic messages about tree mutations. """
        self._default = default     # Stand-in for a default-constructed value.
        self._log = log or _nop     # Diagnostic message receiver.
        self._root = Node(default)  # Sentinel root node. It is never a leaf and never replaced.
        self._size = 0              # Number of keys stored.
        if args:
            self.update(*args)

    @property
    def root(self) -> Node:
        """ Sentinel node at the top of the tree. Read-only access for inspecting structure. """
        return self._root

    @property
    def default(self) -> V:
        """ Value returned by get_value() for missing keys. """
        return self._default

    def _descend(self, key:K) -> Tuple[Node, int]:
        """ Follow whole edges from the root that spell out the start of <key> as far as possible.
            Return the last node reached and the number of symbols matched on the way. """
        node = self._root
        pos = 0
        key_len = len(key)
        while pos < key_len:
            # Sibling labels never share a first symbol, so at most one edge can match.
            for edge in node.children:
                if matches_as_prefix(key, edge.label, pos):
                    pos += len(edge.label)
                    node = edge.dest
                    break
            else:
                break
        return node, pos

    def _find_node(self, key:K, leaf_only=True) -> Optional[Node]:
        """ Return the node where <key> ends, if every symbol of it could be matched along whole edges.
            If <leaf_only> is True, the node only counts if a stored key ends there. """
        if not isinstance(key, Sequence) or not key:
            return None
        node, pos = self._descend(key)
        if pos < len(key):
            return None
        if leaf_only and not node.is_leaf:
            return None
        return node

    def insert(self, key:K, value:V) -> bool:
        """ Store <value> under <key>. Return True if the key was added.
            Empty keys and keys already present are ignored (the old value is kept) and return False. """
        if not key:
            return False
        node = self._root
        pos = 0
        key_len = len(key)
        while pos < key_len:
            for edge in node.children:
                label = edge.label
                if is_prefix_of(label, key, pos):
                    # The whole label matches. Go down and keep matching the rest of the key.
                    pos += len(label)
                    node = edge.dest
                    break
                length = common_prefix_length(label, key, 0, pos)
                if length:
                    # The key diverges (or ends) partway through the label. Branch off at that point.
                    self._log(f"Splitting edge {label!r} at {length} for key {key!r}.")
                    node = node.split_edge(edge, length, self._default)
                    pos += length
                    break
            else:
                break
        if pos > key_len:
            msg = f"Matched {pos} symbols of key {key!r} with length {key_len}."
            self._log(msg)
            raise TreeCorruptionError(msg)
        if pos == key_len:
            if node.is_leaf:
                return False
            # The key ends at a branching node left over from an earlier split.
            node.is_leaf = True
            node.value = value
        else:
            suffix = key[pos:]
            self._log(f"Adding leaf {suffix!r} for key {key!r}.")
            node.add_child(suffix, Node(value, is_leaf=True))
        self._size += 1
        return True

    def update(self, *args) -> None:
        """ Insert every item from a mapping or an iterable of (key, value) pairs. """
        for items in args:
            if isinstance(items, Mapping):
                items = items.items()
            for k, v in items:
                self.insert(k, v)

    def exists(self, key:K) -> bool:
        """ Return True if <key> was stored. The empty key never exists. """
        return self._find_node(key) is not None

    def lookup(self, key:K) -> Tuple[bool, V]:
        """ Return whether <key> was found, paired with its value (or the default if it wasn't). """
        node = self._find_node(key)
        if node is None:
            return False, self._default
        return True, node.value

    def get_value(self, key:K) -> V:
        """ Return the value stored under <key>, or the default value if it isn't there.
            A key stored with the default value looks the same as a missing one. Use lookup() to tell them apart. """
        return self.lookup(key)[1]

    def _walk(self, start:Node, key:K=None) -> Iterator[Tuple[K, Node]]:
        """ Yield every leaf at or under <start> paired with its full key, depth-first in no particular order.
            <key> spells out the path to <start>. If None, <start> is the root and no key leads to it. """
        if key is None:
            stack = [(edge.label, edge.dest) for edge in start.children]
        else:
            stack = [(key, start)]
        while stack:
            key, node = stack.pop()
            if node.is_leaf:
                yield key, node
            for edge in node.children:
                stack.append((key + edge.label, edge.dest))

    def find_candidates(self, prefix:K, count:int=None) -> List_K:
        """ Return a list of stored keys that start with <prefix>, up to an optional limit of <count>.
            Order is arbitrary. An empty prefix always returns an empty list; iterate over the tree for everything. """
        if not prefix:
            return []
        key = prefix
        start = self._find_node(prefix, leaf_only=False)
        if start is None:
            # The prefix may still end partway along an edge. Every key under the far end of it matches.
            node, pos = self._descend(prefix)
            for edge in node.children:
                if matches_as_prefix(edge.label, prefix, 0, pos):
                    key = prefix + edge.label[len(prefix) - pos:]
                    start = edge.dest
                    break
            else:
                return []
        keys = (k for k, _ in self._walk(start, key))
        return list(islice(keys, count))

    def node_count(self) -> int:
        """ Return the number of nodes below the root. """
        count = 0
        stack = [self._root]
        while stack:
            node = stack.pop()
            for edge in node.children:
                stack.append(edge.dest)
                count += 1
        return count

    def clear(self) -> None:
        """ Release every node and edge in the tree. The tree remains usable (and empty) afterward. """
        self._root.release()
        self._size = 0

    def __getitem__(self, key:K) -> V:
        node = self._find_node(key)
        if node is None:
            raise KeyError(key)
        return node.value

    def __contains__(self, key:Any) -> bool:
        return self.exists(key)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[K]:
        return (k for k, _ in self._walk(self._root))

    def __repr__(self) -> str:
        items = ", ".join([f"{k!r}: {node.value!r}" for k, node in self._walk(self._root)])
        return f"{type(self).__name__}({{{items}}})"

