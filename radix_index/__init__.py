""" Package for a string-keyed index built on a compressed trie (radix tree):

    strings - Key arithmetic shared by lookup and insertion: common prefix length and two flavors of prefix test.
    These work on any sliceable sequence, so keys may be tuples of tokens as easily as strings.

    node - The storage representation. Each node owns its outgoing edges, and each edge owns the node it leads to.
    Edges carry whole key fragments, and a node in the middle of an edge is only created when a key diverges there.

    tree - The engine. Insertion walks down the tree and splits any edge the new key only partially matches.
    Lookup follows whole edges until the key runs out. Prefix enumeration collects every key below a node.

    log - Diagnostics go to plain string callables. The stream logger here is one such callable with timestamps.

    config - Tree options may be kept in a CFG file section and used to build configured trees. """

from .config import build_tree, ConfigError, ConfigIO, TreeConfig
from .log import open_logger, StreamLogger
from .node import Edge, Node
from .strings import common_prefix_length, is_prefix_of, matches_as_prefix
from .tree import RadixTree, RadixTreeError, TreeCorruptionError
