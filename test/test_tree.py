""" Unit tests for the radix tree engine. """

from io import StringIO

import pytest

from radix_index import RadixTree, StreamLogger, TreeCorruptionError

from . import TEST_WORDS


def _sample_tree() -> RadixTree:
    tree = RadixTree(default=0)
    tree.insert("banana", 1)
    tree.insert("bandana", 2)
    tree.insert("foo", 3)
    tree.insert("foobar", 4)
    return tree


def test_basic() -> None:
    """ Exact lookup, misses, and prefix search over a handful of overlapping keys. """
    tree = _sample_tree()
    assert tree.exists("foo")
    assert tree.exists("banana")
    assert tree.get_value("banana") == 1
    assert tree.exists("bandana")
    assert tree.get_value("bandana") == 2
    assert tree.get_value("foo") == 3
    assert tree.get_value("foobar") == 4
    assert len(tree) == 4
    # Misses return the default value, including keys that only exist as a path between other keys.
    assert not tree.exists("foop")
    assert tree.get_value("foop") == 0
    assert not tree.exists("ban")
    assert tree.get_value("ban") == 0
    assert not tree.exists("bananas")
    assert not tree.exists("b")
    assert set(tree.find_candidates("ban")) == {"banana", "bandana"}
    assert set(tree.find_candidates("foo")) == {"foo", "foobar"}
    assert tree.find_candidates("bar") == []


def test_split_structure() -> None:
    """ A diverging key must split the existing edge without losing the old subtree. """
    tree = RadixTree()
    tree.insert("banana", 1)
    [edge] = tree.root.children
    assert edge.label == "banana"
    old_leaf = edge.dest
    tree.insert("bandana", 2)
    [edge] = tree.root.children
    assert edge.label == "ban"
    branch = edge.dest
    assert not branch.is_leaf
    labels = {e.label: e.dest for e in branch.children}
    assert set(labels) == {"ana", "dana"}
    # The original leaf object is kept, value and all.
    assert labels["ana"] is old_leaf
    assert old_leaf.is_leaf and old_leaf.value == 1
    assert labels["dana"].is_leaf and labels["dana"].value == 2
    assert tree.node_count() == 3


def test_empty_key() -> None:
    """ The empty key is never stored, found, or used to search. """
    tree = _sample_tree()
    assert not tree.insert("", 99)
    assert not tree.exists("")
    assert "" not in tree
    assert tree.get_value("") == 0
    assert tree.find_candidates("") == []
    assert len(tree) == 4
    with pytest.raises(KeyError):
        tree[""]


def test_duplicate_insert() -> None:
    """ The first value stored for a key wins. """
    tree = RadixTree()
    assert tree.insert("key", "first")
    assert not tree.insert("key", "second")
    assert tree.get_value("key") == "first"
    assert len(tree) == 1


def test_prefix_of_existing_key() -> None:
    """ A key that ends in the middle of an existing edge must still be stored. """
    tree = RadixTree()
    tree.insert("foobar", 1)
    assert tree.insert("foo", 2)
    assert tree["foo"] == 2
    assert tree["foobar"] == 1
    assert not tree.insert("foo", 3)
    assert tree["foo"] == 2
    assert set(tree.find_candidates("fo")) == {"foo", "foobar"}
    assert tree.find_candidates("foobar") == ["foobar"]


def test_presence_qualified_lookup() -> None:
    """ A stored default value can only be told apart from a missing key without get_value(). """
    tree = RadixTree(default=0)
    tree.insert("zero", 0)
    assert tree.get_value("zero") == tree.get_value("missing") == 0
    assert tree.lookup("zero") == (True, 0)
    assert tree.lookup("missing") == (False, 0)
    assert tree["zero"] == 0
    assert tree.get("missing", -1) == -1
    with pytest.raises(KeyError):
        tree["missing"]


def test_prefix_inside_edge() -> None:
    """ Prefix search works even if the prefix ends partway along an edge. """
    tree = _sample_tree()
    assert set(tree.find_candidates("b")) == {"banana", "bandana"}
    assert tree.find_candidates("band") == ["bandana"]
    assert tree.find_candidates("banda") == ["bandana"]
    assert tree.find_candidates("bandanas") == []
    assert tree.find_candidates("bx") == []
    assert tree.find_candidates("fooba") == ["foobar"]
    assert len(tree.find_candidates("ban", count=1)) == 1


def test_tuple_keys() -> None:
    """ Any sliceable sequence supporting concatenation works as a key type. """
    tree = RadixTree()
    tree.insert(("GET", "users", "list"), "list_users")
    tree.insert(("GET", "users", "show"), "show_user")
    tree.insert(("POST", "users"), "create_user")
    assert tree[("GET", "users", "show")] == "show_user"
    assert not tree.exists(("GET", "users"))
    assert set(tree.find_candidates(("GET",))) == {("GET", "users", "list"), ("GET", "users", "show")}
    assert set(tree) == {("GET", "users", "list"), ("GET", "users", "show"), ("POST", "users")}


WORD_TREE = RadixTree(TEST_WORDS)


@pytest.mark.parametrize("word, value", TEST_WORDS.items())
def test_words(word, value) -> None:
    """ Every word in the test set is stored with its own value, and finds itself by prefix search. """
    assert word in WORD_TREE
    assert WORD_TREE[word] == value
    assert word in WORD_TREE.find_candidates(word)


@pytest.mark.parametrize("prefix", ["a", "an", "ant", "ba", "bake", "banan", "ca", "cat", "r", "rom", "rub",
                                    "t", "te", "to", "w", "wa", "W", "ü", "x", "slowest"])
def test_words_prefix_search(prefix) -> None:
    """ Prefix search returns exactly the stored keys that start with the prefix. """
    expected = {w for w in TEST_WORDS if w.startswith(prefix)}
    assert set(WORD_TREE.find_candidates(prefix)) == expected


def test_words_structure() -> None:
    """ Sibling labels must never share a first symbol, and no label may be empty. """
    assert len(WORD_TREE) == len(TEST_WORDS)
    assert dict(WORD_TREE.items()) == TEST_WORDS
    assert WORD_TREE == TEST_WORDS
    stack = [WORD_TREE.root]
    while stack:
        node = stack.pop()
        firsts = [edge.label[0] for edge in node.children]
        assert len(firsts) == len(set(firsts))
        for edge in node.children:
            assert edge.label
            stack.append(edge.dest)


def test_insertion_order_independent() -> None:
    """ The same keys inserted in any order produce the same contents. """
    forward = RadixTree(TEST_WORDS)
    backward = RadixTree(reversed(list(TEST_WORDS.items())))
    assert dict(forward.items()) == dict(backward.items())
    assert forward.node_count() == backward.node_count()


def test_clear() -> None:
    """ Clearing tears down every node, and the tree can be reused afterward. """
    tree = RadixTree(TEST_WORDS)
    nodes = []
    stack = [tree.root]
    while stack:
        node = stack.pop()
        nodes.append(node)
        stack += [edge.dest for edge in node.children]
    tree.clear()
    assert len(tree) == 0
    assert list(tree) == []
    assert tree.node_count() == 0
    assert all(not node.children for node in nodes)
    tree.insert("again", 1)
    assert tree["again"] == 1


def test_deep_tree() -> None:
    """ Keys nested deeper than the recursion limit are handled without recursion. """
    tree = RadixTree()
    for i in range(1, 1201):
        tree.insert("a" * i, i)
    assert len(tree) == 1200
    assert tree["a" * 1000] == 1000
    assert len(tree.find_candidates("a" * 1190)) == 11
    tree.clear()
    assert tree.node_count() == 0


def test_log() -> None:
    """ Mutations are reported to the log callable if one is given. """
    stream = StringIO()
    logger = StreamLogger(stream, time_fmt=None, repeat_mark=None)
    tree = RadixTree(log=logger.log)
    tree.insert("banana", 1)
    tree.insert("bandana", 2)
    lines = stream.getvalue().splitlines()
    assert len(lines) == 3
    assert "'banana'" in lines[0]
    assert "Splitting edge 'banana' at 3" in lines[1]
    assert "'dana'" in lines[2]


def test_corruption(monkeypatch) -> None:
    """ A walk that consumes more symbols than the key has is an internal error, not a quiet failure. """
    messages = []
    tree = RadixTree(log=messages.append)
    tree.insert("abcdef", 1)
    # Break full-label matching so that a long edge is followed for a short key.
    monkeypatch.setattr("radix_index.tree.is_prefix_of", lambda *_: True)
    with pytest.raises(TreeCorruptionError):
        tree.insert("ab", 2)
    assert "Matched 6 symbols" in messages[-1]


@pytest.mark.parametrize("obj", [5, None, 2.5, object()])
def test_contains_non_sequence(obj) -> None:
    """ Objects that can't be keys are simply missing, whichever way they are looked up. """
    tree = RadixTree({"a": 1})
    assert obj not in tree
    assert not tree.exists(obj)
    assert tree.get(obj) is None
    assert tree.lookup(obj) == (False, None)
    with pytest.raises(KeyError):
        tree[obj]
