""" Benchmark generators for each tree operation. Counts are tailored for a reasonable running time.
    Each public function takes optional integer sizes and returns a no-arg callable to profile. """

from random import Random

from radix_index import RadixTree

BEST_OF = 3
OPERATIONS = ["insert", "lookup", "prefix"]
ALPHABET = 'abcdefghijklmnopqrstuvwxyz'


def _random_keys(n:int, max_len=12, seed=0) -> list:
    """ Keys drawn from a small alphabet share plenty of prefixes, which is the interesting case. """
    rnd = Random(seed)
    return [''.join(rnd.choice(ALPHABET[:8]) for _ in range(rnd.randint(1, max_len))) for _ in range(n)]


def _filled_tree(keys:list) -> RadixTree:
    return RadixTree(zip(keys, range(len(keys))))


def insert(n=50000):
    keys = _random_keys(n)
    def run() -> None:
        RadixTree(zip(keys, range(n)))
    return run


def lookup(n=50000):
    keys = _random_keys(n)
    tree = _filled_tree(keys[::2])
    def run() -> None:
        for k in keys:
            tree.get_value(k)
    return run


def prefix(n=5000, prefix_len=3):
    keys = _random_keys(n * 10)
    tree = _filled_tree(keys)
    prefixes = [k[:prefix_len] for k in _random_keys(n, seed=1)]
    def run() -> None:
        for p in prefixes:
            tree.find_candidates(p, count=100)
    return run
