""" Test package for the radix tree index. __init__.py loads common test resources. """

import json
import os

_words_path = os.path.join(os.path.dirname(__file__), "data", "words.json")
with open(_words_path, encoding="utf-8") as fp:
    TEST_WORDS = json.load(fp)
del _words_path
