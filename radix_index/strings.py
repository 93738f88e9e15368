""" Utility module for the key arithmetic that drives the radix tree. Keys may be any indexable sequence
    (str, bytes, tuple...), so nothing here assumes string methods. All functions are pure. """

from typing import Sequence


def common_prefix_length(a:Sequence, b:Sequence, a_start=0, b_start=0) -> int:
    """ Return the number of leading symbols that match between <a> from <a_start> and <b> from <b_start>.
        The result is bounded by the shorter of the two remaining lengths. """
    length = min(len(a) - a_start, len(b) - b_start)
    i = 0
    while i < length and a[a_start + i] == b[b_start + i]:
        i += 1
    return i


def is_prefix_of(candidate:Sequence, text:Sequence, text_start=0) -> bool:
    """ Return True if all of <candidate> appears in <text> starting at <text_start>. """
    end = text_start + len(candidate)
    if end > len(text):
        return False
    return text[text_start:end] == candidate


def matches_as_prefix(text:Sequence, prefix:Sequence, text_start=0, prefix_start=0) -> bool:
    """ Return True if the rest of <prefix> from <prefix_start> matches <text> from <text_start>.
        A prefix longer than the rest of the text can never match. """
    prefix_len = len(prefix) - prefix_start
    if prefix_len > len(text) - text_start:
        return False
    return common_prefix_length(text, prefix, text_start, prefix_start) == prefix_len
