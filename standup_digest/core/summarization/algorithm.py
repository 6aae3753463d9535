"""
Summarization algorithm selection.

Dependencies: enum
System role: Pure stuff vs map-reduce decision
"""

from enum import Enum


class Algorithm(str, Enum):
    """Summarization algorithms a request may ask for."""

    STUFF = "stuff"
    MAP_REDUCE = "map-reduce"
    AUTO = "auto"


def select_algorithm(
    total_tokens: int,
    mode: Algorithm | str,
    threshold: int,
) -> Algorithm:
    """
    Choose the algorithm to run.

    STUFF for an explicit "stuff" request or for "auto" below the threshold;
    MAP_REDUCE otherwise, including "auto" at exactly the threshold.

    Args:
        total_tokens: Token count across all input documents
        mode: Requested mode ("stuff", "map-reduce" or "auto")
        threshold: Stuff/map-reduce token threshold

    Returns:
        Algorithm: STUFF or MAP_REDUCE, never AUTO

    Raises:
        ValueError: If mode is not a known algorithm
    """
    mode = Algorithm(mode)
    if mode is Algorithm.STUFF:
        return Algorithm.STUFF
    if mode is Algorithm.AUTO and total_tokens < threshold:
        return Algorithm.STUFF
    return Algorithm.MAP_REDUCE
