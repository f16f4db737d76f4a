"""The four LambdaCraft demonstration programs, returning their results instead of printing them."""

from lambdacraft.combinators import fold, fold_s, foreach_s, map, map_s
from lambdacraft.config import get_logger
from lambdacraft.function import Lambda
from lambdacraft.sequence import EMPTY, Node, linked

logger = get_logger(__name__)

NUMBERS = (1.1, 2.1, 3.1, 4.1, 5.1, 6.1, 7.1, 8.1, 9.1)


def fold_array_example(numbers=NUMBERS, nested_value=0.01):
    """Sums numbers, adding the captured nested_value once per element. 45.99 for the default arguments."""
    step = Lambda(lambda acc, value, *, nested: acc + value + nested, captures={"nested": nested_value})
    return fold(numbers, step, 0.0)


def map_array_example(numbers=NUMBERS, nested_value=0.5):
    """Returns numbers shifted by the captured nested_value, written into a destination of the same size."""
    mapped = [0.0] * len(numbers)
    map(numbers, Lambda(lambda value, *, nested: value + nested, captures={"nested": nested_value}), mapped)
    return mapped


def _release_next(node):
    following = node.next
    node.release()
    return following


def fold_struct_example(items):
    """Links items into a chain, sums the lengths of their values, then releases the chain.

    The chain is built by a fold prepending each item, so it holds items in reverse order.
    """
    head = fold(items, lambda acc, value: Node(value, acc), EMPTY)
    total_length = fold_s(head, Node.next_of, lambda acc, node: acc + len(node.data), 0)
    logger.debug("fold_struct_example: %d item(s), total length %d", len(items), total_length)

    foreach_s(head, _release_next)
    return total_length


def map_struct_example(values=(1, 2, 3)):
    """Squares each node of a chain holding values into a new chain. Returns (source head, new head)."""
    head = linked(values)
    new_head = map_s(head, Node.next_of, lambda node, tail: Node(node.data * node.data, tail), release=Node.release)
    return head, new_head
