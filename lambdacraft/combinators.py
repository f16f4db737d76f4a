"""Higher-order operations over contiguous and linked sequences.

Contiguous sequences (lists, tuples, array.array, ...) are walked by index:
    fold(sequence, combine, initial)        -> accumulator
    map(sequence, transform, destination)   -> None, fills destination

Linked sequences are walked from a first element with a caller-supplied function value, until EMPTY:
    fold_s(first, next, combine, initial)   -> accumulator
    foreach_s(first, step)                  -> None, step returns the element to visit next
    map_s(first, next, transform)           -> head of a newly built chain

All of them run synchronously to completion. Errors raised by the supplied function values propagate unchanged;
the combinators themselves only raise InvalidArgument, NonTerminatingTraversal and OutOfMemory.
"""

from lambdacraft.config import get_logger
from lambdacraft.error import InvalidArgument, OutOfMemory
from lambdacraft.sequence import ArrayCursor, LinkedCursor, EMPTY, UNSET

logger = get_logger(__name__)


def fold_cursor(cursor, combine, initial):
    """Threads an accumulator through every element under cursor: acc = combine(acc, element)."""
    acc = initial
    while not cursor.exhausted:
        acc = combine(acc, cursor.current())
        cursor.advance()
    return acc


def fold(sequence, combine, initial, length=None):
    """Folds the first length elements of sequence (all of them by default) from index 0 upwards. Returns initial
    untouched for an empty sequence. sequence is never mutated.
    """
    cursor = ArrayCursor(sequence, length, operation="fold")
    logger.debug("fold: %d element(s)", cursor.length)
    return fold_cursor(cursor, combine, initial)


def fold_s(first, next, combine, initial, max_steps=UNSET):
    """Folds a linked sequence: combine(acc, element) for every element from first, moving with next(element)."""
    return fold_cursor(LinkedCursor(first, next, max_steps, operation="fold_s"), combine, initial)


def foreach_s(first, step, max_steps=UNSET):
    """Visits a linked sequence for side effects. step(element) does the work and returns the element to visit next.

    Nothing touches an element after step has returned for it, so step may release the element it was given, as long
    as it reads the forward link first:

        def free(node):
            following = node.next
            node.release()
            return following
    """
    cursor = LinkedCursor(first, step, max_steps, operation="foreach_s")
    while not cursor.exhausted:
        cursor.advance()


def map(sequence, transform, destination, length=None):
    """destination[i] = transform(sequence[i]) for i in 0..length-1, in order.

    destination is caller-allocated and never resized, it must hold at least length elements. It may be sequence
    itself, provided transform does not look at elements other than the one it is given.
    """
    cursor = ArrayCursor(sequence, length, operation="map")
    capacity = ArrayCursor.check_length(destination, operation="map")
    if capacity < cursor.length:
        raise InvalidArgument("destination holds {} element(s), source has {}", (capacity, cursor.length),
                              operation="map")

    logger.debug("map: %d element(s)", cursor.length)
    while not cursor.exhausted:
        destination[cursor.index] = transform(cursor.current())
        cursor.advance()


def map_s(first, next, transform, max_steps=UNSET, release=None):
    """Builds a new linked sequence from the one starting at first.

    transform(element, mapped_tail) creates the new element for element and links it to mapped_tail, the already
    built remainder (EMPTY for the last element). It is invoked from the last element back to the first, so
    map_s(first) == transform(first, map_s(next(first))), but the chain is collected first and rebuilt in a loop:
    its length is not limited by the recursion limit.

    The source chain is left untouched. The build is all-or-nothing: if a transform fails, every element this call
    already created is passed to release (when given) and the error is re-raised. A MemoryError, while collecting
    the source or building, is reported as OutOfMemory.

    :return: head of the new chain, owned by the caller
    """
    cursor = LinkedCursor(first, next, max_steps, operation="map_s")
    elements = []
    built = []
    tail = EMPTY
    try:
        elements.extend(cursor)
        logger.debug("map_s: building %d element(s)", len(elements))

        for element in reversed(elements):
            tail = transform(element, tail)
            built.append(tail)
    except MemoryError as e:
        released = _release_all(built, release)
        raise OutOfMemory("allocation failed after {} of {} element(s)", (len(built), len(elements)),
                          operation="map_s", released=released) from e
    except BaseException:
        _release_all(built, release)
        raise

    return tail


def _release_all(built, release):
    """Hands every element of a partial map_s build to release, newest first. A failing release is logged and the
    remaining elements are still released. Returns how many were released without error.
    """
    if release is None or not built:
        return 0

    logger.warning("map_s: releasing %d partially built element(s)", len(built))
    released = 0
    for element in reversed(built):
        try:
            release(element)
        except Exception:
            logger.exception("map_s: could not release %r", element)
        else:
            released += 1
    return released
