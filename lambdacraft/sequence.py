"""Uniform traversal of contiguous buffers and linked chains.

Combinators only see a Cursor: current() is the element under the cursor, advance() moves to the next one, and
exhausted tells when there is nothing left. ArrayCursor walks the indices of an index-addressable buffer, LinkedCursor
follows a caller-supplied "next" function value until it yields the empty marker, so no fixed node type is assumed.

Linked chains must reach EMPTY in finitely many steps. This is the caller's obligation; LinkedCursor only enforces a
safety bound (max_steps) and raises NonTerminatingTraversal once it is exceeded.
"""

from abc import ABC, abstractmethod

from lambdacraft import config
from lambdacraft.error import InvalidArgument, NonTerminatingTraversal

logger = config.get_logger(__name__)

EMPTY = None  # end of a linked sequence
UNSET = object()  # max_steps not given, use config.settings.max_steps


class Cursor(ABC):
    """Superclass of every traversal over a sequence."""

    def __init__(self):
        self.steps = 0  # number of successful advance() calls

    @property
    @abstractmethod
    def exhausted(self):
        """Whether or not the cursor has moved past the last element."""

    @abstractmethod
    def current(self):
        """Returns the element under the cursor. Must not be called once exhausted."""

    @abstractmethod
    def advance(self):
        """Moves to the next element."""

    def __iter__(self):
        while not self.exhausted:
            yield self.current()
            self.advance()


class ArrayCursor(Cursor):
    """Cursor over indices 0..length-1 of buffer, in increasing order."""

    def __init__(self, buffer, length=None, operation=None):
        super().__init__()
        self.buffer = buffer
        self.length = ArrayCursor.check_length(buffer, length, operation)
        self.index = 0

    @staticmethod
    def check_length(buffer, length=None, operation=None):
        """Returns the logical length of buffer. length defaults to len(buffer), and must lie in [0, len(buffer)]."""
        try:
            capacity = len(buffer)
        except TypeError:
            raise InvalidArgument("expected a sized, index-addressable buffer, got {}", (type(buffer).__name__,),
                                  operation=operation)

        if length is None:
            return capacity
        if isinstance(length, bool) or not isinstance(length, int):
            raise InvalidArgument("length must be an integer, got {}", (length,), operation=operation)
        if length < 0:
            raise InvalidArgument("length must not be negative, got {}", (length,), operation=operation)
        if length > capacity:
            raise InvalidArgument("length {} exceeds buffer size {}", (length, capacity), operation=operation)
        return length

    @property
    def exhausted(self):
        return self.index >= self.length

    def current(self):
        if self.exhausted:
            raise IndexError(f"cursor exhausted after {self.length} element(s)")
        return self.buffer[self.index]

    def advance(self):
        self.index += 1
        self.steps += 1


class LinkedCursor(Cursor):
    """Cursor over a chain starting at first, moving with next(current) until EMPTY. next is called exactly once per
    visited element, and never again on an element once it has returned.
    """

    def __init__(self, first, next, max_steps=UNSET, operation=None):
        super().__init__()
        if not callable(next):
            raise InvalidArgument("next must be callable, got {}", (type(next).__name__,), operation=operation)

        self.node = first
        self.next = next
        self.max_steps = config.settings.max_steps if max_steps is UNSET else config.check_max_steps(max_steps)
        self.operation = operation

    @property
    def exhausted(self):
        return self.node is EMPTY

    def current(self):
        if self.exhausted:
            raise IndexError("cursor reached the end of the linked sequence")
        return self.node

    def advance(self):
        self.node = self.next(self.node)
        self.steps += 1

        if self.max_steps is not None and self.steps >= self.max_steps and self.node is not EMPTY:
            logger.warning("%s: traversal exceeded %d element(s), giving up", self.operation or "cursor",
                           self.max_steps)
            raise NonTerminatingTraversal("linked sequence did not end within {} element(s), is it cyclic?",
                                          (self.max_steps,), operation=self.operation, steps=self.steps)


class Node:
    """Singly linked element: data plus a link to the next Node (or EMPTY)."""

    __slots__ = ("data", "next", "released")

    def __init__(self, data, next=EMPTY):
        self.data = data
        self.next = next
        self.released = False

    @staticmethod
    def next_of(node):
        return node.next

    def release(self):
        """Drops data and link. A released Node must not be traversed again."""
        self.data = None
        self.next = EMPTY
        self.released = True

    def __repr__(self):
        return f"Node({self.data!r})" if not self.released else "Node(<released>)"


def linked(values):
    """Builds a Node chain holding values in order, returns its head (EMPTY if values is empty)."""
    head = EMPTY
    for value in reversed(list(values)):
        head = Node(value, head)
    return head


def to_list(first, next=Node.next_of, value=lambda node: node.data, max_steps=UNSET):
    """Returns the values of the chain starting at first, in traversal order."""
    return [value(node) for node in LinkedCursor(first, next, max_steps, operation="to_list")]
