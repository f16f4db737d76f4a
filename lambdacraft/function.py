"""First-class function values with an explicit captured environment.

Any Python callable can be handed to a combinator. Lambda exists for the cases where the captured environment should be
spelled out: each name in captures is bound when the Lambda is built (by value) unless it is wrapped in a Ref, in which
case the cell's current value is read on every call (by reference). The environment is resolved per call, the function
value itself is built once and reused for every element a combinator visits.

    nested = 0.01
    step = Lambda(lambda acc, value, *, nested: acc + value + nested, captures={"nested": nested})
    fold(numbers, step, 0.0)
"""

import inspect


class Ref:
    """Mutable cell, captured by reference."""

    def __init__(self, value=None):
        self.value = value

    def get(self):
        return self.value

    def set(self, value):
        self.value = value

    def __repr__(self):
        return f"Ref({self.value!r})"


class Lambda:
    """Callable with a fixed parameter list, an optional return type, and a captured environment."""

    def __init__(self, body, captures=None, returns=None, name=None):
        """Builds a function value from body.

        :param body: callable; its positional parameters are the lambda's parameters, its keyword-only parameters
                     receive the captured names
        :param captures: mapping of captured name to value (or Ref), copied at construction
        :param returns: optional type every result must be an instance of
        :param name: name used in repr and error messages, defaults to body's name
        """
        if not callable(body):
            raise TypeError(f"Lambda body must be callable, got {type(body).__name__}")

        self.body = body
        self.captures = dict(captures) if captures else {}
        self.returns = returns
        self.name = name if name is not None else getattr(body, "__name__", "<lambda>")

        try:
            signature = inspect.signature(body)
        except ValueError:
            signature = None  # builtins without introspectable signature: the call itself checks its arguments

        self.params = ()
        self.required = 0  # positional parameters without a default
        self.variadic = signature is None
        if signature is not None:
            positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
            params = [param for param in signature.parameters.values()
                      if param.kind in positional and param.name not in self.captures]
            self.params = tuple(param.name for param in params)
            self.required = sum(1 for param in params if param.default is inspect.Parameter.empty)
            self.variadic = any(param.kind is inspect.Parameter.VAR_POSITIONAL
                                for param in signature.parameters.values())

    @property
    def arity(self):
        return len(self.params)

    @property
    def env(self):
        """Captured environment with every Ref dereferenced."""
        return {name: value.value if isinstance(value, Ref) else value for name, value in self.captures.items()}

    def with_captures(self, **captures):
        """Returns a new Lambda whose environment is this one's extended (or overridden) by captures."""
        return Lambda(self.body, {**self.captures, **captures}, self.returns, self.name)

    def __call__(self, *args):
        if len(args) < self.required or (not self.variadic and len(args) > self.arity):
            expected = self.arity if self.required == self.arity else f"{self.required} to {self.arity}"
            raise TypeError(f"{self.name}() takes {expected} argument(s) {self.params} but {len(args)} were given")

        result = self.body(*args, **self.env)
        if self.returns is not None and not isinstance(result, self.returns):
            raise TypeError(f"{self.name}() returned {type(result).__name__}, expected {self.returns.__name__}")
        return result

    def __repr__(self):
        params = ", ".join(self.params)
        captured = ", ".join(self.captures)
        return f"Lambda({self.name}({params}){' [' + captured + ']' if captured else ''})"


def identity(value):
    return value


def compose(*fns):
    """Composes unary callables right to left: compose(g, f)(x) == g(f(x))."""

    def composed(value):
        for fn in reversed(fns):
            value = fn(value)
        return value

    return composed
