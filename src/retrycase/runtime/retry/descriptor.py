"""Signature inspection for the dynamic invoker.

Describes a callable once, up front: how it binds positional arguments and
what its return annotation promises. Undeclared facts stay None and are
settled from the runtime value instead.
"""

from __future__ import annotations

import inspect
import types
from dataclasses import dataclass
from typing import Any, Never, NoReturn, Union, get_args, get_origin

from retrycase.foundation.errors import Result

_EMPTY = inspect.Signature.empty
_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(frozen=True, slots=True)
class CallableDescriptor:
    """What a callable declares about its arguments and results.

    Attributes:
        signature: Inspected signature, None for builtins without one
        variadic: Accepts ``*args``
        required: Positional parameters without defaults
        maximum: Positional parameters in total (None when variadic or unknown)
        return_arity: Declared number of return values, None when undeclared
        error_return: True if the trailing return is declared error-shaped,
            False if declared as something else, None if unknown
    """

    signature: inspect.Signature | None
    variadic: bool
    required: int
    maximum: int | None
    return_arity: int | None
    error_return: bool | None

    def accepts(self, args: tuple[Any, ...]) -> bool:
        """Whether the positional args bind to the signature."""
        if self.signature is None:
            return True
        try:
            self.signature.bind(*args)
        except TypeError:
            return False
        return True

    def expected(self) -> str:
        if self.variadic:
            return f"at least {self.required}"
        if self.maximum is None or self.maximum == self.required:
            return str(self.required)
        return f"{self.required} to {self.maximum}"


def describe(fn: Any) -> CallableDescriptor:
    """Build a descriptor for fn, which must already be callable."""
    sig = _signature(fn)
    if sig is None:
        return CallableDescriptor(None, True, 0, None, None, None)

    params = list(sig.parameters.values())
    variadic = any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params)
    positional = [p for p in params if p.kind in _POSITIONAL]
    required = sum(1 for p in positional if p.default is _EMPTY)
    arity, error_return = _return_shape(sig.return_annotation)
    return CallableDescriptor(
        signature=sig,
        variadic=variadic,
        required=required,
        maximum=None if variadic else len(positional),
        return_arity=arity,
        error_return=error_return,
    )


def _signature(fn: Any) -> inspect.Signature | None:
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return None
    try:
        sig = inspect.signature(fn, eval_str=True)
    except (NameError, TypeError, SyntaxError, AttributeError):
        pass  # unresolvable string annotations: keep the raw signature
    ret = sig.return_annotation
    return sig.replace(return_annotation=_EMPTY) if isinstance(ret, str) else sig


def _return_shape(ann: Any) -> tuple[int | None, bool | None]:
    """Declared (arity, trailing-is-error) for a return annotation."""
    if ann is _EMPTY or ann is Any or ann is tuple:
        return None, None
    if ann is None or ann is type(None) or ann is NoReturn or ann is Never:
        return 0, None
    if _is_result(ann):
        return 1, True
    if get_origin(ann) is tuple:
        args = get_args(ann)
        if args == () or args == ((),):
            return 0, None
        if len(args) == 2 and args[1] is Ellipsis:
            return None, _is_error_type(args[0])
        return len(args), _is_error_type(args[-1])
    return 1, _is_error_type(ann)


def _is_result(tp: Any) -> bool:
    origin = get_origin(tp) or tp
    return isinstance(origin, type) and issubclass(origin, Result)


def _is_error_type(tp: Any) -> bool | None:
    """True for exception classes and unions containing one; None if opaque."""
    if tp is Any or tp is object:
        return None
    if get_origin(tp) in (Union, types.UnionType):
        members = [m for m in get_args(tp) if m is not type(None)]
        verdicts = [_is_error_type(m) for m in members]
        if any(v is True for v in verdicts):
            return True
        return None if any(v is None for v in verdicts) else False
    return isinstance(tp, type) and issubclass(tp, BaseException)
