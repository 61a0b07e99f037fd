# src/perimeter/api/decorators.py
"""
Boundary guards for Perimeter.

Decorators that validate a function's input against a named contract before
the function body runs. A failed check raises ValidationError and the body
is never entered.

Example:
    ```python
    from perimeter import Boundary, ContractRegistry, fields as f

    registry = ContractRegistry()
    registry.define("create_user", f.required("email", "string", format=r"@"))

    boundary = Boundary(registry)

    @boundary.guard("create_user")
    def create_user(params):
        return {"email": params["email"]}
    ```
"""

from __future__ import annotations

import functools
import inspect
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    FrozenSet,
    List,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from perimeter.contract.registry import ContractRegistry
from perimeter.engine.validator import validate
from perimeter.errors import GuardDefinitionError, ValidationError
from perimeter.logging import get_logger

_logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

ArgRef = Union[int, str]
Arity = Union[int, Tuple[int, ...], List[int], None]


@dataclass(frozen=True)
class GuardSpec:
    """
    One (operation, contract) pairing declared on a Boundary.

    Properties:
        operation: Qualified name of the guarded function
        contract: Contract name checked on every guarded call
        parameter: Name of the validated parameter
        arities: Call shapes (argument counts) that are guarded; None means all
    """

    operation: str
    contract: str
    parameter: str
    arities: Optional[FrozenSet[int]] = None

    def guards_shape(self, arity: int) -> bool:
        return self.arities is None or arity in self.arities


def _normalize_arity(arity: Arity) -> Optional[FrozenSet[int]]:
    if arity is None:
        return None
    values = (arity,) if isinstance(arity, int) else tuple(arity)
    for n in values:
        if isinstance(n, bool) or not isinstance(n, int) or n < 1:
            raise GuardDefinitionError(f"arity must be a positive integer, got {n!r}")
    return frozenset(values)


def _resolve_parameter(signature: inspect.Signature, arg: ArgRef, func_name: str) -> str:
    params = [
        p for p in signature.parameters.values()
        if p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD)
    ]
    if isinstance(arg, int) and not isinstance(arg, bool):
        positional = [p for p in params if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)]
        if arg < 0 or arg >= len(positional):
            raise GuardDefinitionError(
                f"{func_name}() has no positional parameter at index {arg}"
            )
        return positional[arg].name
    if isinstance(arg, str):
        if arg not in {p.name for p in params}:
            raise GuardDefinitionError(f"{func_name}() has no parameter named '{arg}'")
        return arg
    raise GuardDefinitionError(f"arg must be a parameter index or name, got {arg!r}")


def guard_operation(
    operation: F,
    contract_name: str,
    *,
    registry: ContractRegistry,
    arg: ArgRef = 0,
    arity: Arity = None,
) -> F:
    """
    Wrap ``operation`` so one of its arguments is validated before it runs.

    Args:
        operation: Function (sync or async) to guard
        contract_name: Contract the argument must satisfy
        registry: Registry the contract is looked up in at call time
        arg: Index of the positional parameter, or its name (default: first)
        arity: Restrict validation to calls supplying exactly this many
            arguments (int or tuple of ints). None guards every call shape,
            including calls that rely on trailing defaults. Shapes left out
            run unguarded.

    Returns:
        Wrapped function with the original's name, docstring and metadata.
        ``wrapper.__perimeter_guard__`` holds the GuardSpec.

    Raises:
        GuardDefinitionError: If ``arg`` or ``arity`` do not fit the signature
        ValidationError: (from the wrapper) when the argument fails the contract
    """
    func_name = getattr(operation, "__qualname__", getattr(operation, "__name__", repr(operation)))
    signature = inspect.signature(operation)
    parameter = _resolve_parameter(signature, arg, func_name)
    spec = GuardSpec(
        operation=func_name,
        contract=contract_name,
        parameter=parameter,
        arities=_normalize_arity(arity),
    )

    def _checked_call(args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Tuple[Tuple[Any, ...], Dict[str, Any]]:
        if not spec.guards_shape(len(args) + len(kwargs)):
            return args, kwargs

        # Binding errors are the caller's TypeError, same as an unguarded call
        bound = signature.bind(*args, **kwargs)
        bound.apply_defaults()

        result = validate(registry, contract_name, bound.arguments[parameter])
        if not result.passed:
            _logger.debug(
                "Guard rejected %s() against '%s': %d violation(s)",
                func_name, contract_name, len(result.violations),
            )
            raise ValidationError(result.violations, contract=contract_name)

        bound.arguments[parameter] = result.value
        return bound.args, bound.kwargs

    if inspect.iscoroutinefunction(operation):
        @functools.wraps(operation)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            call_args, call_kwargs = _checked_call(args, kwargs)
            return await operation(*call_args, **call_kwargs)

        wrapper: Any = async_wrapper
    else:
        @functools.wraps(operation)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            call_args, call_kwargs = _checked_call(args, kwargs)
            return operation(*call_args, **call_kwargs)

        wrapper = sync_wrapper

    wrapper.__perimeter_guard__ = spec
    return wrapper  # type: ignore


def guard(
    contract_name: str,
    *,
    registry: ContractRegistry,
    arg: ArgRef = 0,
    arity: Arity = None,
) -> Callable[[F], F]:
    """Decorator form of guard_operation()."""
    def decorator(func: F) -> F:
        return guard_operation(func, contract_name, registry=registry, arg=arg, arity=arity)

    return decorator


class Boundary:
    """
    Per-scope guard builder.

    Holds the registry for one declaring scope and records every
    (operation, contract) pair it wraps, so a scope can list and check its
    guards after declaration.
    """

    def __init__(self, registry: ContractRegistry):
        self.registry = registry
        self._guards: List[GuardSpec] = []

    def __repr__(self) -> str:
        return f"Boundary({len(self._guards)} guards, {self.registry!r})"

    @property
    def guards(self) -> List[GuardSpec]:
        """Declared guards in declaration order."""
        return list(self._guards)

    def guard(
        self,
        contract_name: str,
        *,
        arg: ArgRef = 0,
        arity: Arity = None,
    ) -> Callable[[F], F]:
        """
        Decorator that guards a function with ``contract_name``.

        See guard_operation() for ``arg`` and ``arity``.
        """
        def decorator(func: F) -> F:
            wrapped = guard_operation(
                func, contract_name, registry=self.registry, arg=arg, arity=arity
            )
            self._guards.append(wrapped.__perimeter_guard__)
            return wrapped

        return decorator

    def missing_contracts(self) -> List[str]:
        """Contract names referenced by guards but absent from the registry."""
        missing: List[str] = []
        for spec in self._guards:
            if spec.contract not in self.registry and spec.contract not in missing:
                missing.append(spec.contract)
        return missing


class Overloaded:
    """
    Dispatch one operation name to different functions by call shape.

    Each registered function owns the argument counts its signature accepts.
    Guards stay attached to the individual function they decorate, so guarding
    one shape never guards another.

    Example:
        ```python
        process = Overloaded("process")

        @process.register
        @boundary.guard("input")
        def _process_one(params):
            ...

        @process.register
        def _process_two(params, opts):
            ...
        ```
    """

    def __init__(self, name: str, doc: Optional[str] = None):
        self.__name__ = name
        self.__qualname__ = name
        self.__doc__ = doc
        self._shapes: Dict[int, Callable[..., Any]] = {}

    def __repr__(self) -> str:
        return f"Overloaded({self.__name__}, shapes={sorted(self._shapes)})"

    @property
    def shapes(self) -> List[int]:
        return sorted(self._shapes)

    def register(self, func: F) -> F:
        """Add ``func`` for every argument count its signature accepts."""
        arities = _accepted_arities(func)
        clash = sorted(arities & set(self._shapes))
        if clash:
            raise GuardDefinitionError(
                f"{self.__name__}: call shape(s) {clash} already registered"
            )
        for n in arities:
            self._shapes[n] = func
        return func

    def implementation(self, arity: int) -> Optional[Callable[..., Any]]:
        return self._shapes.get(arity)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        arity = len(args) + len(kwargs)
        func = self._shapes.get(arity)
        if func is None:
            raise TypeError(
                f"{self.__name__}() has no call shape taking {arity} argument(s); "
                f"known shapes: {self.shapes}"
            )
        return func(*args, **kwargs)


def _accepted_arities(func: Callable[..., Any]) -> FrozenSet[int]:
    # signature() follows __wrapped__, so guarded functions report the original shape
    params = inspect.signature(func).parameters.values()
    if any(p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD) for p in params):
        raise GuardDefinitionError(
            f"{getattr(func, '__name__', func)}: *args/**kwargs functions have no fixed call shape"
        )
    required = sum(1 for p in params if p.default is p.empty)
    total = len(params)
    return frozenset(range(required, total + 1))
