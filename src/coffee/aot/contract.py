"""Repository contracts: the custom methods a repository declares."""

from __future__ import annotations

import inspect
import typing
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Tuple, Type

from coffee.infra.repository import CrudRepository


@dataclass(frozen=True)
class DeclaredMethod:
    name: str
    param_types: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RepositoryContract:
    name: str
    package: str
    methods: Tuple[DeclaredMethod, ...]
    type_variables: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def qualified_name(self) -> str:
        if not self.package:
            return self.name
        return f"{self.package}.{self.name}"


def contract_from_repository(repository: Type[Any]) -> RepositoryContract:
    """Describe the public methods a repository class defines itself.

    Inherited methods are not listed. Parameter types are reduced to simple
    names; generic annotations keep only their origin (``Iterable[int]``
    becomes ``Iterable``).
    """
    methods: List[DeclaredMethod] = []
    type_variables = set()
    for name, func in repository_functions(repository):
        hints = resolved_hints(repository, name, func)
        param_types = []
        for parameter in _parameters(func):
            annotation = hints.get(parameter.name, Any)
            if isinstance(annotation, typing.TypeVar):
                type_variables.add(annotation.__name__)
            param_types.append(type_simple_name(annotation))
        methods.append(DeclaredMethod(name=name, param_types=tuple(param_types)))
    return RepositoryContract(
        name=repository.__name__,
        package=repository.__module__.rpartition(".")[0],
        methods=tuple(methods),
        type_variables=frozenset(type_variables),
    )


def repository_functions(repository: Type[Any]) -> Iterable[Tuple[str, Any]]:
    for name, value in vars(repository).items():
        if name.startswith("_") or not inspect.isfunction(value):
            continue
        yield name, inspect.unwrap(value)


def resolved_hints(repository: Type[Any], name: str, func: Any) -> Dict[str, Any]:
    """Evaluate a method's annotations, naming the method when one cannot be resolved."""
    try:
        return typing.get_type_hints(func)
    except NameError as exc:
        raise ValueError(
            f"Cannot resolve annotations of {repository.__qualname__}.{name}: {exc}. "
            "Parameter types must be importable at runtime, not only under TYPE_CHECKING."
        ) from exc


def type_simple_name(annotation: Any) -> str:
    return _type_name(annotation, qualified=False)


def type_qualified_name(annotation: Any) -> str:
    return _type_name(annotation, qualified=True)


def overrides_base(method: DeclaredMethod, base: RepositoryContract) -> bool:
    """True when ``base`` has a method with the same name and compatible parameters.

    A type variable of the base contract matches any parameter type.
    """
    for candidate in base.methods:
        if candidate.name != method.name:
            continue
        if len(candidate.param_types) != len(method.param_types):
            continue
        if all(
            expected in base.type_variables or expected == actual
            for expected, actual in zip(candidate.param_types, method.param_types)
        ):
            return True
    return False


def _parameters(func: Any) -> List[inspect.Parameter]:
    parameters = list(inspect.signature(func).parameters.values())
    return parameters[1:]


def _type_name(annotation: Any, *, qualified: bool) -> str:
    if annotation is Any:
        return "typing.Any" if qualified else "Any"
    if isinstance(annotation, typing.TypeVar):
        return annotation.__name__
    origin = typing.get_origin(annotation)
    if origin is not None:
        annotation = origin
    name = getattr(annotation, "__qualname__", None) or getattr(annotation, "__name__", None)
    if name is None:
        # typing special forms only render through str(), already qualified
        name = str(annotation)
        return name if qualified else name.rpartition(".")[2]
    if not qualified:
        return name.rpartition(".")[2]
    module = getattr(annotation, "__module__", None)
    if module:
        return f"{module}.{name}"
    return name


CRUD_CONTRACT = contract_from_repository(CrudRepository)
