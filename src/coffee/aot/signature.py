"""Signature keys shared by declared methods and processed-method records.

A key is ``name(Type1,Type2)`` using simple (unqualified) type names in
declaration order, or ``name()`` for a method without parameters.
"""

from __future__ import annotations

from typing import Iterable, List

from coffee.aot.contract import DeclaredMethod


def signature_key(name: str, param_types: Iterable[str]) -> str:
    simple = ",".join(simple_type_name(param_type) for param_type in param_types)
    return f"{name}({simple})"


def declared_signature_key(method: DeclaredMethod) -> str:
    return signature_key(method.name, method.param_types)


def processed_signature_key(name: str, signature: str) -> str:
    return signature_key(name, parse_parameter_types(signature))


def parse_parameter_types(signature: str) -> List[str]:
    """Return the parameter types listed between the parentheses of ``signature``.

    ``"def list pkg.Repo.find(builtins.str, decimal.Decimal)"`` gives
    ``["builtins.str", "decimal.Decimal"]``. A signature without parentheses
    or with an empty list has no parameters.
    """
    start = signature.find("(")
    if start == -1:
        return []
    end = signature.find(")", start)
    if end == -1:
        raise ValueError(f"Unterminated parameter list in signature: {signature!r}")
    params = signature[start + 1 : end].strip()
    if not params:
        return []
    types = [param.strip() for param in params.split(",")]
    if any(not param for param in types):
        raise ValueError(f"Empty parameter type in signature: {signature!r}")
    return types


def simple_type_name(type_name: str) -> str:
    return type_name.strip().rpartition(".")[2]
