"""Bind caller-supplied parameters to a target signature."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from rpcdispatch.rpc.method import normalize_parameters
from rpcdispatch.rpc.signature import Signature
from rpcdispatch.utils.exceptions import InvalidParameters


@dataclass(slots=True)
class BoundArguments:
    args: list[Any] = field(default_factory=list)
    kwargs: dict[str, Any] = field(default_factory=dict)


def normalize_key(key: Any) -> str:
    """Convert snake_case / kebab-case keys to lowerCamelCase (``user_id`` -> ``userId``)."""
    words = str(key).replace("_", " ").replace("-", " ").split(" ")
    camel = "".join(word[:1].upper() + word[1:] for word in words)
    return camel[:1].lower() + camel[1:]


def bind(signature: Signature, parameters: Any) -> BoundArguments:
    """Produce call arguments in declared order, or raise InvalidParameters.

    Positional parameters are passed through unchanged. Named parameters are
    matched to declared names after normalizing both sides with
    ``normalize_key``; missing optional parameters take their declared default.
    """
    params = normalize_parameters(parameters)
    count = len(params)
    if count < signature.required_count or (count > signature.total_count and not signature.variadic):
        raise InvalidParameters(
            "Invalid number of parameters. %d given but %d are required of %d total."
            % (count, signature.required_count, signature.total_count)
        )

    if not isinstance(params, Mapping):
        return _bind_positional(signature, list(params))

    supplied = {normalize_key(key): value for key, value in params.items()}
    bound = BoundArguments()
    for param in signature.parameters:
        key = normalize_key(param.name)
        if key in supplied:
            value = supplied[key]
        elif param.is_optional:
            value = param.default
        else:
            raise InvalidParameters(f"Parameter '{param.name}' is missing.")
        if param.keyword_only:
            bound.kwargs[param.name] = value
        else:
            bound.args.append(value)
    return bound


def _bind_positional(signature: Signature, values: list[Any]) -> BoundArguments:
    # keyword-only parameters cannot be reached by position
    capacity = sum(1 for p in signature.parameters if not p.keyword_only)
    if len(values) > capacity and not signature.variadic:
        raise InvalidParameters(
            "Invalid number of parameters. %d given but only %d can be passed by position."
            % (len(values), capacity)
        )
    for param in signature.parameters:
        if param.keyword_only and not param.is_optional:
            raise InvalidParameters(f"Parameter '{param.name}' is missing.")
    return BoundArguments(args=values)
