"""Value tagged union for template arguments.

Arguments reach the evaluator as a loosely typed tree (JSON-shaped data).
Every node is converted into one of the closed ``Value`` variants below,
discriminated by ``kind``.  There is a single numeric kind: integers and
floats both become ``NumberValue``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class StringValue(BaseModel):
    kind: Literal["string"] = "string"
    value: str


class NumberValue(BaseModel):
    kind: Literal["number"] = "number"
    value: float


class BooleanValue(BaseModel):
    kind: Literal["boolean"] = "boolean"
    value: bool


class ObjectValue(BaseModel):
    """A nested object.  Key lookup rules live in the resolver."""

    kind: Literal["object"] = "object"
    fields: dict[str, Value] = {}


class ArrayValue(BaseModel):
    kind: Literal["array"] = "array"
    items: list[Value] = []


Value = Annotated[
    Union[
        StringValue,
        NumberValue,
        BooleanValue,
        ObjectValue,
        ArrayValue,
    ],
    Field(discriminator="kind"),
]

# Rebuild models with recursive Value references.
ObjectValue.model_rebuild()
ArrayValue.model_rebuild()


_VALUE_TYPES = (StringValue, NumberValue, BooleanValue, ObjectValue, ArrayValue)


def to_value(obj: Any) -> Value:
    """Convert plain Python / JSON data into a ``Value``.

    - ``bool`` -> BooleanValue (checked before ``int``)
    - ``int`` / ``float`` -> NumberValue
    - ``str`` -> StringValue
    - ``None`` -> empty StringValue (JSON ``null`` arguments)
    - mappings -> ObjectValue, lists/tuples -> ArrayValue
    - existing ``Value`` instances pass through unchanged

    There is no null kind, so a ``null`` argument behaves exactly like
    ``""``: ``X == ''`` is true, ``X`` alone is false, ``exists(X)`` is
    true, and comparing it with a number is a string/number mismatch.

    Raises ``TypeError`` for unsupported types and ``ValueError`` for
    integers too large to represent as a float.
    """
    if isinstance(obj, _VALUE_TYPES):
        return obj
    if isinstance(obj, bool):
        return BooleanValue(value=obj)
    if isinstance(obj, (int, float)):
        try:
            return NumberValue(value=float(obj))
        except OverflowError as exc:
            raise ValueError(f"Number {obj} is out of range") from exc
    if isinstance(obj, str):
        return StringValue(value=obj)
    if obj is None:
        return StringValue(value="")
    if isinstance(obj, Mapping):
        return ObjectValue(fields={str(k): to_value(v) for k, v in obj.items()})
    if isinstance(obj, (list, tuple)):
        return ArrayValue(items=[to_value(v) for v in obj])
    raise TypeError(
        f"Cannot convert {type(obj).__name__} to a template value"
    )


def to_python(value: Value) -> Any:
    """Inverse of :func:`to_value`, used for rendering and diagnostics."""
    if isinstance(value, ObjectValue):
        return {k: to_python(v) for k, v in value.fields.items()}
    if isinstance(value, ArrayValue):
        return [to_python(v) for v in value.items]
    return value.value
