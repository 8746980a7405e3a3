import enum
import typing
from dataclasses import fields, is_dataclass

# Type marker key written for every dataclass
_TYPE_KEY = "_type"


def _serialize_for_json(value: typing.Any, drop_none: bool) -> typing.Any:
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (bytes, bytearray)):
        return {"_bytes_length": len(value)}
    if is_dataclass(value) and not isinstance(value, type):
        result = {
            _TYPE_KEY: type(value).__name__,
        }
        for item in fields(value):
            serialized = _serialize_for_json(getattr(value, item.name), drop_none)
            if serialized is None and drop_none:
                continue
            result[item.name] = serialized
        return result
    if isinstance(value, dict):
        return {str(key): _serialize_for_json(val, drop_none) for key, val in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_serialize_for_json(item, drop_none) for item in value]
    return value


def serialize_model(value: typing.Any, *, drop_none: bool = False) -> typing.Any:
    """
    JSON-compatible form of a model object.

    Dataclasses become dicts tagged with ``_type``, enums their XML token,
    tuples lists. With ``drop_none`` unset fields are left out, which keeps
    resolved property records readable.
    """
    return _serialize_for_json(value, drop_none)
