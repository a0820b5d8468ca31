from __future__ import annotations
from datetime import date
from typing import Any

from catalog.domain.models import reference_ids

def _op_eq(v, arg): return v == arg
def _op_contains(v, arg): return (arg in v) if isinstance(v, str) else False

def _op_ieq(v, arg):
    if not isinstance(v, str) or not isinstance(arg, str):
        return False
    return v.casefold() == arg.casefold()

def _op_refs(v, arg):
    # reference field holds arg, whether v is a single id or a list of ids
    return arg in reference_ids(v)

def _op_gt(v, arg): return v is not None and v > arg
def _op_lt(v, arg): return v is not None and v < arg

_OPS = {
    "eq": _op_eq, "ieq": _op_ieq, "contains": _op_contains, "refs": _op_refs,
    ">": _op_gt, "<": _op_lt,
}

def _get_field(obj: Any, path: str):
    # supports dotted paths like "book.title"
    cur = obj
    for part in path.split("."):
        cur = getattr(cur, part) if hasattr(cur, part) else (cur.get(part) if isinstance(cur, dict) else None)
        if cur is None: break
    return cur

def _coerce_for_cmp(value):
    # ISO strings compare against date fields (date_of_birth, due_back)
    if isinstance(value, str):
        try: return date.fromisoformat(value)
        except ValueError: return value
    return value

def match_obj(obj: Any, spec: dict[str, Any] | None) -> bool:
    """
    spec format: { "field_name": { "op": arg, ... }, ... }
    example: { "genre": {"refs": genre_id}, "status": {"eq": "Available"} }
    """
    if not spec: return True
    for field, ops in spec.items():
        v = _get_field(obj, field)
        for op, arg in ops.items():
            fn = _OPS.get(op)
            if not fn: continue
            if op in (">", "<") and isinstance(v, date):
                arg = _coerce_for_cmp(arg)
            if not fn(v, arg):
                return False
    return True
