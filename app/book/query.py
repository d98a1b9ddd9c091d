import operator
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple, Union

from sqlalchemy import and_, or_, true, false

BOOK_FIELDS = ("book_id", "title", "author", "category", "price", "in_stock")
NUMERIC_FIELDS = ("price",)


def _check_field(field, allowed=BOOK_FIELDS):
    if field not in allowed:
        raise ValueError("unknown book field: %r" % (field,))
    return field


@dataclass(frozen=True)
class Eq:
    field: str
    value: Any


@dataclass(frozen=True)
class Lt:
    field: str
    value: float


@dataclass(frozen=True)
class Lte:
    field: str
    value: float


@dataclass(frozen=True)
class Gt:
    field: str
    value: float


@dataclass(frozen=True)
class Gte:
    field: str
    value: float


@dataclass(frozen=True)
class In:
    field: str
    values: Tuple[Any, ...]


@dataclass(frozen=True)
class And:
    clauses: Tuple["Filter", ...]


@dataclass(frozen=True)
class Or:
    clauses: Tuple["Filter", ...]


Filter = Union[Eq, Lt, Lte, Gt, Gte, In, And, Or]


@dataclass(frozen=True)
class Set:
    field: str
    value: Any


@dataclass(frozen=True)
class Multiply:
    field: str
    factor: float


Action = Union[Set, Multiply]

_COMPARISONS = {
    Eq: operator.eq,
    Lt: operator.lt,
    Lte: operator.le,
    Gt: operator.gt,
    Gte: operator.ge,
}


def where(*clauses: Filter, **equals: Any) -> And:
    """Shorthand for an AND of the given clauses plus one Eq per keyword."""
    nodes = list(clauses)
    nodes.extend(Eq(field, value) for field, value in equals.items())
    return And(tuple(nodes))


def compile_filter(node: Filter, table):
    """Turn a filter node into a SQLAlchemy boolean expression over ``table``.

    Empty ``And`` groups become ``true()``; empty ``Or`` groups and empty
    ``In`` lists become ``false()``.
    """
    if type(node) in _COMPARISONS:
        column = table.c[_check_field(node.field)]
        return _COMPARISONS[type(node)](column, node.value)

    if isinstance(node, In):
        column = table.c[_check_field(node.field)]
        if not node.values:
            return false()
        return column.in_(list(node.values))

    if isinstance(node, And):
        if not node.clauses:
            return true()
        return and_(*[compile_filter(clause, table) for clause in node.clauses])

    if isinstance(node, Or):
        if not node.clauses:
            return false()
        return or_(*[compile_filter(clause, table) for clause in node.clauses])

    raise TypeError("not a filter node: %r" % (node,))


def compile_update(actions: List[Action], table) -> Dict[str, Any]:
    """Turn update actions into the keyword values for ``update(table).values()``."""
    if not actions:
        raise ValueError("an update needs at least one action")

    values = {}
    for action in actions:
        if isinstance(action, Set):
            values[_check_field(action.field)] = action.value
        elif isinstance(action, Multiply):
            field = _check_field(action.field, NUMERIC_FIELDS)
            values[field] = table.c[field] * action.factor
        else:
            raise TypeError("not an update action: %r" % (action,))
    return values


def matches(node: Filter, record: Dict[str, Any]) -> bool:
    """Evaluate a filter node against a record dict."""
    if type(node) in _COMPARISONS:
        return _COMPARISONS[type(node)](record[_check_field(node.field)], node.value)
    if isinstance(node, In):
        return record[_check_field(node.field)] in node.values
    if isinstance(node, And):
        return all(matches(clause, record) for clause in node.clauses)
    if isinstance(node, Or):
        return any(matches(clause, record) for clause in node.clauses)
    raise TypeError("not a filter node: %r" % (node,))
