"""
Identifiers — Resolve id-or-label tokens to entity IDs

Operators may refer to an entity either by numeric ID or by label.
The token is classified once, syntactically, at the CLI boundary:

- "42"         -> ById(42)      (used directly, no remote call)
- "web-tier"   -> ByLabel(...)  (resolved with exactly one remote lookup)
- ""           -> InvalidArgument (never looked up)

Resolution is generic over entity kind: each command supplies its own
label lookup (instance array by label, volume template by label, ...).
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar, Union

from ..errors import InvalidArgument, NotFound


@dataclass(frozen=True)
class ById:
    """Identifier given as a numeric ID."""
    id: int

    def __str__(self) -> str:
        return str(self.id)


@dataclass(frozen=True)
class ByLabel:
    """Identifier given as a label (or name) needing remote resolution."""
    label: str

    def __str__(self) -> str:
        return self.label


Identifier = Union[ById, ByLabel]

T = TypeVar("T")

_DECIMAL = re.compile(r"[+-]?[0-9]+")


def parse_identifier(token: str) -> Identifier:
    """
    Classify a user-supplied token as an ID or a label.

    Args:
        token: Raw flag value

    Returns:
        ById if the token is a base-10 integer, ByLabel otherwise

    Raises:
        InvalidArgument: If the token is empty
    """
    if token is None or not token.strip():
        raise InvalidArgument("An empty string is not a valid id or label")

    text = token.strip()
    if _DECIMAL.fullmatch(text):
        return ById(int(text))
    return ByLabel(text)


def resolve_id(
    token: Union[str, Identifier],
    lookup: Callable[[str], Optional[int]],
    kind: str = "entity"
) -> int:
    """
    Turn an id-or-label token into a concrete ID.

    Args:
        token: Raw token or an already parsed Identifier
        lookup: Called with the label, returns the entity's ID
                (None if no entity matches); called at most once
        kind: Entity kind for error messages (e.g. "instance array")

    Returns:
        The entity's ID

    Raises:
        InvalidArgument: Empty token
        NotFound: The lookup matched nothing
        RemoteError: The lookup call itself failed (propagated)
    """
    identifier = parse_identifier(token) if isinstance(token, str) else token

    if isinstance(identifier, ById):
        return identifier.id

    entity_id = lookup(identifier.label)
    if entity_id is None:
        raise NotFound(f"Could not locate {kind} with label '{identifier.label}'")
    return entity_id


def get_entity(
    token: Union[str, Identifier],
    by_id: Callable[[int], T],
    by_label: Callable[[str], Optional[T]],
    kind: str = "entity"
) -> T:
    """
    Fetch a whole entity by id-or-label token.

    Used when the command needs the entity itself (for confirmation
    messages or edits), not just its ID.

    Raises:
        InvalidArgument: Empty token
        NotFound: The label lookup matched nothing
        RemoteError: The fetch failed (propagated)
    """
    identifier = parse_identifier(token) if isinstance(token, str) else token

    if isinstance(identifier, ById):
        return by_id(identifier.id)

    entity = by_label(identifier.label)
    if entity is None:
        raise NotFound(f"Could not locate {kind} with id/label '{identifier.label}'")
    return entity
