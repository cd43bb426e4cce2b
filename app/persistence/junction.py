"""Root-junction combination of optional filters."""

from collections.abc import Iterable

from app.persistence.query_builder import EMPTY, QueryFragment
from app.schemas.v1.common import RootJunction

CONNECTORS: dict[RootJunction, str] = {
    RootJunction.AND: " and ",
    RootJunction.OR: " or ",
}


def connector(junction: RootJunction) -> str:
    """Spaced SQL connector for the junction mode."""
    return CONNECTORS[junction]


def combine(fragments: Iterable[QueryFragment], junction: RootJunction) -> QueryFragment:
    """Join the non-empty fragments with the junction connector.

    More than one surviving fragment is parenthesised so that surrounding
    mandatory conditions cannot change the grouping. Returns EMPTY when
    nothing survives.
    """
    present = [fragment for fragment in fragments if fragment]
    if not present:
        return EMPTY
    combined = QueryFragment.join(present, connector(junction))
    return combined.parenthesized() if len(present) > 1 else combined
