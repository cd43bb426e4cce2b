"""Sharing conditions applied to every data item query.

The predicate logic is owned by the access-control collaborator; the query
composer only supplies the aliases of the tables whose sharing must hold.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.core.config import AccessControlMode
from app.persistence.query_builder import EMPTY, Fragment, QueryFragment
from app.schemas.v1.query_params import DataItemQueryParams

# Public access strings are "rwrw----"-style; the third character grants data read.
PUBLIC_READ_PATTERN = "__r%"


class AccessControl(ABC):
    @abstractmethod
    def sharing_conditions(
        self, table_one: str, table_two: str, params: DataItemQueryParams
    ) -> QueryFragment:
        """Visibility predicate over the outer ``t`` alias for both tables."""
        ...


class PublicReadAccessControl(AccessControl):
    """Both tables must be publicly readable (no public access string counts as readable)."""

    def sharing_conditions(
        self, table_one: str, table_two: str, params: DataItemQueryParams
    ) -> QueryFragment:
        conditions = [
            QueryFragment(
                f"(t.{table}_publicaccess like :publicReadPattern"
                f" or t.{table}_publicaccess is null)",
                {"publicReadPattern": PUBLIC_READ_PATTERN},
            )
            for table in (table_one, table_two)
        ]
        return QueryFragment.join(conditions, " and ")


class UnrestrictedAccessControl(AccessControl):
    """No sharing restriction, e.g. for superusers and internal jobs."""

    def sharing_conditions(
        self, table_one: str, table_two: str, params: DataItemQueryParams
    ) -> QueryFragment:
        return EMPTY


@dataclass(frozen=True)
class SharingConditions(Fragment):
    """Delegates rendering of the mandatory sharing filter to an AccessControl."""

    access_control: AccessControl
    table_one: str
    table_two: str

    def render(self, params: DataItemQueryParams) -> QueryFragment:
        return self.access_control.sharing_conditions(self.table_one, self.table_two, params)


def access_control_for(mode: AccessControlMode) -> AccessControl:
    if mode == AccessControlMode.UNRESTRICTED:
        return UnrestrictedAccessControl()
    return PublicReadAccessControl()
