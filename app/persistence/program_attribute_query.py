"""Program attribute data item query.

Builds a "translated" subquery over tracked entity attributes joined to their
programs, then filters, orders and paginates it from the outside as ``t``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from app.persistence.access_control import (
    AccessControl,
    PublicReadAccessControl,
    SharingConditions,
)
from app.persistence.data_item_query import DataItemQuery
from app.persistence.ordering import Limit, ordering
from app.persistence.query_builder import (
    Fragment,
    QueryFragment,
    code_filtering,
    display_name_filtering,
    display_short_name_filtering,
    identifiable_token_filtering,
    name_filtering,
    program_id_filtering,
    short_name_filtering,
    uid_filtering,
    value_type_filtering,
)
from app.persistence.row_mapper import map_program_attribute_row
from app.persistence.statement import MandatoryFilter, OptionalFilter, Statement
from app.persistence.translation import (
    translation_names_columns_for,
    translation_names_joins_on,
    untranslated_names_columns_for,
)
from app.schemas.v1.common import DimensionItemType
from app.schemas.v1.data_items import DataItem
from app.schemas.v1.query_params import DataItemQueryParams

logger = structlog.get_logger(__name__)

ATTRIBUTE_TABLE = "trackedentityattribute"

COMMON_COLUMNS = (
    "program.name as program_name, program.uid as program_uid,"
    " trackedentityattribute.uid, trackedentityattribute.name,"
    " trackedentityattribute.valuetype, trackedentityattribute.code,"
    " program.programid, program.publicaccess as program_publicaccess,"
    " trackedentityattribute.trackedentityattributeid as id,"
    " trackedentityattribute.publicaccess as trackedentityattribute_publicaccess,"
    " trackedentityattribute.shortname, program.shortname as program_shortname"
)

JOINS = (
    " join program_attributes"
    " on program_attributes.trackedentityattributeid = trackedentityattribute.trackedentityattributeid"
    " join program on program_attributes.programid = program.programid"
)

# Every non-aggregated column of the subquery; translation joins can repeat rows.
GROUP_BY = (
    " group by program.name, program.shortname, trackedentityattribute.name,"
    " program.uid, trackedentityattribute.uid,"
    " trackedentityattribute.valuetype, trackedentityattribute.code, p_i18n_name, i18n_name,"
    " program.programid, program.publicaccess,"
    " trackedentityattribute.trackedentityattributeid, trackedentityattribute.publicaccess,"
    " trackedentityattribute.shortname, i18n_shortname, p_i18n_shortname"
)


@dataclass(frozen=True)
class ProgramAttributeSource(Fragment):
    """``select * from (<translated subquery>) t``."""

    def render(self, params: DataItemQueryParams) -> QueryFragment:
        select = f"select {COMMON_COLUMNS}"
        if params.has_locale:
            inner = QueryFragment.join(
                [
                    QueryFragment(
                        select
                        + translation_names_columns_for(ATTRIBUTE_TABLE, include_program=True)
                        + f" from {ATTRIBUTE_TABLE}"
                        + JOINS
                    ),
                    translation_names_joins_on(ATTRIBUTE_TABLE, params.locale, include_program=True),
                ],
                "",
            )
        else:
            inner = QueryFragment(
                select
                + untranslated_names_columns_for(ATTRIBUTE_TABLE, include_program=True)
                + f" from {ATTRIBUTE_TABLE}"
                + JOINS
            )
        return inner.wrapped("select * from (", GROUP_BY + ") t")


class ProgramAttributeQuery(DataItemQuery):
    """Search over tracked entity attributes in the context of their programs."""

    def __init__(self, access_control: AccessControl | None = None):
        self.access_control = access_control or PublicReadAccessControl()
        self.statement = Statement(
            source=ProgramAttributeSource(),
            clauses=(
                MandatoryFilter(SharingConditions(self.access_control, "program", ATTRIBUTE_TABLE)),
                MandatoryFilter(value_type_filtering("t.valuetype")),
                OptionalFilter(display_name_filtering("t.p_i18n_name", "t.i18n_name")),
                OptionalFilter(display_short_name_filtering("t.p_i18n_shortname", "t.i18n_shortname")),
                OptionalFilter(name_filtering("t.program_name", "t.name")),
                OptionalFilter(short_name_filtering("t.program_shortname", "t.shortname")),
                OptionalFilter(program_id_filtering("t.program_uid")),
                OptionalFilter(uid_filtering("t.uid")),
                OptionalFilter(code_filtering("t.code")),
                # Joins the optional group with the root junction, or stands alone.
                OptionalFilter(
                    identifiable_token_filtering("t.uid", "t.code", "t.i18n_name", "t.p_i18n_name")
                ),
                ordering(
                    "t.p_i18n_name, t.i18n_name, t.uid",
                    "t.program_name, t.name, t.uid",
                    "t.p_i18n_shortname, t.i18n_shortname, t.uid",
                    "t.program_shortname, t.shortname, t.uid",
                ),
                Limit(),
            ),
        )

    @property
    def dimension_item_type(self) -> DimensionItemType:
        return DimensionItemType.PROGRAM_ATTRIBUTE

    def build_query(self, params: DataItemQueryParams) -> QueryFragment:
        fragment = self.statement.render(params)
        logger.debug("Composed program attribute query", sql=fragment.sql)
        return fragment

    def build_count(self, params: DataItemQueryParams) -> QueryFragment:
        fragment = self.statement.render_count(params)
        logger.debug("Composed program attribute count query", sql=fragment.sql)
        return fragment

    def map_row(self, row: Any) -> DataItem:
        return map_program_attribute_row(row)
