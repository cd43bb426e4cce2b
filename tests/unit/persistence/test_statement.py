"""Unit tests for the typed statement renderer."""

from dataclasses import dataclass

from app.persistence.ordering import Limit, ordering
from app.persistence.query_builder import (
    Fragment,
    QueryFragment,
    name_filtering,
    program_id_filtering,
    value_type_filtering,
)
from app.persistence.statement import MandatoryFilter, OptionalFilter, Statement
from app.schemas.v1.common import RootJunction
from app.schemas.v1.query_params import DataItemQueryParams


@dataclass(frozen=True)
class FixedSource(Fragment):
    def render(self, params):
        return QueryFragment("select * from items t")


STATEMENT = Statement(
    source=FixedSource(),
    clauses=(
        MandatoryFilter(value_type_filtering("t.valuetype")),
        OptionalFilter(name_filtering("t.name")),
        OptionalFilter(program_id_filtering("t.program_uid")),
        ordering("t.name", "t.name", "t.shortname", "t.shortname"),
        Limit(),
    ),
)


def test_renders_source_only_without_parameters():
    assert STATEMENT.render(DataItemQueryParams()).sql == "select * from items t"


def test_optional_group_without_mandatory():
    params = DataItemQueryParams(root_junction=RootJunction.OR, name="a", program_id="P1")

    assert STATEMENT.render(params).sql == (
        "select * from items t where (t.name ilike :name or t.program_uid = :programId)"
    )


def test_mandatory_and_optional():
    params = DataItemQueryParams(value_types="AGE", program_id="P1")

    assert STATEMENT.render(params).sql == (
        "select * from items t where t.valuetype in :valueTypes and t.program_uid = :programId"
    )


def test_pagination_flag_drops_only_limit():
    params = DataItemQueryParams(name="a", order="name", max_limit=5)

    paged = STATEMENT.render(params)
    unpaged = STATEMENT.render(params, paginate=False)

    assert paged.sql == unpaged.sql + " limit :maxLimit"
    assert unpaged.sql.endswith(" order by t.name asc")


def test_render_count_wraps_unpaginated_statement():
    params = DataItemQueryParams(name="a", max_limit=5, offset=5)

    count = STATEMENT.render_count(params)

    assert count.sql == (
        "select count(*) from (select * from items t where t.name ilike :name) as t2"
    )
    assert count.params == {"name": "%a%"}
