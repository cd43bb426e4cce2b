"""Locale-aware name columns.

Translations live in the ``translations`` jsonb column of each metadata table
as ``[{"locale": ..., "property": ..., "value": ...}]``. The translated columns
fall back to the base column when no translation exists for the locale, so the
outer query can reference the same aliases whether or not a locale was given.
"""

from app.persistence.query_builder import QueryFragment

PROGRAM_TABLE = "program"

# (translated alias, translation property, base column)
NAME_PROPERTIES: tuple[tuple[str, str, str], ...] = (
    ("i18n_name", "NAME", "name"),
    ("i18n_shortname", "SHORT_NAME", "shortname"),
)


def _join_alias(table: str, prefix: str, prop: str) -> str:
    return f"{prefix}{table}_{prop.lower()}_translation"


def _tables(table: str, include_program: bool) -> list[tuple[str, str]]:
    tables = [(table, "")]
    if include_program:
        tables.insert(0, (PROGRAM_TABLE, "p_"))
    return tables


def translation_names_columns_for(table: str, include_program: bool = False) -> str:
    """Translated name/short-name columns, each coalesced to its base column."""
    columns = []
    for source, prefix in _tables(table, include_program):
        for alias, prop, base in NAME_PROPERTIES:
            join_alias = _join_alias(source, prefix, prop)
            columns.append(f"coalesce({join_alias}.value, {source}.{base}) as {prefix}{alias}")
    return ", " + ", ".join(columns)


def untranslated_names_columns_for(table: str, include_program: bool = False) -> str:
    """Base columns exposed under the translated aliases."""
    columns = []
    for source, prefix in _tables(table, include_program):
        for alias, _, base in NAME_PROPERTIES:
            columns.append(f"{source}.{base} as {prefix}{alias}")
    return ", " + ", ".join(columns)


def translation_names_joins_on(
    table: str, locale: str, include_program: bool = False
) -> QueryFragment:
    """Left joins selecting the translation rows for the locale."""
    joins = []
    for source, prefix in _tables(table, include_program):
        for _, prop, _ in NAME_PROPERTIES:
            join_alias = _join_alias(source, prefix, prop)
            joins.append(
                f" left join jsonb_to_recordset({source}.translations)"
                f" as {join_alias}(value text, locale text, property text)"
                f" on {join_alias}.locale = :locale and {join_alias}.property = '{prop}'"
            )
    return QueryFragment("".join(joins), {"locale": locale})
