"""Print the SQL composed for a data item search, without touching a database.

Usage:
    uv run render-sql --param locale=fr --param name=weight --param maxLimit=10
    uv run render-sql --count --param rootJunction=OR --param valueTypes=TEXT,NUMBER
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence

from app.core.config import AccessControlMode, get_settings
from app.core.errors import ValidationError
from app.core.logging import setup_logging
from app.persistence.access_control import access_control_for
from app.persistence.program_attribute_query import ProgramAttributeQuery
from app.schemas.v1.query_params import DataItemQueryParams


def _parse_param(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"Expected key=value, got {raw!r}")
    return key.strip(), value


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render data item search SQL.")
    parser.add_argument(
        "--param",
        action="append",
        type=_parse_param,
        default=[],
        help="Query parameter as key=value; repeat for several.",
    )
    parser.add_argument(
        "--count",
        action="store_true",
        help="Render the count query instead of the data query.",
    )
    parser.add_argument(
        "--access-control",
        choices=[mode.value for mode in AccessControlMode],
        default=None,
        help="Defaults to QUERY_ACCESS_CONTROL.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    setup_logging(stream=sys.stderr)
    try:
        params = DataItemQueryParams.from_mapping(dict(args.param))
    except ValidationError as e:
        error = {"code": e.code, "error": e.message, "details": e.details}
        print(json.dumps(error, default=str), file=sys.stderr)
        return 2

    mode = (
        AccessControlMode(args.access_control)
        if args.access_control
        else get_settings().query.access_control
    )
    query = ProgramAttributeQuery(access_control_for(mode))
    fragment = query.build_count(params) if args.count else query.build_query(params)
    print(json.dumps({"sql": fragment.sql, "params": dict(fragment.params)}, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
