"""Allow-list validation for identifiers embedded in SQL text.

Table name lists are the one input that is written into query text instead of
being bound as a parameter. Every name goes through :func:`validate_identifiers`
before :func:`render_in_list` turns it into a literal.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from mssql_dba_mcp.common import IdentifierValidationError


if TYPE_CHECKING:
    from collections.abc import Iterable


# sysname is nvarchar(128)
MAX_IDENTIFIER_LENGTH = 128

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def is_valid_identifier(name: object) -> bool:
    """Check a single name against the identifier allow-list.

    Args:
        name: Candidate identifier.

    Returns:
        True if the name is a plain identifier of letters, digits and underscores.
    """
    return (
        isinstance(name, str)
        and len(name) <= MAX_IDENTIFIER_LENGTH
        and IDENTIFIER_PATTERN.fullmatch(name) is not None
    )


def validate_identifiers(names: Iterable[str]) -> list[str]:
    """Validate identifiers and drop duplicates, keeping first-seen order.

    Args:
        names: Identifiers supplied by the caller.

    Returns:
        The validated, de-duplicated identifiers.

    Raises:
        IdentifierValidationError: If any name fails the allow-list.
    """
    names = list(names)
    invalid = [name for name in names if not is_valid_identifier(name)]
    if invalid:
        raise IdentifierValidationError(invalid)
    return list(dict.fromkeys(names))


def render_in_list(names: Iterable[str]) -> str:
    """Render identifiers as the body of an ``IN (...)`` clause.

    Names are validated again here so this function can never emit an
    unchecked value, whatever its caller did.

    Args:
        names: Identifiers to render.

    Returns:
        Comma separated ``N'...'`` literals, e.g. ``N'Orders', N'Customers'``.

    Raises:
        IdentifierValidationError: If any name fails the allow-list.
        ValueError: If no names are given.
    """
    validated = validate_identifiers(names)
    if not validated:
        error_msg = "At least one identifier is required"
        raise ValueError(error_msg)
    return ", ".join(f"N'{name}'" for name in validated)
