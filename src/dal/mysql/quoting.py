from dal.errors import ValidationError

QUOTE_CHAR = "`"


def quote_identifier(name: str) -> str:
    """Quote an identifier for DDL with MySQL backticks.

    Identifiers containing a backtick or NUL byte are rejected rather than escaped.
    """
    if QUOTE_CHAR in name or "\x00" in name:
        raise ValidationError(
            f"Identifier {name!r} contains a character that cannot be quoted for MySQL.",
            reason_code="ILLEGAL_IDENTIFIER",
        )
    return f"{QUOTE_CHAR}{name}{QUOTE_CHAR}"


def escape_identifier(name: str) -> str:
    """Quote a catalog-reported identifier for a read-only catalog statement."""
    return QUOTE_CHAR + name.replace(QUOTE_CHAR, QUOTE_CHAR * 2) + QUOTE_CHAR
