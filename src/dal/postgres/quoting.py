from dal.errors import ValidationError

QUOTE_CHAR = '"'


def quote_identifier(name: str) -> str:
    """Quote an identifier for DDL with Postgres double quotes.

    Identifiers containing a double quote or NUL byte are rejected rather than escaped.
    """
    if QUOTE_CHAR in name or "\x00" in name:
        raise ValidationError(
            f"Identifier {name!r} contains a character that cannot be quoted for Postgres.",
            reason_code="ILLEGAL_IDENTIFIER",
        )
    return f"{QUOTE_CHAR}{name}{QUOTE_CHAR}"
