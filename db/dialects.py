"""SQL fragments that differ between the supported backends."""


class Dialect:
    """
    Backend-specific SQL building blocks.

    Attributes
    ----------
    name : str
        backend name as written in config.ini ("sqlite" or "mysql")
    """

    def __init__(self, name):
        self.name = name

    def concat(self, *parts):
        """Concatenate SQL expressions into one string expression."""
        if self.name == "mysql":
            return f"CONCAT({', '.join(parts)})"
        return " || ".join(parts)

    def binary(self, expression):
        """Wrap an expression so comparisons are byte-wise (no case or accent folding)."""
        if self.name == "mysql":
            return f"CAST({expression} AS BINARY)"
        # SQLite compares with the BINARY collation unless told otherwise
        return expression

    def full_name(self, alias):
        return self.concat(f"{alias}.FirstName", "' '", f"{alias}.LastName")

    def __repr__(self):
        return f"Dialect({self.name!r})"


SQLITE = Dialect("sqlite")
MYSQL = Dialect("mysql")

DIALECTS = {
    "sqlite": SQLITE,
    "mysql": MYSQL,
}


def get_dialect(engine):
    try:
        return DIALECTS[engine.lower()]
    except KeyError:
        raise ValueError(f"Unsupported database engine: {engine}") from None
