"""
Raw SQL fragments that bypass value quoting.
"""


class SQLLiteral:
    """A piece of SQL inserted verbatim, e.g. ``now()`` or ``toDate('2024-01-01')``."""

    __slots__ = ("value",)

    def __init__(self, value: str):
        self.value = value

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"SQLLiteral({self.value!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SQLLiteral) and other.value == self.value

    def __hash__(self) -> int:
        return hash(self.value)


def literal(value: str) -> SQLLiteral:
    """Wrap raw SQL so it is rendered without quotes."""
    return SQLLiteral(value)
