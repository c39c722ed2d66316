"""Tagged records produced by define-struct constructors."""

from __future__ import annotations

from io import StringIO

from stepwise import Expression


class Struct:
    """A record tagged with its struct name; the field set is fixed by define-struct."""

    __slots__ = ("tag", "fields")

    def __init__(self, tag: str, fields: dict[str, Expression]):
        self.tag = tag
        self.fields = fields

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Struct)
            and self.tag == other.tag
            and self.fields == other.fields
        )

    def __hash__(self) -> int:
        return hash(self.tag)

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write(f"Struct({self.tag!r}")
            for k, v in self.fields.items():
                buffer.write(f", {k}={v!r}")
            buffer.write(")")
            return buffer.getvalue()
