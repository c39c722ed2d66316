from __future__ import annotations


class UndefinedType:
    """The "no value" result of definition forms. Dropped from any Sequence it lands in."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "Undefined"
    def __bool__(self): return False


Undefined = UndefinedType()
