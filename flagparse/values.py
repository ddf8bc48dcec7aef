"""
values.py
string to value coercion for option arguments.

Each supported scalar kind has one `Value` that knows its zero value, how to
convert a raw command-line token and how to render a value for help output.
A `Slot` is the per-parse box a `Value` writes into.
"""
import re
from enum import Enum
from typing import Any, Dict, List, Optional, Union

import numpy as np

_DECIMAL = re.compile(r"[+-]?[0-9]+\Z")

class Kind(Enum):
    BOOL = "bool"
    I64 = "i64"
    U64 = "u64"
    INT = "int"
    UINT = "uint"
    STR = "str"

class Value:
    name = "value"
    implicit = False

    def zero(self) -> Any:
        raise NotImplementedError

    def convert(self, text: str) -> Any:
        raise NotImplementedError

    def render(self, value: Any) -> str:
        return str(value)

    def metavar(self) -> str:
        return self.name.upper()

class BoolValue(Value):
    name = "bool"
    implicit = True

    def zero(self) -> bool:
        return False

    def convert(self, text: str) -> bool:
        # the flag being seen is what counts, not the token text
        return True

    def render(self, value: Any) -> str:
        return "true" if value else "false"

class IntegerValue(Value):
    def __init__(self, name: str, dtype: type):
        self.name = name
        self.info = np.iinfo(dtype)
        self.signed = self.info.min < 0

    def zero(self) -> int:
        return 0

    def convert(self, text: str) -> int:
        if not _DECIMAL.match(text) or (not self.signed and text.startswith("-")):
            raise ValueError(f"invalid {self.name} value: {text!r}")
        number = int(text)
        if number < self.info.min or number > self.info.max:
            raise ValueError(f"{self.name} value out of range: {text!r}")
        return number

    def metavar(self) -> str:
        return "N"

class StringValue(Value):
    name = "str"

    def zero(self) -> str:
        return ""

    def convert(self, text: str) -> str:
        return text

    def render(self, value: Any) -> str:
        return f'"{value}"'

_BUILTIN: Dict[Kind, Value] = {
    Kind.BOOL: BoolValue(),
    Kind.I64: IntegerValue("i64", np.int64),
    Kind.U64: IntegerValue("u64", np.uint64),
    Kind.INT: IntegerValue("int", np.intp),
    Kind.UINT: IntegerValue("uint", np.uintp),
    Kind.STR: StringValue(),
}

def coercer(kind: Union[Kind, str, Value]) -> Value:
    """Resolve a kind, its name, or a custom Value instance to a Value."""
    if isinstance(kind, Value):
        return kind
    return _BUILTIN[Kind(kind)]

class Slot:
    """
    Holds the current value of one option during a parse.

    Multi slots hold a list: the first explicit occurrence replaces the
    default list and later ones append.
    """
    def __init__(self, value: Value, default: Any, multi: bool = False):
        self.coercer = value
        self.multi = multi
        self.value = list(default) if multi else default
        self.defined = False

    def set(self, text: str) -> Optional[str]:
        try:
            converted = self.coercer.convert(text)
        except ValueError as e:
            return str(e)

        if not self.multi:
            self.value = converted
        elif self.defined:
            self.value.append(converted)
        else:
            self.value = [converted]
        self.defined = True
        return None

    def render(self) -> str:
        if self.multi:
            items: List[str] = [self.coercer.render(v) for v in self.value]
            return "[" + ", ".join(items) + "]"
        return self.coercer.render(self.value)
