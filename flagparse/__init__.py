"""
flagparse
declare typed command-line options, parse an argument list, get the
positional arguments back.
"""
from flagparse.errors import (
    ArgumentIncorrectType,
    InvalidOptionFormatError,
    MissingArgumentException,
    OptionException,
    OptionExistsError,
    OptionNotExistsException,
    OptionNotPresentException,
    OptionParseException,
    OptionSpecException,
)
from flagparse.options import NO_DEFAULT, Handle, OptionParser, OptionSpec, ParseResult, new
from flagparse.values import BoolValue, IntegerValue, Kind, Slot, StringValue, Value

__version__ = "0.1.0"

__all__ = [
    "ArgumentIncorrectType",
    "BoolValue",
    "Handle",
    "IntegerValue",
    "InvalidOptionFormatError",
    "Kind",
    "MissingArgumentException",
    "NO_DEFAULT",
    "OptionException",
    "OptionExistsError",
    "OptionNotExistsException",
    "OptionNotPresentException",
    "OptionParseException",
    "OptionParser",
    "OptionSpec",
    "OptionSpecException",
    "ParseResult",
    "Slot",
    "StringValue",
    "Value",
    "new",
]
