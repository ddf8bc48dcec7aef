"""
options.py
option registry and the argument matching pass.

Declare options against an `OptionParser`; every declaration returns a
`Handle` that reads the parsed value once `parse()` has run:

    opts = new("Usage: jsonprint [options] <files>", "jsonprint 0.1")
    indent = opts.integer(["-i", "--indent"], "number of spaces to indent", 4)
    output = opts.required().string(["-o", "--output"], "path to write to")
    files = opts.parse()

    print(indent.value, output.value, files)
"""
import logging
import os
import re
import sys
from typing import Any, Dict, List, Optional, Sequence, Union

from flagparse.errors import (
    ArgumentIncorrectType,
    InvalidOptionFormatError,
    MissingArgumentException,
    OptionExistsError,
    OptionNotExistsException,
    OptionNotPresentException,
    OptionParseException,
)
from flagparse.help import render_help, render_version
from flagparse.values import Kind, Slot, Value, coercer

logger = logging.getLogger(__name__)

# Not supplying a default is different from a default of None.
NO_DEFAULT = object()

_SHORT = re.compile(r"-[^-\s]\S*\Z")
_LONG = re.compile(r"--[^-\s]\S*\Z")
_CONFIG = re.compile(r"[^-\s]\S*:\Z")

def default_arg_required(prog: str, arg: str) -> None:
    print(f"{prog}: error: {arg} option requires an argument", file=sys.stderr)

def default_no_such_option(prog: str, arg: str) -> None:
    print(f"{prog}: error: no such option: {arg}", file=sys.stderr)

def default_required(prog: str, arg: str) -> None:
    print(f"{prog}: error: required: {arg}", file=sys.stderr)

def default_invalid_value(prog: str, arg: str, reason: str) -> None:
    print(f"{prog}: error: option {arg}: {reason}", file=sys.stderr)

def default_out(text: str) -> None:
    sys.stdout.write(_terminated(text))

def _terminated(text: str) -> str:
    return text if text.endswith("\n") else text + "\n"

class OptionSpec:
    def __init__(self, index: Optional[int], flags: List[str], info: str, value: Value,
                 default: Any, has_default: bool = False, config_key: Optional[str] = None,
                 dest: str = "", multi: bool = False, required: bool = False,
                 config_required: bool = False, action: Optional[str] = None):
        self.index = index
        self.flags = flags
        self.info = info
        self.value = value
        self.default = default
        self.has_default = has_default
        self.config_key = config_key
        self.dest = dest
        self.multi = multi
        self.required = required
        self.config_required = config_required
        self.action = action

    @property
    def implicit(self) -> bool:
        return self.value.implicit

    @property
    def name(self) -> str:
        """The alias used in messages: the first long flag, else the first one."""
        for flag in self.flags:
            if flag.startswith("--"):
                return flag
        if self.flags:
            return self.flags[0]
        return f"{self.config_key}:"

    def new_slot(self) -> Slot:
        return Slot(self.value, self.default, self.multi)

    def render_default(self) -> str:
        return self.new_slot().render()

    def __repr__(self):
        return f"<OptionSpec {self.name} ({self.value.name})>"

class _Pending:
    """Builder modifiers for the next declaration only."""
    def __init__(self):
        self.dest = ""
        self.multi = False
        self.required = False

class Handle:
    def __init__(self, parser: "OptionParser", index: int):
        self._parser = parser
        self.index = index

    @property
    def spec(self) -> OptionSpec:
        return self._parser.specs[self.index]

    @property
    def value(self) -> Any:
        return self._slot().value

    @property
    def defined(self) -> bool:
        return self._slot().defined

    def _slot(self) -> Slot:
        result = self._parser.last_result
        if result is None:
            return self.spec.new_slot()
        return result.slot(self)

    def __repr__(self):
        return f"<Handle {self.spec.name}={self.value!r}>"

class ParseResult:
    def __init__(self, slots: List[Slot]):
        self.args: List[str] = []
        self.errors: List[OptionParseException] = []
        self.slots = slots
        self.help_requested = False
        self.version_requested = False
        self.exit_status: Optional[int] = None

    def __getitem__(self, handle: Handle) -> Any:
        return self.slot(handle).value

    def defined(self, handle: Handle) -> bool:
        return self.slot(handle).defined

    def slot(self, handle: Handle) -> Slot:
        # handles declared after this parse have no slot in it
        if handle.index >= len(self.slots):
            return handle.spec.new_slot()
        return self.slots[handle.index]

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        if self.errors:
            raise self.errors[0]

class OptionParser:
    def __init__(self, usage: str = "", version: str = "", prog: Optional[str] = None):
        self.usage = usage
        self.version = version
        self.prog = prog if prog is not None else os.path.basename(sys.argv[0])
        self.add_help = True
        self.add_version = version != ""
        self.err_arg_required = default_arg_required
        self.err_no_such_option = default_no_such_option
        self.err_required = default_required
        self.err_invalid_value = default_invalid_value
        self.out = default_out
        self.specs: List[OptionSpec] = []
        self.last_result: Optional[ParseResult] = None
        self._flags: Dict[str, int] = {}
        self._pending = _Pending()

    def dest(self, name: str) -> "OptionParser":
        self._pending.dest = name
        return self

    def multi(self) -> "OptionParser":
        self._pending.multi = True
        return self

    def required(self) -> "OptionParser":
        self._pending.required = True
        return self

    def option(self, kind: Union[Kind, str, Value], flags: Union[str, Sequence[str]],
               info: str, default: Any = NO_DEFAULT) -> Handle:
        pending, self._pending = self._pending, _Pending()
        value = coercer(kind)

        if isinstance(flags, str):
            flags = [flags]
        flags = list(flags)
        if not flags:
            raise InvalidOptionFormatError("")

        cli_flags: List[str] = []
        config_key = None
        for flag in flags:
            if _LONG.match(flag) or _SHORT.match(flag):
                if flag in self._flags or flag in cli_flags:
                    raise OptionExistsError(flag)
                cli_flags.append(flag)
            elif _CONFIG.match(flag) and config_key is None:
                config_key = flag[:-1]
            else:
                raise InvalidOptionFormatError(flag)

        has_default = default is not NO_DEFAULT
        if not has_default:
            default = [] if pending.multi else value.zero()
        elif pending.multi and not isinstance(default, (list, tuple)):
            default = [default]

        spec = OptionSpec(
            len(self.specs), cli_flags, info, value, default,
            has_default=has_default,
            config_key=config_key,
            dest=pending.dest,
            multi=pending.multi,
            required=pending.required and config_key is None,
            config_required=pending.required and config_key is not None,
        )
        self.specs.append(spec)
        for flag in cli_flags:
            self._flags[flag] = spec.index
        logger.debug("registered %r multi=%s required=%s", spec, spec.multi, spec.required)
        return Handle(self, spec.index)

    def boolean(self, flags: Union[str, Sequence[str]], info: str, default: Any = NO_DEFAULT) -> Handle:
        return self.option(Kind.BOOL, flags, info, default)

    def i64(self, flags: Union[str, Sequence[str]], info: str, default: Any = NO_DEFAULT) -> Handle:
        return self.option(Kind.I64, flags, info, default)

    def u64(self, flags: Union[str, Sequence[str]], info: str, default: Any = NO_DEFAULT) -> Handle:
        return self.option(Kind.U64, flags, info, default)

    def integer(self, flags: Union[str, Sequence[str]], info: str, default: Any = NO_DEFAULT) -> Handle:
        return self.option(Kind.INT, flags, info, default)

    def uint(self, flags: Union[str, Sequence[str]], info: str, default: Any = NO_DEFAULT) -> Handle:
        return self.option(Kind.UINT, flags, info, default)

    def string(self, flags: Union[str, Sequence[str]], info: str, default: Any = NO_DEFAULT) -> Handle:
        return self.option(Kind.STR, flags, info, default)

    def lookup(self, flag: str) -> Optional[OptionSpec]:
        index = self._flags.get(flag)
        return None if index is None else self.specs[index]

    def parse(self, args: Optional[Sequence[str]] = None) -> List[str]:
        return self.parse_args(args).args

    def parse_args(self, args: Optional[Sequence[str]] = None) -> ParseResult:
        if args is None:
            args = sys.argv[1:]
        args = list(args)

        result = ParseResult([spec.new_slot() for spec in self.specs])
        self.last_result = result

        table: Dict[str, OptionSpec] = {}
        for spec in self._builtins() + self.specs:
            for flag in spec.flags:
                table[flag] = spec

        escaped = False
        current = 0
        while current < len(args):
            arg = args[current]
            current += 1

            if escaped:
                result.args.append(arg)
                continue
            if arg == "--":
                escaped = True
                continue

            spec = table.get(arg)
            if spec is None:
                if arg.startswith("-") and arg != "-":
                    self._report(result, OptionNotExistsException(arg))
                else:
                    result.args.append(arg)
                continue

            if spec.action is not None:
                self._finish_early(result, spec.action)
                return result

            if spec.implicit:
                raw = arg
            elif current < len(args):
                raw = args[current]
                current += 1
            else:
                self._report(result, MissingArgumentException(arg))
                continue

            logger.debug("matched %s with %r", arg, raw)
            reason = result.slots[spec.index].set(raw)
            if reason is not None:
                self._report(result, ArgumentIncorrectType(arg, raw, spec.value.name, reason))

        for spec in self.specs:
            if spec.required and not result.slots[spec.index].defined:
                self._report(result, OptionNotPresentException(spec.name))

        return result

    def _builtins(self) -> List[OptionSpec]:
        builtins = []
        if self.add_help:
            builtins.append(self._builtin("help", ["-h", "--help"], "show this help message and exit"))
        if self.add_version:
            builtins.append(self._builtin("version", ["-v", "--version"], "show program's version number and exit"))
        return [spec for spec in builtins if spec is not None]

    def _builtin(self, action: str, flags: List[str], info: str) -> Optional[OptionSpec]:
        free = [flag for flag in flags if flag not in self._flags]
        if not free:
            logger.debug("builtin %s skipped, flags already declared", action)
            return None
        return OptionSpec(None, free, info, coercer(Kind.BOOL), False, action=action)

    def _finish_early(self, result: ParseResult, action: str) -> None:
        result.args = []
        result.exit_status = 0
        if action == "help":
            result.help_requested = True
            text = self.render_help()
        else:
            result.version_requested = True
            text = self.render_version()
        logger.debug("%s requested, stopping", action)
        self.out(text)

    def _report(self, result: ParseResult, error: OptionParseException) -> None:
        logger.debug("%s: %s", self.prog, error)
        result.errors.append(error)
        if isinstance(error, MissingArgumentException):
            self.err_arg_required(self.prog, error.option)
        elif isinstance(error, OptionNotExistsException):
            self.err_no_such_option(self.prog, error.option)
        elif isinstance(error, OptionNotPresentException):
            self.err_required(self.prog, error.option)
        elif isinstance(error, ArgumentIncorrectType):
            self.err_invalid_value(self.prog, error.option, error.reason)

    def render_help(self) -> str:
        return render_help(self.usage, self._builtins() + self.specs)

    def render_version(self) -> str:
        return render_version(self.version)

    def print_help(self, file=None) -> None:
        self._write(self.render_help(), file)

    def print_version(self, file=None) -> None:
        self._write(self.render_version(), file)

    def _write(self, text: str, file) -> None:
        if file is None:
            self.out(text)
        else:
            file.write(_terminated(text))

def new(usage: str, version: str = "", prog: Optional[str] = None) -> OptionParser:
    return OptionParser(usage, version, prog)


if __name__ == "__main__":
    opts = new("Usage: jsonprint [options] <files>", "jsonprint 0.1")
    indent = opts.integer(["-i", "--indent"], "number of spaces to use for indentation", 4)
    output = opts.string(["-o", "--output"], "the path to write the output to")
    pretty = opts.boolean(["-p", "--pretty"], "pretty-print the generated output")
    result = opts.parse_args()
    if result.exit_status is not None:
        sys.exit(result.exit_status)
    if not result.ok:
        sys.exit(2)
    print(indent.value, output.value, pretty.value, result.args)
