from typing import Optional


class OptionException(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message

class OptionSpecException(OptionException):
    pass

class OptionParseException(OptionException):
    def __init__(self, option: str, message: str):
        super().__init__(message)
        self.option = option

class OptionExistsError(OptionSpecException):
    def __init__(self, option: str):
        super().__init__(f"Option ‘{option}’ already exists")
        self.option = option

class InvalidOptionFormatError(OptionSpecException):
    def __init__(self, format: str):
        super().__init__(f"Invalid option format ‘{format}’")
        self.format = format

class MissingArgumentException(OptionParseException):
    def __init__(self, option: str):
        super().__init__(option, f"{option} option requires an argument")

class OptionNotExistsException(OptionParseException):
    def __init__(self, option: str):
        super().__init__(option, f"no such option: {option}")

class OptionNotPresentException(OptionParseException):
    def __init__(self, option: str):
        super().__init__(option, f"required: {option}")

class ArgumentIncorrectType(OptionParseException):
    def __init__(self, option: str, raw: str, kind: str, reason: Optional[str] = None):
        self.raw = raw
        self.kind = kind
        self.reason = reason or f"invalid {kind} value: {raw!r}"
        super().__init__(option, f"option {option}: {self.reason}")
