"""
Error taxonomy for the RealTimeBattle line protocol.

Decode errors are local to a single inbound line and never fatal to the
stream. Encode errors are raised synchronously to the caller of a command.
"""


class ProtocolError(ValueError):
    """Base class for all protocol errors."""


class DecodeError(ProtocolError):
    """An inbound line could not be turned into a message."""


class EmptyInput(DecodeError):
    def __init__(self):
        super().__init__("empty line")


class UnknownMessage(DecodeError):
    def __init__(self, name: str):
        super().__init__(f"unknown message {name!r}")
        self.name = name


class WrongArity(DecodeError):
    def __init__(self, name: str, count: int):
        super().__init__(f"wrong number of tokens for {name}: {count}")
        self.name = name
        self.count = count


class MalformedField(DecodeError):
    def __init__(self, field: str, raw: str):
        super().__init__(f"could not parse {field} {raw!r}")
        self.field = field
        self.raw = raw


class EncodeError(ProtocolError):
    """An outbound command could not be formatted."""


class MessageTooLong(EncodeError):
    def __init__(self, length: int, limit: int):
        super().__init__(f"message is too long ({length} > {limit})")
        self.length = length
        self.limit = limit


class EmbeddedNewline(EncodeError):
    """A text argument would split the command over several lines."""

    def __init__(self, command: str, text: str):
        super().__init__(f"line break in {command} text {text!r}")
        self.command = command
        self.text = text
