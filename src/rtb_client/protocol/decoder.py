"""
Decoder for inbound protocol lines.

A line is split on runs of whitespace; the first token names the message and
selects a schema from the dispatch table. Each schema fixes the token count
(exact or minimum) and how every field token is converted. Any failure
rejects the whole line, so a message is either fully decoded or not at all.
"""
import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, Type

from .errors import EmptyInput, MalformedField, UnknownMessage, WrongArity
from .wire import (
    CollisionMessage,
    CoordinatesMessage,
    DeadMessage,
    EnergyMessage,
    ExitRobotMessage,
    GameFinishesMessage,
    GameOption,
    GameOptionMessage,
    GameStartsMessage,
    InfoMessage,
    InitializeMessage,
    Message,
    ObjectType,
    Part,
    RadarMessage,
    RobotInfoMessage,
    RobotsLeftMessage,
    RotationReachedMessage,
    WarningMessage,
    WarningType,
    YourColourMessage,
    YourNameMessage,
)

_INT_RE = re.compile(r"[+-]?[0-9]+")

# A converter receives the field name (for error reporting) and the raw token.
Converter = Callable[[str, str], object]


def parse_int(field: str, raw: str) -> int:
    if not _INT_RE.fullmatch(raw):
        raise MalformedField(field, raw)
    return int(raw)


def parse_float(field: str, raw: str) -> float:
    # float() also accepts underscores and non-ASCII digits.
    if "_" in raw or not raw.isascii():
        raise MalformedField(field, raw)
    try:
        return float(raw)
    except ValueError:
        raise MalformedField(field, raw) from None


def parse_flag(field: str, raw: str) -> bool:
    """Loose boolean: only "1" is true, anything else is false."""
    return raw == "1"


def parse_strict_flag(field: str, raw: str) -> bool:
    """Strict boolean: only "0" and "1" are accepted."""
    if raw not in ("0", "1"):
        raise MalformedField(field, raw)
    return raw == "1"


def _code(enum_cls) -> Converter:
    def convert(field: str, raw: str):
        # No range check, unknown codes are kept verbatim.
        try:
            return enum_cls(parse_int(field, raw))
        except ValueError:
            raise MalformedField(field, raw) from None
    return convert


@dataclass(frozen=True)
class MessageSchema:
    """How to decode one message type.

    Attributes:
        message: Dataclass built from the decoded fields
        fields: (field name, converter) pairs for the fixed positional tokens
        rest: Field receiving the remaining tokens joined by single spaces
        min_tokens: Minimum token count, message name included. When rest is
            None the count must match exactly.
    """
    message: Type
    fields: Tuple[Tuple[str, Converter], ...] = ()
    rest: Optional[str] = None
    min_tokens: Optional[int] = None

    @property
    def exact_tokens(self) -> Optional[int]:
        if self.rest is not None:
            return None
        return 1 + len(self.fields)

    def check_arity(self, tokens) -> None:
        count = len(tokens)
        exact = self.exact_tokens
        if exact is not None:
            if count != exact:
                raise WrongArity(tokens[0], count)
        elif count < self.min_tokens:
            raise WrongArity(tokens[0], count)

    def build(self, tokens) -> Message:
        self.check_arity(tokens)
        args = tokens[1:]
        values = {}
        for (field, convert), raw in zip(self.fields, args):
            values[field] = convert(field, raw)
        if self.rest is not None:
            values[self.rest] = " ".join(args[len(self.fields):])
        return self.message(**values)


SCHEMAS: Dict[str, MessageSchema] = {
    "Initialize": MessageSchema(InitializeMessage, (("first", parse_flag),)),
    "YourName": MessageSchema(YourNameMessage, rest="name", min_tokens=2),
    "YourColour": MessageSchema(YourColourMessage, rest="colour", min_tokens=2),
    "GameOption": MessageSchema(
        GameOptionMessage,
        (("option", _code(GameOption)), ("value", parse_float)),
    ),
    "GameStarts": MessageSchema(GameStartsMessage),
    "Radar": MessageSchema(
        RadarMessage,
        (
            ("distance", parse_float),
            ("object_type", _code(ObjectType)),
            ("radar_angle", parse_float),
        ),
    ),
    "Info": MessageSchema(
        InfoMessage,
        (("time", parse_float), ("speed", parse_float), ("cannon_angle", parse_float)),
    ),
    "Coordinates": MessageSchema(
        CoordinatesMessage,
        (("x", parse_float), ("y", parse_float), ("angle", parse_float)),
    ),
    "RobotInfo": MessageSchema(
        RobotInfoMessage,
        (("energy_level", parse_float), ("team_mate", parse_strict_flag)),
    ),
    "RotationReached": MessageSchema(RotationReachedMessage, (("part", _code(Part)),)),
    "Energy": MessageSchema(EnergyMessage, (("energy_level", parse_float),)),
    "RobotsLeft": MessageSchema(RobotsLeftMessage, (("num_robots", parse_int),)),
    "Collision": MessageSchema(
        CollisionMessage,
        (("object_type", _code(ObjectType)), ("angle", parse_float)),
    ),
    # The warning text is optional.
    "Warning": MessageSchema(
        WarningMessage, (("warning", _code(WarningType)),), rest="message", min_tokens=2
    ),
    "Dead": MessageSchema(DeadMessage),
    "GameFinishes": MessageSchema(GameFinishesMessage),
    "ExitRobot": MessageSchema(ExitRobotMessage),
}


def decode(line: str) -> Message:
    """
    Decode one inbound line.

    Args:
        line: Raw line, with or without its trailing newline

    Returns:
        The decoded message

    Raises:
        EmptyInput: The line is empty or only whitespace
        UnknownMessage: The first token is not a known message name
        WrongArity: The token count does not match the message type
        MalformedField: A numeric or strict boolean field could not be parsed
    """
    tokens = line.split()
    if not tokens:
        raise EmptyInput()

    schema = SCHEMAS.get(tokens[0])
    if schema is None:
        raise UnknownMessage(tokens[0])

    return schema.build(tokens)
