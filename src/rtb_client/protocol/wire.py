"""
Wire vocabulary of the RealTimeBattle robot protocol.

Defines:
- Enumerated domain codes carried inside messages (parts, game options,
  object types, warnings, robot options)
- The 17 inbound message variants as immutable dataclasses
- The outbound command table used by the encoder

Numeric codes are authoritative. Display names are for logs and debug output
only, and unknown codes keep their raw integer value.
"""
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import ClassVar, Dict, Tuple, Union

# Hard limit of the server's input buffer, newline included.
MAX_LINE_LENGTH = 128

UNKNOWN = "unknown"


class WireEnum(IntEnum):
    """IntEnum that tolerates codes outside the known set.

    Out-of-range codes become pseudo-members named "unknown" that still
    compare equal to their raw integer.
    """

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, int):
            return None
        member = int.__new__(cls, value)
        member._name_ = UNKNOWN
        member._value_ = value
        return member

    def __str__(self) -> str:
        return self._name_


class Part(IntFlag):
    """Robot parts. Values can be or'ed to address several parts at once."""
    ROBOT = 1
    CANNON = 2
    RADAR = 4

    @classmethod
    def _missing_(cls, value):
        # Negative codes are kept as received instead of being folded onto
        # the known bits.
        if isinstance(value, int) and value < 0:
            member = int.__new__(cls, value)
            member._name_ = None
            member._value_ = value
            return member
        return super()._missing_(value)

    def __str__(self) -> str:
        # Only the three known bits are rendered, higher bits are ignored.
        value = int(self)
        names = [name for bit, name in _PART_NAMES if value & bit]
        if not names:
            return UNKNOWN
        return "|".join(names)


_PART_NAMES = ((1, "Robot"), (2, "Cannon"), (4, "Radar"))


class GameOption(WireEnum):
    """Game settings sent to robots at the beginning of each game."""
    RobotMaxRotate = 0
    RobotCannonMaxRotate = 1
    RobotRadarMaxRotate = 2
    RobotMaxAcceleration = 3
    RobotMinAcceleration = 4
    RobotStartEnergy = 5
    RobotMaxEnergy = 6
    RobotEnergyLevels = 7
    ShotSpeed = 8
    ShotMinEnergy = 9
    ShotMaxEnergy = 10
    ShotEnergyIncreaseSpeed = 11
    Timeout = 12
    DebugLevel = 13
    SendRobotCoordinates = 14  # 0: none, 1: relative to start, 2: absolute


class ObjectType(WireEnum):
    """Kind of object seen by the radar or involved in a collision."""
    NoObject = -1
    Robot = 0
    Shot = 1
    Wall = 2
    Cookie = 3
    Mine = 4


class WarningType(WireEnum):
    """Kind of warning sent by the server."""
    UnknownMessage = 0
    ProcessTimeLow = 1
    MessageSentInIllegalState = 2
    UnknownOption = 3
    ObsoleteKeyword = 4
    NameNotGiven = 5
    ColourNotGiven = 6


class RobotOption(WireEnum):
    """Options a robot sets on the server with the RobotOption command."""
    SendSignal = 0
    SendRotationReached = 1  # 1: RotateTo/RotateAmount done, 2: also sweep turns
    Signal = 2
    UseNonBlocking = 3


# === Inbound messages ===

@dataclass(frozen=True)
class InitializeMessage:
    """Very first message. When first is set the robot should send its name and colour."""
    NAME: ClassVar[str] = "Initialize"
    first: bool


@dataclass(frozen=True)
class YourNameMessage:
    NAME: ClassVar[str] = "YourName"
    name: str


@dataclass(frozen=True)
class YourColourMessage:
    NAME: ClassVar[str] = "YourColour"
    colour: str


@dataclass(frozen=True)
class GameOptionMessage:
    NAME: ClassVar[str] = "GameOption"
    option: GameOption
    value: float


@dataclass(frozen=True)
class GameStartsMessage:
    NAME: ClassVar[str] = "GameStarts"


@dataclass(frozen=True)
class RadarMessage:
    """Radar reading, sent every turn. The angle is relative to the robot front, in radians."""
    NAME: ClassVar[str] = "Radar"
    distance: float
    object_type: ObjectType
    radar_angle: float


@dataclass(frozen=True)
class InfoMessage:
    """Always follows a Radar message. Time is game time, not wall-clock time."""
    NAME: ClassVar[str] = "Info"
    time: float
    speed: float
    cannon_angle: float


@dataclass(frozen=True)
class CoordinatesMessage:
    """Only sent when the SendRobotCoordinates game option is 1 or 2."""
    NAME: ClassVar[str] = "Coordinates"
    x: float
    y: float
    angle: float


@dataclass(frozen=True)
class RobotInfoMessage:
    """Follows a Radar message that detected a robot."""
    NAME: ClassVar[str] = "RobotInfo"
    energy_level: float
    team_mate: bool


@dataclass(frozen=True)
class RotationReachedMessage:
    NAME: ClassVar[str] = "RotationReached"
    part: Part


@dataclass(frozen=True)
class EnergyMessage:
    NAME: ClassVar[str] = "Energy"
    energy_level: float


@dataclass(frozen=True)
class RobotsLeftMessage:
    NAME: ClassVar[str] = "RobotsLeft"
    num_robots: int


@dataclass(frozen=True)
class CollisionMessage:
    NAME: ClassVar[str] = "Collision"
    object_type: ObjectType
    angle: float


@dataclass(frozen=True)
class WarningMessage:
    NAME: ClassVar[str] = "Warning"
    warning: WarningType
    message: str = ""


@dataclass(frozen=True)
class DeadMessage:
    """The robot died. The server ignores commands until the game ends."""
    NAME: ClassVar[str] = "Dead"


@dataclass(frozen=True)
class GameFinishesMessage:
    NAME: ClassVar[str] = "GameFinishes"


@dataclass(frozen=True)
class ExitRobotMessage:
    """The robot must exit immediately or it will be killed."""
    NAME: ClassVar[str] = "ExitRobot"


Message = Union[
    InitializeMessage,
    YourNameMessage,
    YourColourMessage,
    GameOptionMessage,
    GameStartsMessage,
    RadarMessage,
    InfoMessage,
    CoordinatesMessage,
    RobotInfoMessage,
    RotationReachedMessage,
    EnergyMessage,
    RobotsLeftMessage,
    CollisionMessage,
    WarningMessage,
    DeadMessage,
    GameFinishesMessage,
    ExitRobotMessage,
]


# === Outbound commands ===

PART = "part"
INT = "int"
FLOAT = "float"
TEXT = "text"

# Wire name -> ordered argument kinds.
COMMANDS: Dict[str, Tuple[str, ...]] = {
    "RobotOption": (INT, INT),
    "Name": (TEXT,),
    "Colour": (TEXT, TEXT),
    "Rotate": (PART, FLOAT),
    "RotateTo": (PART, FLOAT, FLOAT),
    "RotateAmount": (PART, FLOAT, FLOAT),
    "Sweep": (PART, FLOAT, FLOAT, FLOAT),
    "Accelerate": (FLOAT,),
    "Break": (FLOAT,),  # the server spells the brake command this way
    "Shoot": (FLOAT,),
    "Print": (TEXT,),
    "Debug": (TEXT,),
    "DebugLine": (FLOAT, FLOAT, FLOAT, FLOAT),
    "DebugCircle": (FLOAT, FLOAT, FLOAT),
}
