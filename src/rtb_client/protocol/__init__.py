# Wire protocol: vocabulary, decoder and encoder
from .errors import (
    DecodeError,
    EmbeddedNewline,
    EmptyInput,
    EncodeError,
    MalformedField,
    MessageTooLong,
    ProtocolError,
    UnknownMessage,
    WrongArity,
)
from .wire import (
    COMMANDS,
    MAX_LINE_LENGTH,
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
    RobotOption,
    RobotsLeftMessage,
    RotationReachedMessage,
    WarningMessage,
    WarningType,
    YourColourMessage,
    YourNameMessage,
)
from .decoder import SCHEMAS, decode
from .encoder import CommandWriter, format_command
