# Client library for RealTimeBattle robots speaking the stdin/stdout protocol
from .config import ListenSettings, load_settings
from .protocol import (
    CollisionMessage,
    CommandWriter,
    CoordinatesMessage,
    DeadMessage,
    DecodeError,
    EmbeddedNewline,
    EncodeError,
    EnergyMessage,
    ExitRobotMessage,
    GameFinishesMessage,
    GameOption,
    GameOptionMessage,
    GameStartsMessage,
    InfoMessage,
    InitializeMessage,
    Message,
    MessageTooLong,
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
    decode,
    format_command,
)
from .session import ChannelClosed, Listener, ListenerState, MessageChannel, listen

__version__ = "0.1.0"

__all__ = [
    "ListenSettings",
    "load_settings",
    "CommandWriter",
    "DecodeError",
    "EncodeError",
    "MessageTooLong",
    "EmbeddedNewline",
    "decode",
    "format_command",
    "Part",
    "GameOption",
    "ObjectType",
    "WarningType",
    "Message",
    "InitializeMessage",
    "YourNameMessage",
    "YourColourMessage",
    "GameOptionMessage",
    "GameStartsMessage",
    "RadarMessage",
    "InfoMessage",
    "CoordinatesMessage",
    "RobotInfoMessage",
    "RotationReachedMessage",
    "EnergyMessage",
    "RobotsLeftMessage",
    "CollisionMessage",
    "WarningMessage",
    "DeadMessage",
    "GameFinishesMessage",
    "ExitRobotMessage",
    "ChannelClosed",
    "Listener",
    "ListenerState",
    "MessageChannel",
    "listen",
]
