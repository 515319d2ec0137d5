# Ingestion pipeline: reader thread and message channel
from .channel import ChannelClosed, MessageChannel
from .listener import Listener, ListenerState, bootstrap, listen

__all__ = [
    "ChannelClosed",
    "MessageChannel",
    "Listener",
    "ListenerState",
    "bootstrap",
    "listen",
]
