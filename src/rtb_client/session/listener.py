"""
Listener - background ingestion of server messages.

Handles:
- One-shot bootstrap (blocking reads, rotation notifications)
- A dedicated reader thread: read line -> decode -> deliver in order
- Reporting and dropping lines that fail to decode
- Closing the channel on end of input or read error

Lifecycle: STARTING -> RUNNING -> DRAINING -> CLOSED. There is no stop call,
the listener lives as long as its input stream.
"""
import logging
import sys
import threading
from enum import Enum
from typing import Callable, Optional, TextIO

from ..config import ListenSettings
from ..protocol.decoder import decode
from ..protocol.encoder import CommandWriter
from ..protocol.errors import DecodeError, EncodeError
from ..protocol.wire import RobotOption
from .channel import MessageChannel

logger = logging.getLogger(__name__)

ErrorSink = Callable[[str, DecodeError], None]


class ListenerState(Enum):
    STARTING = 1    # bootstrap not yet sent
    RUNNING = 2     # reader thread active
    DRAINING = 3    # input finished, consumer still has messages to take
    CLOSED = 4      # consumer has seen the end of the channel


def bootstrap(writer: CommandWriter, settings: ListenSettings) -> None:
    """Send the handshake options. Encode errors propagate to the caller."""
    # The reader owns a dedicated thread, so blocking reads are used.
    writer.robot_option(RobotOption.UseNonBlocking, 0)
    writer.robot_option(RobotOption.SendRotationReached, settings.send_rotation_reached)


class Listener:
    """
    Reads protocol lines from the server and republishes decoded messages.

    Usage:
        writer = CommandWriter(debug=settings.debug)
        listener = Listener(settings, writer)
        for msg in listener.start():
            if isinstance(msg, ExitRobotMessage):
                break
    """

    def __init__(
        self,
        settings: Optional[ListenSettings] = None,
        writer: Optional[CommandWriter] = None,
        stdin: Optional[TextIO] = None,
        error_sink: Optional[ErrorSink] = None,
    ):
        """
        Args:
            settings: Listen settings (None = defaults)
            writer: Command writer used for bootstrap and debug reports
                (None = stdout writer honouring settings.debug)
            stdin: Input stream (None = sys.stdin)
            error_sink: Called with (line, error) for every dropped line
                (None = log and send a debug message)
        """
        self.settings = settings or ListenSettings()
        self.writer = writer or CommandWriter(debug=self.settings.debug)
        self.stdin = stdin if stdin is not None else sys.stdin
        self.error_sink = error_sink or self._report_decode_error
        self.channel = MessageChannel(self.settings.channel_capacity)

        self.decode_failures = 0
        self.last_error: Optional[Exception] = None
        self._thread: Optional[threading.Thread] = None
        self._reader_done = threading.Event()

    @property
    def state(self) -> ListenerState:
        if self._thread is None:
            return ListenerState.STARTING
        if not self._reader_done.is_set():
            return ListenerState.RUNNING
        if self.channel.drained:
            return ListenerState.CLOSED
        return ListenerState.DRAINING

    def start(self) -> MessageChannel:
        """
        Send the bootstrap and start the reader thread.

        Returns:
            The channel on which decoded messages are delivered
        """
        if self._thread is not None:
            raise RuntimeError("listener already started")

        bootstrap(self.writer, self.settings)

        self._thread = threading.Thread(target=self._run, name="rtb-listener", daemon=True)
        self._thread.start()
        logger.debug(f"Listener started (capacity={self.settings.channel_capacity})")
        return self.channel

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the reader thread to finish. Returns True if it did."""
        if self._thread is None:
            return False
        self._thread.join(timeout=timeout)
        return not self._thread.is_alive()

    def _run(self) -> None:
        try:
            while True:
                try:
                    line = self.stdin.readline()
                except (OSError, ValueError) as e:
                    # ValueError covers reads on a closed file and bad encodings.
                    self.last_error = e
                    logger.error(f"Error reading from input stream: {e}")
                    break
                if not line:
                    logger.debug("Input stream reached end of file")
                    break
                try:
                    msg = decode(line)
                except DecodeError as e:
                    self.decode_failures += 1
                    self.error_sink(line, e)
                    continue
                self.channel.put(msg)
        finally:
            self._reader_done.set()
            self.channel.close()

    def _report_decode_error(self, line: str, error: DecodeError) -> None:
        logger.warning(f"Error parsing message {line.rstrip()!r}: {error}")
        try:
            self.writer.debug("error parsing message %r: %s", line.rstrip(), error)
        except EncodeError as e:
            logger.debug(f"Could not send parse error as debug message: {e}")
        except OSError as e:
            logger.error(f"Could not write parse error to output stream: {e}")


def listen(
    settings: Optional[ListenSettings] = None,
    writer: Optional[CommandWriter] = None,
    stdin: Optional[TextIO] = None,
) -> MessageChannel:
    """Start listening to the server and return the message channel."""
    return Listener(settings, writer, stdin).start()
