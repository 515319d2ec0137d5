"""
Encoder for outbound robot commands.

format_command() builds and measures a line before anything is written, so
an over-long command is rejected without touching the output stream.
CommandWriter writes each accepted line with a single write call under a
lock, which keeps lines whole when several threads issue commands.
"""
import sys
import threading
from typing import Optional, TextIO

from .errors import EmbeddedNewline, MessageTooLong
from .wire import COMMANDS, FLOAT, INT, MAX_LINE_LENGTH, PART, TEXT, Part, RobotOption


def _render(kind: str, value) -> str:
    if kind == FLOAT:
        return f"{float(value):f}"
    if kind in (INT, PART):
        # Enums are sent as their raw integer, never their display name.
        return f"{int(value):d}"
    return str(value)


def format_command(name: str, *args) -> str:
    """
    Build a newline-terminated command line.

    Args:
        name: Wire name of the command (a key of COMMANDS)
        *args: Command arguments, in wire order

    Returns:
        The formatted line, including the trailing newline

    Raises:
        MessageTooLong: The line is longer than MAX_LINE_LENGTH bytes
        EmbeddedNewline: A text argument contains a line break
    """
    kinds = COMMANDS.get(name)
    if kinds is None:
        raise ValueError(f"unknown command {name!r}")
    if len(args) != len(kinds):
        raise TypeError(f"{name} takes {len(kinds)} argument(s), got {len(args)}")

    parts = [name]
    for kind, value in zip(kinds, args):
        text = _render(kind, value)
        if kind == TEXT and ("\n" in text or "\r" in text):
            raise EmbeddedNewline(name, text)
        parts.append(text)
    line = " ".join(parts) + "\n"

    length = len(line.encode("utf-8"))
    if length > MAX_LINE_LENGTH:
        raise MessageTooLong(length, MAX_LINE_LENGTH)
    return line


class CommandWriter:
    """
    Sends robot commands to the server.

    Every method returns the line that was written and raises MessageTooLong
    when the command does not fit on one protocol line. Write errors from the
    stream propagate unchanged.

    Usage:
        writer = CommandWriter(debug=True)
        writer.name("skeleton")
        writer.sweep(Part.RADAR, math.pi / 4, -math.pi / 2, math.pi / 2)
        writer.debug("radar: distance=%s", 12.5)
    """

    def __init__(self, stream: Optional[TextIO] = None, debug: bool = False):
        """
        Args:
            stream: Output stream (None = sys.stdout)
            debug: Whether debug() calls are transmitted
        """
        self.stream = stream if stream is not None else sys.stdout
        self.debug_enabled = debug
        self._lock = threading.Lock()

    def send(self, name: str, *args) -> str:
        """Format a command and write it as one indivisible line."""
        line = format_command(name, *args)
        with self._lock:
            self.stream.write(line)
            self.stream.flush()
        return line

    def robot_option(self, option: RobotOption, value: int) -> str:
        return self.send("RobotOption", option, value)

    def name(self, name: str) -> str:
        """Set the robot name. A name ending in "Team: <team>" joins that team."""
        return self.send("Name", name)

    def colour(self, home: str, away: str) -> str:
        """Set home and away colours, given as hex strings like "11aa22"."""
        return self.send("Colour", home, away)

    def rotate(self, part: Part, velocity: float) -> str:
        """Set the angular velocity (rad/s) of the robot, cannon and/or radar."""
        return self.send("Rotate", part, velocity)

    def rotate_to(self, part: Part, velocity: float, end_angle: float) -> str:
        """Rotate cannon and/or radar to an angle relative to the robot."""
        return self.send("RotateTo", part, velocity, end_angle)

    def rotate_amount(self, part: Part, velocity: float, angle: float) -> str:
        return self.send("RotateAmount", part, velocity, angle)

    def sweep(self, part: Part, velocity: float, right_angle: float, left_angle: float) -> str:
        """Sweep cannon and/or radar between two angles."""
        return self.send("Sweep", part, velocity, right_angle, left_angle)

    def accelerate(self, value: float) -> str:
        return self.send("Accelerate", value)

    def brake(self, portion: float) -> str:
        """Brake with a portion in [0, 1]; 1.0 is full brake."""
        return self.send("Break", portion)

    def shoot(self, energy: float) -> str:
        return self.send("Shoot", energy)

    def print_message(self, msg: str, *args) -> str:
        """Print to the message window. Arguments are merged %-style, as in logging."""
        return self.send("Print", msg % args if args else msg)

    def debug(self, msg: str, *args) -> str:
        """Print to the message window in debug mode. No-op while debug is disabled."""
        if not self.debug_enabled:
            return ""
        return self.send("Debug", msg % args if args else msg)

    def debug_line(self, angle1: float, radius1: float, angle2: float, radius2: float) -> str:
        """Draw a line given in polar coordinates relative to the robot (debug level 5 only)."""
        return self.send("DebugLine", angle1, radius1, angle2, radius2)

    def debug_circle(self, center_angle: float, center_radius: float, circle_radius: float) -> str:
        return self.send("DebugCircle", center_angle, center_radius, circle_radius)
