"""
Encoder tests: formatting, the 128-byte line limit and write atomicity.
"""
import sys
import os
import io
import threading
import logging

import pytest

logger = logging.getLogger(__name__)

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from rtb_client.protocol.encoder import CommandWriter, format_command
from rtb_client.protocol.errors import EmbeddedNewline, EncodeError, MessageTooLong
from rtb_client.protocol.wire import MAX_LINE_LENGTH, Part, RobotOption


class RecordingStream:
    """Stream that records every write call separately."""

    def __init__(self):
        self.writes = []
        self.flushes = 0
        self._lock = threading.Lock()

    def write(self, data):
        with self._lock:
            self.writes.append(data)
        return len(data)

    def flush(self):
        self.flushes += 1


class BrokenStream:
    def write(self, data):
        raise BrokenPipeError("server went away")

    def flush(self):
        pass


def make_writer(debug=False):
    stream = io.StringIO()
    return CommandWriter(stream, debug=debug), stream


def test_format_command_floats_and_parts():
    assert format_command("Rotate", Part.RADAR, 1.5) == "Rotate 4 1.500000\n"
    assert format_command("Sweep", Part.CANNON | Part.RADAR, 0.785, -1.5708, 1.5708) == (
        "Sweep 6 0.785000 -1.570800 1.570800\n"
    )
    assert format_command("RobotOption", RobotOption.UseNonBlocking, 0) == "RobotOption 3 0\n"
    assert format_command("Accelerate", 2) == "Accelerate 2.000000\n"


def test_format_command_is_deterministic():
    first = format_command("DebugLine", 0.1, 2.0, 3.14159, 4)
    second = format_command("DebugLine", 0.1, 2.0, 3.14159, 4)
    assert first == second == "DebugLine 0.100000 2.000000 3.141590 4.000000\n"


def test_format_command_rejects_bad_usage():
    with pytest.raises(ValueError):
        format_command("Teleport", 1.0)
    with pytest.raises(TypeError):
        format_command("Rotate", Part.ROBOT)


def test_line_length_boundary():
    """127 characters plus newline is accepted, one more is rejected."""
    prefix = "Print "
    fits = "x" * (MAX_LINE_LENGTH - 1 - len(prefix))
    line = format_command("Print", fits)
    assert len(line) == MAX_LINE_LENGTH
    assert line.endswith("\n")

    with pytest.raises(MessageTooLong) as exc_info:
        format_command("Print", fits + "x")
    assert exc_info.value.length == MAX_LINE_LENGTH + 1
    assert isinstance(exc_info.value, EncodeError)


def test_line_length_counts_encoded_bytes():
    prefix = "Name "
    text = "é" * ((MAX_LINE_LENGTH - 1 - len(prefix)) // 2 + 1)
    with pytest.raises(MessageTooLong):
        format_command("Name", text)


def test_too_long_command_writes_nothing():
    writer, stream = make_writer()
    with pytest.raises(MessageTooLong):
        writer.name("n" * 200)
    assert stream.getvalue() == ""


@pytest.mark.parametrize("text", ["foo\nShoot 100", "foo\rbar", "trailing\n"])
def test_text_with_line_break_is_rejected(text):
    writer, stream = make_writer(debug=True)
    for send in (writer.name, writer.print_message, writer.debug):
        with pytest.raises(EmbeddedNewline) as exc_info:
            send(text)
        assert isinstance(exc_info.value, ValueError)
    assert stream.getvalue() == ""


def test_writer_commands():
    writer, stream = make_writer()
    writer.name("foo Team: bar")
    writer.colour("00ff00", "ff0000")
    writer.rotate(Part.ROBOT, 0.5)
    writer.rotate_to(Part.CANNON, 1.0, 0.25)
    writer.rotate_amount(Part.RADAR, 1.0, -0.25)
    writer.sweep(Part.RADAR, 0.5, -1.0, 1.0)
    writer.accelerate(0.3)
    writer.brake(1.0)
    writer.shoot(10)
    writer.print_message("hello %s", "world")
    writer.debug_line(0.0, 1.0, 3.0, 4.0)
    writer.debug_circle(0.0, 10.0, 2.5)

    assert stream.getvalue().splitlines() == [
        "Name foo Team: bar",
        "Colour 00ff00 ff0000",
        "Rotate 1 0.500000",
        "RotateTo 2 1.000000 0.250000",
        "RotateAmount 4 1.000000 -0.250000",
        "Sweep 4 0.500000 -1.000000 1.000000",
        "Accelerate 0.300000",
        "Break 1.000000",
        "Shoot 10.000000",
        "Print hello world",
        "DebugLine 0.000000 1.000000 3.000000 4.000000",
        "DebugCircle 0.000000 10.000000 2.500000",
    ]


def test_print_message_without_args_keeps_percent_signs():
    writer, stream = make_writer()
    writer.print_message("100% done")
    assert stream.getvalue() == "Print 100% done\n"


def test_debug_is_gated_by_flag():
    writer, stream = make_writer(debug=False)
    assert writer.debug("radar: %s", 1.5) == ""
    assert stream.getvalue() == ""

    writer.debug_enabled = True
    assert writer.debug("radar: %s", 1.5) == "Debug radar: 1.5\n"
    assert stream.getvalue() == "Debug radar: 1.5\n"


def test_each_command_is_a_single_write():
    stream = RecordingStream()
    writer = CommandWriter(stream)
    writer.sweep(Part.RADAR, 0.5, -1.0, 1.0)
    writer.shoot(2.0)
    assert stream.writes == ["Sweep 4 0.500000 -1.000000 1.000000\n", "Shoot 2.000000\n"]
    assert stream.flushes == 2


def test_concurrent_writers_never_split_lines():
    stream = RecordingStream()
    writer = CommandWriter(stream, debug=True)

    def issue(worker):
        for i in range(200):
            if worker % 2:
                writer.debug("worker %d step %d", worker, i)
            else:
                writer.accelerate(i)

    threads = [threading.Thread(target=issue, args=(w,)) for w in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(stream.writes) == 800
    for chunk in stream.writes:
        assert chunk.endswith("\n")
        assert chunk.count("\n") == 1
    logger.info(f"✓ {len(stream.writes)} concurrent lines written whole")


def test_write_errors_propagate():
    writer = CommandWriter(BrokenStream())
    with pytest.raises(OSError):
        writer.shoot(1.0)
