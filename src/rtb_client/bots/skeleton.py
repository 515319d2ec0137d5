#!/usr/bin/env python3
"""
Skeleton robot - shows how to talk to RealTimeBattle with rtb_client.

Sends its name and colours on the first sequence, sweeps the radar once the
game starts and reports options and radar hits as debug messages.

Run with: python -m rtb_client.bots.skeleton [overrides...]
e.g.      python -m rtb_client.bots.skeleton channel_capacity=10 debug=false
"""
import logging
import math
import sys
from typing import List, Optional

from rtb_client.config import load_settings
from rtb_client.protocol.encoder import CommandWriter
from rtb_client.protocol.wire import (
    ExitRobotMessage,
    GameOptionMessage,
    GameStartsMessage,
    InitializeMessage,
    Part,
    RadarMessage,
)
from rtb_client.session.listener import Listener

# Setup logging - stdout carries the protocol, so logs go to stderr
logging.basicConfig(level=logging.INFO, format='%(asctime)s [Skeleton] %(message)s', stream=sys.stderr)
logger = logging.getLogger(__name__)


class SkeletonBot:
    def __init__(self, writer: CommandWriter, name: str = "skeleton"):
        self.writer = writer
        self.name = name

    def handle(self, msg) -> bool:
        """Handle one message. Returns False when the robot must exit."""
        if isinstance(msg, InitializeMessage):
            if msg.first:
                self.writer.name(self.name)
                self.writer.colour("00ff00", "ff0000")
        elif isinstance(msg, GameOptionMessage):
            self.writer.debug("option: %s: %s", msg.option, msg.value)
        elif isinstance(msg, GameStartsMessage):
            self.writer.sweep(Part.RADAR, math.pi / 4, -math.pi / 2, math.pi / 2)
        elif isinstance(msg, RadarMessage):
            self.writer.debug(
                "radar: distance=%s object=%s angle=%s",
                msg.distance, msg.object_type, msg.radar_angle,
            )
        elif isinstance(msg, ExitRobotMessage):
            return False
        else:
            self.writer.debug("ignored message: %r", msg)
        return True


def main(argv: Optional[List[str]] = None) -> int:
    overrides = sys.argv[1:] if argv is None else argv
    settings = load_settings(overrides, config_name="skeleton")
    writer = CommandWriter(debug=settings.debug)
    bot = SkeletonBot(writer)

    listener = Listener(settings, writer)
    for msg in listener.start():
        if not bot.handle(msg):
            break

    writer.debug("done")
    logger.info(f"Skeleton finished ({listener.decode_failures} undecodable line(s))")
    return 0


if __name__ == "__main__":
    sys.exit(main())
