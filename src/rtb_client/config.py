"""
Listen settings and their loading through Hydra's compose API.

Defaults live in rtb_client/conf/listen.yaml and can be overridden with
dotlist strings such as "channel_capacity=100" or "debug=true".
"""
from dataclasses import dataclass
from typing import List, Optional

from hydra import compose, initialize_config_module
from omegaconf import OmegaConf

CONFIG_MODULE = "rtb_client.conf"
CONFIG_NAME = "listen"


@dataclass
class ListenSettings:
    """Settings for the ingestion pipeline."""
    # 0: no RotationReached messages, 1: after RotateTo/RotateAmount, 2: also sweep turns
    send_rotation_reached: int = 0
    # Buffer size of the message channel. 0 = rendezvous hand-off
    channel_capacity: int = 0
    # Transmit Debug commands
    debug: bool = False

    def __post_init__(self):
        if self.send_rotation_reached not in (0, 1, 2):
            raise ValueError("send_rotation_reached must be 0, 1 or 2")
        if self.channel_capacity < 0:
            raise ValueError("channel_capacity must be >= 0")


def load_settings(overrides: Optional[List[str]] = None, config_name: str = CONFIG_NAME) -> ListenSettings:
    """
    Compose listen settings from the packaged config and overrides.

    Args:
        overrides: Hydra dotlist overrides, e.g. ["channel_capacity=100"]
        config_name: Config file name inside rtb_client/conf (without .yaml)

    Returns:
        Validated ListenSettings
    """
    with initialize_config_module(version_base=None, config_module=CONFIG_MODULE):
        cfg = compose(config_name=config_name, overrides=overrides or [])

    schema = OmegaConf.structured(ListenSettings)
    merged = OmegaConf.merge(schema, cfg)
    return OmegaConf.to_object(merged)
