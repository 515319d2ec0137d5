"""
Tests for listen settings and their Hydra/OmegaConf loading.
"""
import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from rtb_client.config import ListenSettings, load_settings


def test_defaults():
    settings = load_settings()
    assert settings == ListenSettings(send_rotation_reached=0, channel_capacity=0, debug=False)
    assert isinstance(settings, ListenSettings)


def test_overrides():
    settings = load_settings(["channel_capacity=100", "send_rotation_reached=2", "debug=true"])
    assert settings.channel_capacity == 100
    assert settings.send_rotation_reached == 2
    assert settings.debug is True


def test_skeleton_profile():
    settings = load_settings(config_name="skeleton")
    assert settings == ListenSettings(send_rotation_reached=2, channel_capacity=100, debug=True)


def test_type_mismatch_is_rejected():
    with pytest.raises(ValueError):
        load_settings(["channel_capacity=lots"])


@pytest.mark.parametrize(
    "kwargs",
    [
        {"send_rotation_reached": 3},
        {"send_rotation_reached": -1},
        {"channel_capacity": -5},
    ],
)
def test_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        ListenSettings(**kwargs)
