import pytest

glfw_backend = pytest.importorskip("bunnyfont.backends.glfw")

from bunnyfont.backends.base import Action, Key, MouseButton


def test_known_codes():
    assert glfw_backend._translate(MouseButton, 0, MouseButton.OTHER) is MouseButton.LEFT
    assert glfw_backend._translate(Action, 1, Action.OTHER) is Action.PRESS
    assert glfw_backend._translate(Key, 82, Key.UNKNOWN) is Key.R


def test_ignored_events_fall_back():
    # right button, release and an unbound key
    assert glfw_backend._translate(MouseButton, 1, MouseButton.OTHER) is MouseButton.OTHER
    assert glfw_backend._translate(Action, 0, Action.OTHER) is Action.OTHER
    assert glfw_backend._translate(Key, 65, Key.UNKNOWN) is Key.UNKNOWN
