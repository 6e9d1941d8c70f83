import pytest

from graph_lab.coordinates import Viewport
from graph_lab.gestures import GestureStateMachine
from graph_lab.logger import InteractionLog
from graph_lab.settings import Settings
from graph_lab.state import GraphWorkspace


# 600 x 1200 gives scale 50 px per unit with the origin at (300, 600).
VIEWPORT_SIZE = (600.0, 1200.0)


class FakeClock:
    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def viewport():
    return Viewport(*VIEWPORT_SIZE)


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def workspace(settings, clock):
    return GraphWorkspace(settings=settings, log=InteractionLog("test-session", clock=clock), viewport_size=VIEWPORT_SIZE)


@pytest.fixture
def machine(workspace):
    return GestureStateMachine(workspace)


def screen_of(workspace, x, y):
    from graph_lab.coordinates import to_screen

    return to_screen(workspace.viewport(), x, y)
