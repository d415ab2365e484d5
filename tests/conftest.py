import pytest


class ScriptedSource:
    """Hands out fixed draws in order; fails the test if it runs dry or a draw is out of range."""

    def __init__(self, draws):
        self.draws = list(draws)
        self.calls = []

    def roll(self, sides):
        assert self.draws, "scripted source ran out of draws"
        value = self.draws.pop(0)
        assert 1 <= value <= sides, f"scripted draw {value} does not fit a d{sides}"
        self.calls.append(sides)
        return value


@pytest.fixture
def scripted():
    return ScriptedSource
