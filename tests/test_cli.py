import pytest

from mcp_dice_expression import cli
from mcp_dice_expression.errors import InvariantError
from mcp_dice_expression.rng import RandomSource


@pytest.fixture(autouse=True)
def seeded_source(monkeypatch):
    monkeypatch.setattr(cli, "default_source", lambda: RandomSource(seed=3))


def test_prints_each_result(capsys):
    assert cli.main(["(2+3)*4", "3x1d1"]) == 0
    assert capsys.readouterr().out == "(2+3)*4:\n    20\n3x1d1:\n    1\n    1\n    1\n"


def test_errors_do_not_stop_the_run(capsys):
    assert cli.main(["1+", "(1+2", "1d0", "5d6:6", "1/0", "1%0", "q", "7"]) == 0
    lines = capsys.readouterr().out.splitlines()

    errors = [line for line in lines if line.startswith("    error: ")]
    assert len(errors) == 7
    assert lines[-2:] == ["7:", "    7"]


def test_zero_repetitions_print_only_the_input(capsys):
    cli.main(["0x1d6"])
    assert capsys.readouterr().out == "0x1d6:\n"


def test_fatal_errors_abort_the_run(monkeypatch, capsys):
    def broken(expression, source):
        raise InvariantError("[NOT_NUMBERS] Operator arguments must be numbers.")

    monkeypatch.setattr(cli, "evaluate", broken)
    with pytest.raises(InvariantError):
        cli.main(["1", "2"])
    assert capsys.readouterr().out == "1:\n"


@pytest.mark.parametrize(
    "text",
    ["1" * 5000, "*".join(["9999999999"] * 440)],
)
def test_oversized_numbers_do_not_stop_the_run(capsys, text):
    assert cli.main([text, "7"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[1].startswith("    error: [NUMBER_TOO_LARGE]")
    assert lines[-2:] == ["7:", "    7"]
