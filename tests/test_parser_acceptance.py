import pytest

from mcp_dice_expression.models import DiceOp, Factor, Group, Number, StrayChoose, Sum, Term
from mcp_dice_expression.parser import parse


def atom_sum(value):
    return Sum(terms=(Term(factors=(Factor(base=Number(value)),)),))


@pytest.mark.parametrize(
    ("text", "normalized_expression"),
    [
        ("d20", "1d20"),
        ("3d6+2", "3d6 + 2"),
        ("2x(1d20+5)", "2 x (1d20 + 5)"),
        ("4d6 : 3", "4d6:3"),
        ("( 2+3 )*4", "(2 + 3) * 4"),
    ],
)
def test_parse_normalizes(text, normalized_expression):
    parsed = parse(text)
    assert parsed.input == text
    assert parsed.normalized_expression == normalized_expression


def test_parse_builds_precedence_tiers():
    parsed = parse("1+2*3d4")
    assert parsed.repeat is None
    assert parsed.body == Sum(
        terms=(
            Term(factors=(Factor(base=Number(1)),)),
            Term(
                factors=(
                    Factor(base=Number(2)),
                    Factor(base=Number(3), ops=(DiceOp(sides=Number(4)),)),
                ),
                operators=("multiply",),
            ),
        ),
        operators=("add",),
    )


def test_parse_dice_chain_with_choose():
    parsed = parse("4d6:3d8")
    assert parsed.body == Sum(
        terms=(
            Term(
                factors=(
                    Factor(
                        base=Number(4),
                        ops=(DiceOp(sides=Number(6), keep=Number(3)), DiceOp(sides=Number(8))),
                    ),
                ),
            ),
        )
    )


def test_parse_keeps_stray_choose_for_evaluation():
    parsed = parse("2:3")
    assert parsed.body.terms[0].factors[0] == Factor(base=Number(2), ops=(StrayChoose(Number(3)),))


def test_parse_groups_and_repeat():
    parsed = parse("(1+1)x(2)")
    assert parsed.repeat == Sum(
        terms=(
            Term(
                factors=(
                    Factor(
                        base=Group(
                            Sum(
                                terms=(
                                    Term(factors=(Factor(base=Number(1)),)),
                                    Term(factors=(Factor(base=Number(1)),)),
                                ),
                                operators=("add",),
                            )
                        )
                    ),
                )
            ),
        )
    )
    assert parsed.body == Sum(terms=(Term(factors=(Factor(base=Group(atom_sum(2))),)),))
