import pytest

from dice_notation.errors import DiceError, NotationSyntaxError
from dice_notation.parser import parse


@pytest.mark.parametrize(
    ("text", "prefix"),
    [
        ("", "[UNPARSEABLE_INPUT]"),
        ("   ", "[UNPARSEABLE_INPUT]"),
        ("(2d6 + 3) * 2", "[OUT_OF_SCOPE_SYNTAX]"),
        ("1d%", "[OUT_OF_SCOPE_SYNTAX]"),
        ("2x6", "[UNPARSEABLE_INPUT]"),
        ("3d", "[UNPARSEABLE_INPUT]"),
        ("1+", "[UNPARSEABLE_INPUT]"),
        ("1 2", "[UNPARSEABLE_INPUT]"),
        ("d6d6", "[UNPARSEABLE_INPUT]"),
        ("*2", "[UNPARSEABLE_INPUT]"),
    ],
)
def test_parse_rejections(text, prefix):
    with pytest.raises(NotationSyntaxError) as exc:
        parse(text)
    assert str(exc.value).startswith(prefix)


def test_syntax_errors_are_dice_errors():
    with pytest.raises(DiceError):
        parse("roll some dice")
