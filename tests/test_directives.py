import pytest

from parselib.directives import Directive, is_break, match_directive


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("include", Directive.INCLUDE),
        ("INCLUDE", Directive.INCLUDE),
        ("enforce", Directive.ENFORCE),
        ("ENFORCE", Directive.ENFORCE),
        ("warning", Directive.WARNING),
        ("WARNING", Directive.WARNING),
        ("BREAK", Directive.BREAK),
        ("break", Directive.BREAK),
    ],
)
def test_directive_spellings(name: str, expected: Directive) -> None:
    assert match_directive(name) is expected


def test_plain_keys_are_not_directives() -> None:
    assert match_directive("SCHEME") is None
    assert match_directive("Include") is None
    assert not is_break("BREAKPOINT")
    assert is_break("BREAK")
