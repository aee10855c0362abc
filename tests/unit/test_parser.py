from __future__ import annotations

import pytest

from wprintf.error_msg import TemplateSyntaxError
from wprintf.parser import Directive, Template, literal, parse_template


@pytest.mark.unit
def test_full_directive_fields():
    (directive,) = Template("%-08.3lf").pieces
    assert directive == Directive(conversion="f", flags="-0", width=8, precision=3, length="l")
    assert directive.to_syntax() == "%-08.3lf"


@pytest.mark.unit
def test_literal_runs_and_escapes_are_merged():
    assert Template("a%%b").pieces == ("a%b",)
    assert Template("").pieces == ()
    assert Template("x=%d%%").pieces == ("x=", Directive(conversion="d"), "%")


@pytest.mark.unit
def test_star_width_and_precision():
    (directive,) = parse_template("%*.*d")
    assert directive.width is None and directive.width_from_arg
    assert directive.precision is None and directive.precision_from_arg
    assert directive.arity == 3
    assert directive.to_syntax() == "%*.*d"


@pytest.mark.unit
def test_bare_dot_is_zero_precision():
    (directive,) = parse_template("%.s")
    assert directive.precision == 0


@pytest.mark.unit
@pytest.mark.parametrize("length", ["hh", "h", "l", "ll", "L", "q", "j", "z", "t"])
def test_length_modifiers(length):
    (directive,) = parse_template(f"%{length}d")
    assert directive.length == length
    assert directive.conversion == "d"


@pytest.mark.unit
def test_flags_include_grouping_and_space():
    (directive,) = parse_template("%' +#d")
    assert all(directive.has_flag(flag) for flag in "' +#")


@pytest.mark.unit
def test_arity_counts_star_arguments():
    assert Template("x=%d, y=%*.*f, %%").arity == 4
    assert Template("no directives").arity == 0


@pytest.mark.unit
@pytest.mark.parametrize("text", ["%y", "100%", "%1$d", "%5", "%.q"])
def test_malformed_templates_raise_at_definition(text):
    with pytest.raises(TemplateSyntaxError) as excinfo:
        Template(text)
    assert excinfo.value.template == text
    assert text in str(excinfo.value)


@pytest.mark.unit
def test_incomplete_directive_message():
    with pytest.raises(TemplateSyntaxError) as excinfo:
        parse_template("100%")
    assert excinfo.value.msg == "incomplete conversion directive at end of format string"


@pytest.mark.unit
def test_template_requires_text():
    with pytest.raises(TypeError):
        Template(b"%d")  # type: ignore[arg-type]


@pytest.mark.unit
def test_template_value_semantics():
    assert literal("%d") == Template("%d")
    assert len({Template("%d"), Template("%d")}) == 1
    assert str(Template("%s!")) == "%s!"
    assert repr(Template("%s")) == "Template('%s')"
