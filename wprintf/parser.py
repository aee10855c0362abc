"""
wprintf template parser - printf conversion directives using Lark
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple, Union

from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken

from wprintf.error_msg import TemplateSyntaxError


@dataclass(frozen=True)
class Directive:
    """One parsed ``%[flags][width][.precision][length]conversion`` directive"""

    conversion: str
    flags: str = ""
    width: Optional[int] = None
    width_from_arg: bool = False
    precision: Optional[int] = None
    precision_from_arg: bool = False
    length: str = ""

    @property
    def arity(self) -> int:
        """Number of arguments this directive consumes"""
        return 1 + int(self.width_from_arg) + int(self.precision_from_arg)

    def has_flag(self, flag: str) -> bool:
        return flag in self.flags

    def to_syntax(self) -> str:
        width = "*" if self.width_from_arg else ("" if self.width is None else str(self.width))
        if self.precision_from_arg:
            precision = ".*"
        elif self.precision is None:
            precision = ""
        else:
            precision = f".{self.precision}"
        return f"%{self.flags}{width}{precision}{self.length}{self.conversion}"


Piece = Union[str, Directive]


# Lark grammar for printf templates
grammar = r"""
    template: piece*

    ?piece: literal
          | escape
          | directive

    literal: LITERAL
    escape: "%%"
    directive: "%" FLAGS? width? precision? LENGTH? CONVERSION

    width: WIDTH
         | "*" -> star_width
    precision: "." PRECISION?
             | "." "*" -> star_precision

    LITERAL: /[^%]+/
    FLAGS: /[-+ #0']+/
    // Width cannot start with 0, a leading 0 is the zero-padding flag
    WIDTH: /[1-9][0-9]*/
    PRECISION: /[0-9]+/
    LENGTH: /hh|h|ll|l|L|q|j|z|t/
    CONVERSION: /[diuoxXcCsSpeEfFgG]/
"""


class TemplateTransformer(Transformer):
    """Transform the parse tree into a tuple of literal runs and directives"""

    def template(self, pieces):
        merged: list = []
        for piece in pieces:
            if isinstance(piece, str) and merged and isinstance(merged[-1], str):
                merged[-1] += piece
            else:
                merged.append(piece)
        return tuple(merged)

    @v_args(inline=True)
    def literal(self, token):
        return str(token)

    def escape(self, _children):
        return "%"

    @v_args(inline=True)
    def width(self, token):
        return ("width", int(token))

    def star_width(self, _children):
        return ("width", None)

    def precision(self, children):
        # A bare "." means a precision of zero
        return ("precision", int(children[0]) if children else 0)

    def star_precision(self, _children):
        return ("precision", None)

    def directive(self, children):
        fields: dict = {"conversion": str(children[-1])}
        for child in children[:-1]:
            if isinstance(child, tuple):
                kind, value = child
                fields[kind] = value
                fields[f"{kind}_from_arg"] = value is None
            elif child.type == "FLAGS":
                fields["flags"] = str(child)
            elif child.type == "LENGTH":
                fields["length"] = str(child)
        return Directive(**fields)


# Create the parser
parser = Lark(
    grammar,
    start="template",
    parser="lalr",
    transformer=TemplateTransformer(),
    maybe_placeholders=False,
)


def describe_syntax_error(exc: UnexpectedInput) -> str:
    """Render a lark parse failure as a one-line description"""
    if isinstance(exc, UnexpectedCharacters):
        return f"invalid conversion directive: unexpected {exc.char!r} at column {exc.column}"
    if isinstance(exc, UnexpectedToken) and exc.token.type != "$END":
        return f"invalid conversion directive: unexpected {str(exc.token)!r} at column {exc.column}"
    return "incomplete conversion directive at end of format string"


@lru_cache(maxsize=512)
def parse_template(text: str) -> Tuple[Piece, ...]:
    """
    Parse a template into literal runs and directives

    Args:
        text: The template text

    Returns:
        A tuple of literal strings and Directive objects, in template order

    Raises:
        TemplateSyntaxError: if a directive is malformed
    """
    try:
        return parser.parse(text)
    except UnexpectedInput as exc:
        raise TemplateSyntaxError(describe_syntax_error(exc), text) from exc


class Template:
    """A template validated when it is defined rather than when it is used"""

    __slots__ = ("text", "pieces")

    def __init__(self, text: str):
        if not isinstance(text, str):
            raise TypeError(f"Template text must be str, got {type(text).__name__}")
        self.text = text
        self.pieces = parse_template(text)

    @property
    def directives(self) -> Tuple[Directive, ...]:
        return tuple(piece for piece in self.pieces if isinstance(piece, Directive))

    @property
    def arity(self) -> int:
        """Number of arguments a call must supply"""
        return sum(directive.arity for directive in self.directives)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Template({self.text!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Template):
            return self.text == other.text
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text)


# Literal templates read naturally at call sites as literal("...")
literal = Template
