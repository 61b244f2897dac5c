"""Token types for the JavaScript lexer."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional


class TokenType(Enum):
    """JavaScript token types."""

    EOF = auto()

    # Literals
    NUMBER = auto()
    STRING = auto()
    REGEX = auto()

    IDENTIFIER = auto()

    # Keywords
    VAR = auto()
    LET = auto()
    CONST = auto()
    FUNCTION = auto()
    CLASS = auto()
    EXTENDS = auto()
    SUPER = auto()
    RETURN = auto()
    IF = auto()
    ELSE = auto()
    WHILE = auto()
    DO = auto()
    FOR = auto()
    IN = auto()
    OF = auto()
    BREAK = auto()
    CONTINUE = auto()
    SWITCH = auto()
    CASE = auto()
    DEFAULT = auto()
    TRY = auto()
    CATCH = auto()
    FINALLY = auto()
    THROW = auto()
    NEW = auto()
    DELETE = auto()
    TYPEOF = auto()
    INSTANCEOF = auto()
    THIS = auto()
    TRUE = auto()
    FALSE = auto()
    NULL = auto()
    VOID = auto()

    # Punctuation
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    SEMICOLON = auto()  # ;
    COMMA = auto()  # ,
    DOT = auto()  # .
    COLON = auto()  # :
    QUESTION = auto()  # ?
    ARROW = auto()  # =>
    ELLIPSIS = auto()  # ...

    # Arithmetic
    PLUS = auto()  # +
    MINUS = auto()  # -
    STAR = auto()  # *
    SLASH = auto()  # /
    PERCENT = auto()  # %
    STARSTAR = auto()  # **
    PLUSPLUS = auto()  # ++
    MINUSMINUS = auto()  # --

    # Comparison
    LT = auto()  # <
    GT = auto()  # >
    LE = auto()  # <=
    GE = auto()  # >=
    EQ = auto()  # ==
    NE = auto()  # !=
    EQEQ = auto()  # ===
    NENE = auto()  # !==

    # Logical
    AND = auto()  # &&
    OR = auto()  # ||
    NULLISH = auto()  # ??
    NOT = auto()  # !

    # Bitwise
    AMPERSAND = auto()  # &
    PIPE = auto()  # |
    CARET = auto()  # ^
    TILDE = auto()  # ~
    LSHIFT = auto()  # <<
    RSHIFT = auto()  # >>
    URSHIFT = auto()  # >>>

    # Assignment
    ASSIGN = auto()  # =
    PLUS_ASSIGN = auto()
    MINUS_ASSIGN = auto()
    STAR_ASSIGN = auto()
    SLASH_ASSIGN = auto()
    PERCENT_ASSIGN = auto()
    STARSTAR_ASSIGN = auto()
    AND_ASSIGN = auto()
    OR_ASSIGN = auto()
    XOR_ASSIGN = auto()
    LSHIFT_ASSIGN = auto()
    RSHIFT_ASSIGN = auto()
    URSHIFT_ASSIGN = auto()


KEYWORDS = {
    "var": TokenType.VAR,
    "let": TokenType.LET,
    "const": TokenType.CONST,
    "function": TokenType.FUNCTION,
    "class": TokenType.CLASS,
    "extends": TokenType.EXTENDS,
    "super": TokenType.SUPER,
    "return": TokenType.RETURN,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "do": TokenType.DO,
    "for": TokenType.FOR,
    "in": TokenType.IN,
    "of": TokenType.OF,
    "break": TokenType.BREAK,
    "continue": TokenType.CONTINUE,
    "switch": TokenType.SWITCH,
    "case": TokenType.CASE,
    "default": TokenType.DEFAULT,
    "try": TokenType.TRY,
    "catch": TokenType.CATCH,
    "finally": TokenType.FINALLY,
    "throw": TokenType.THROW,
    "new": TokenType.NEW,
    "delete": TokenType.DELETE,
    "typeof": TokenType.TYPEOF,
    "instanceof": TokenType.INSTANCEOF,
    "this": TokenType.THIS,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "null": TokenType.NULL,
    "void": TokenType.VOID,
}

# The lexer tries the longest candidate first.
PUNCTUATORS = {
    ">>>=": TokenType.URSHIFT_ASSIGN,
    "===": TokenType.EQEQ,
    "...": TokenType.ELLIPSIS,
    "!==": TokenType.NENE,
    "**=": TokenType.STARSTAR_ASSIGN,
    "<<=": TokenType.LSHIFT_ASSIGN,
    ">>=": TokenType.RSHIFT_ASSIGN,
    ">>>": TokenType.URSHIFT,
    "=>": TokenType.ARROW,
    "==": TokenType.EQ,
    "!=": TokenType.NE,
    "<=": TokenType.LE,
    ">=": TokenType.GE,
    "&&": TokenType.AND,
    "||": TokenType.OR,
    "??": TokenType.NULLISH,
    "++": TokenType.PLUSPLUS,
    "--": TokenType.MINUSMINUS,
    "**": TokenType.STARSTAR,
    "<<": TokenType.LSHIFT,
    ">>": TokenType.RSHIFT,
    "+=": TokenType.PLUS_ASSIGN,
    "-=": TokenType.MINUS_ASSIGN,
    "*=": TokenType.STAR_ASSIGN,
    "/=": TokenType.SLASH_ASSIGN,
    "%=": TokenType.PERCENT_ASSIGN,
    "&=": TokenType.AND_ASSIGN,
    "|=": TokenType.OR_ASSIGN,
    "^=": TokenType.XOR_ASSIGN,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    ":": TokenType.COLON,
    "?": TokenType.QUESTION,
    "~": TokenType.TILDE,
    "!": TokenType.NOT,
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "<": TokenType.LT,
    ">": TokenType.GT,
    "&": TokenType.AMPERSAND,
    "|": TokenType.PIPE,
    "^": TokenType.CARET,
}

ASSIGNMENT_OPERATORS = frozenset([
    TokenType.ASSIGN, TokenType.PLUS_ASSIGN, TokenType.MINUS_ASSIGN,
    TokenType.STAR_ASSIGN, TokenType.SLASH_ASSIGN, TokenType.PERCENT_ASSIGN,
    TokenType.STARSTAR_ASSIGN, TokenType.AND_ASSIGN, TokenType.OR_ASSIGN,
    TokenType.XOR_ASSIGN, TokenType.LSHIFT_ASSIGN, TokenType.RSHIFT_ASSIGN,
    TokenType.URSHIFT_ASSIGN,
])

# Token types that carry a binary operator, mapped to the operator text.
BINARY_OPERATORS = {
    TokenType.PLUS: "+", TokenType.MINUS: "-", TokenType.STAR: "*",
    TokenType.SLASH: "/", TokenType.PERCENT: "%", TokenType.STARSTAR: "**",
    TokenType.LT: "<", TokenType.GT: ">", TokenType.LE: "<=", TokenType.GE: ">=",
    TokenType.EQ: "==", TokenType.NE: "!=", TokenType.EQEQ: "===", TokenType.NENE: "!==",
    TokenType.AND: "&&", TokenType.OR: "||", TokenType.NULLISH: "??",
    TokenType.AMPERSAND: "&", TokenType.PIPE: "|", TokenType.CARET: "^",
    TokenType.LSHIFT: "<<", TokenType.RSHIFT: ">>", TokenType.URSHIFT: ">>>",
    TokenType.IN: "in", TokenType.INSTANCEOF: "instanceof",
}

# After one of these a "/" starts a division, anywhere else a regex literal.
DIVISION_PRECEDERS = frozenset([
    TokenType.NUMBER, TokenType.STRING, TokenType.REGEX, TokenType.IDENTIFIER,
    TokenType.THIS, TokenType.SUPER, TokenType.TRUE, TokenType.FALSE, TokenType.NULL,
    TokenType.RPAREN, TokenType.RBRACKET, TokenType.RBRACE,
    TokenType.PLUSPLUS, TokenType.MINUSMINUS,
])


@dataclass
class Token:
    """A token from the JavaScript source.

    ``raw`` is the exact source text of literal tokens, kept so the printer
    can reproduce numbers and strings the way they were written.
    ``newline_before`` is set when a line break separates the token from the
    one before it.
    """

    type: TokenType
    value: Any
    line: int
    column: int
    raw: Optional[str] = None
    newline_before: bool = False

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"
