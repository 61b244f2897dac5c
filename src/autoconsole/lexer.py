"""JavaScript lexer (tokenizer)."""

from typing import Iterator, Optional, Tuple
from .tokens import Token, TokenType, KEYWORDS, PUNCTUATORS, DIVISION_PRECEDERS
from .errors import JSSyntaxError


_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_MAX_PUNCTUATOR = max(len(p) for p in PUNCTUATORS)

LexerState = Tuple[int, int, int, Optional[TokenType]]


class Lexer:
    """Tokenizes JavaScript source code."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.length = len(source)
        # Type of the last token produced; decides whether "/" is a regex.
        self.last_type: Optional[TokenType] = None
        self._newline_before = False

    def save(self) -> LexerState:
        """Snapshot the position so the parser can look ahead."""
        return (self.pos, self.line, self.column, self.last_type)

    def restore(self, state: LexerState) -> None:
        self.pos, self.line, self.column, self.last_type = state

    def _current(self) -> str:
        """Get current character or empty string if at end."""
        if self.pos >= self.length:
            return ""
        return self.source[self.pos]

    def _peek(self, offset: int = 1) -> str:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= self.length:
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Advance and return current character."""
        if self.pos >= self.length:
            return ""
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def _skip_whitespace(self) -> None:
        """Skip whitespace and comments."""
        while self.pos < self.length:
            ch = self._current()

            if ch in " \t\r\n\f\v\ufeff\u00a0":
                self._advance()
                continue

            if ch == "/" and self._peek() == "/":
                while self._current() and self._current() != "\n":
                    self._advance()
                continue

            if ch == "/" and self._peek() == "*":
                line, column = self.line, self.column
                self._advance()
                self._advance()
                while True:
                    if not self._current():
                        raise JSSyntaxError("Unterminated comment", line, column)
                    if self._current() == "*" and self._peek() == "/":
                        self._advance()
                        self._advance()
                        break
                    self._advance()
                continue

            break

    def _read_hex(self, count: int, line: int, column: int) -> str:
        digits = "".join(self._advance() for _ in range(count))
        try:
            return chr(int(digits, 16))
        except ValueError:
            raise JSSyntaxError(f"Invalid escape sequence: {digits!r}", line, column)

    def _read_string(self, quote: str) -> str:
        """Read a string literal and return its cooked value."""
        line, column = self.line, self.column
        result = []
        self._advance()  # opening quote

        while self._current() != quote:
            ch = self._advance()
            if not ch or ch == "\n":
                raise JSSyntaxError("Unterminated string literal", line, column)

            if ch != "\\":
                result.append(ch)
                continue

            escape = self._advance()
            if escape in _SIMPLE_ESCAPES:
                result.append(_SIMPLE_ESCAPES[escape])
            elif escape == "x":
                result.append(self._read_hex(2, line, column))
            elif escape == "u":
                if self._current() == "{":
                    self._advance()
                    digits = ""
                    while self._current() and self._current() != "}":
                        digits += self._advance()
                    self._advance()
                    try:
                        result.append(chr(int(digits, 16)))
                    except ValueError:
                        raise JSSyntaxError(f"Invalid unicode escape: {digits!r}", line, column)
                else:
                    result.append(self._read_hex(4, line, column))
            elif escape == "\r" and self._current() == "\n":
                self._advance()  # line continuation
            elif escape == "\n":
                pass  # line continuation
            else:
                result.append(escape)

        self._advance()  # closing quote
        return "".join(result)

    def _read_digits(self, allowed: str) -> str:
        start = self.pos
        while self._current() and (self._current() in allowed or self._current() == "_"):
            self._advance()
        return self.source[start:self.pos].replace("_", "")

    def _read_number(self) -> float | int:
        """Read a number literal."""
        line, column = self.line, self.column

        if self._current() == "0" and self._peek() and self._peek() in "xXoObB":
            base = {"x": 16, "o": 8, "b": 2}[self._peek().lower()]
            self._advance()
            self._advance()
            digits = self._read_digits("0123456789abcdefABCDEF"[: base if base <= 10 else 22])
            if not digits:
                raise JSSyntaxError("Invalid number literal", line, column)
            return int(digits, base)

        text = self._read_digits("0123456789")
        is_float = False
        if self._current() == "." and (not text or self._peek().isdigit() or not self._peek().isalpha()):
            is_float = True
            self._advance()
            text += "." + self._read_digits("0123456789")

        if self._current() and self._current() in "eE":
            is_float = True
            text += self._advance()
            if self._current() in ("+", "-"):
                text += self._advance()
            exponent = self._read_digits("0123456789")
            if not exponent:
                raise JSSyntaxError("Invalid number literal", line, column)
            text += exponent

        trailing = self._current()
        if trailing and (trailing.isalpha() or trailing in "_$"):
            raise JSSyntaxError("Identifier starts immediately after number", line, column)

        if is_float:
            return float(text)
        return int(text)

    def _read_identifier(self) -> str:
        """Read an identifier."""
        start = self.pos
        while self._current() and (self._current().isalnum() or self._current() in "_$"):
            self._advance()
        return self.source[start:self.pos]

    def _read_regex(self, line: int, column: int) -> Tuple[str, str]:
        """Read a regex literal starting at the opening slash."""
        self._advance()  # opening /
        pattern = []
        in_class = False

        while True:
            ch = self._current()
            if not ch or ch == "\n":
                raise JSSyntaxError("Unterminated regex literal", line, column)
            if ch == "\\":
                pattern.append(self._advance())
                pattern.append(self._advance())
                continue
            if ch == "/" and not in_class:
                self._advance()
                break
            if ch == "[":
                in_class = True
            elif ch == "]":
                in_class = False
            pattern.append(self._advance())

        flags = self._read_identifier()
        return "".join(pattern), flags

    def _regex_allowed(self) -> bool:
        return self.last_type not in DIVISION_PRECEDERS

    def _make(self, token_type: TokenType, value, line: int, column: int, start: int) -> Token:
        self.last_type = token_type
        return Token(token_type, value, line, column, self.source[start:self.pos], self._newline_before)

    def next_token(self) -> Token:
        """Get the next token."""
        previous_line = self.line
        self._skip_whitespace()

        line = self.line
        self._newline_before = line != previous_line
        column = self.column
        start = self.pos

        if self.pos >= self.length:
            return Token(TokenType.EOF, None, line, column, newline_before=self._newline_before)

        ch = self._current()

        if ch in "'\"":
            return self._make(TokenType.STRING, self._read_string(ch), line, column, start)

        if ch.isdigit() or (ch == "." and self._peek().isdigit()):
            return self._make(TokenType.NUMBER, self._read_number(), line, column, start)

        if ch.isalpha() or ch in "_$":
            value = self._read_identifier()
            token_type = KEYWORDS.get(value, TokenType.IDENTIFIER)
            return self._make(token_type, value, line, column, start)

        if ch == "/" and self._regex_allowed():
            return self._make(TokenType.REGEX, self._read_regex(line, column), line, column, start)

        for size in range(_MAX_PUNCTUATOR, 0, -1):
            text = self.source[self.pos:self.pos + size]
            if len(text) == size and text in PUNCTUATORS:
                for _ in range(size):
                    self._advance()
                return self._make(PUNCTUATORS[text], text, line, column, start)

        raise JSSyntaxError(f"Unexpected character: {ch!r}", line, column)

    def tokenize(self) -> Iterator[Token]:
        """Tokenize the entire source."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                break
