import enum
import re
import string
from dataclasses import dataclass

from qcalc.utils import PrintableEnum


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    IDENTIFIER = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    CARET = enum.auto()
    PERCENT = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    COMMA = enum.auto()
    EQUAL = enum.auto()
    END = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    offset: int

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "^": TokenType.CARET,
    "%": TokenType.PERCENT,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
    ",": TokenType.COMMA,
    "=": TokenType.EQUAL,
}

BINARY_DIGITS = frozenset("01")
DECIMAL_DIGITS = frozenset(string.digits)
HEX_DIGITS = frozenset(string.hexdigits)
HEX_LETTERS = frozenset("abcdefABCDEF")
PREFIXED_BASE_DIGITS = {"b": BINARY_DIGITS, "x": HEX_DIGITS}


def _is_letter(s: str) -> bool:
    return s.isascii() and s.isalpha()


def _is_valid_in_identifier(s: str) -> bool:
    return (s.isascii() and s.isalnum()) or s == "_"


def is_bare_hex(word: str) -> bool:
    """FACE, ff00 and beef are numerals; cos, x1 and dead_beef are not"""
    return bool(word) and all(c in HEX_DIGITS for c in word) and any(c in HEX_LETTERS for c in word)


class Tokenizer:
    """Cursor over a single line of text.

    ``next()`` advances, ``peek()`` looks ahead without moving the cursor.
    Once an END token has been returned, callers must stop asking for more.
    """

    def __init__(self, line: str) -> None:
        self.line = line
        self.pos = 0

    def peek(self) -> Token:
        saved_pos = self.pos
        token = self.next()
        self.pos = saved_pos
        return token

    def next(self) -> Token:
        line = self.line
        while self.pos < len(line) and line[self.pos].isspace():
            self.pos += 1
        if self.pos >= len(line):
            return Token(type=TokenType.END, lexeme="", offset=self.pos)

        c = line[self.pos]
        if c in DECIMAL_DIGITS:
            return self._consume_number()
        if _is_letter(c):
            return self._consume_word()

        start = self.pos
        self.pos += 1
        # unrecognized characters terminate the line instead of being reported
        return Token(type=SINGLE_CHAR_TOKENS.get(c, TokenType.END), lexeme=c, offset=start)

    def _consume_number(self) -> Token:
        line = self.line
        start = self.pos

        if line[start] == "0" and start + 1 < len(line) and line[start + 1].lower() in PREFIXED_BASE_DIGITS:
            prefix = line[start + 1].lower()
            valid_digits = PREFIXED_BASE_DIGITS[prefix]
            end = start + 2
            digits: list[str] = []
            while end < len(line) and (line[end] in valid_digits or line[end] == "_"):
                if line[end] != "_":
                    digits.append(line[end])
                end += 1
            if digits:
                self.pos = end
                return Token(type=TokenType.NUMBER, lexeme="0" + prefix + "".join(digits), offset=start)
            # "0x" with nothing after it: a plain 0 followed by an identifier

        end = start
        chars: list[str] = []
        seen_dot = False
        while end < len(line) and (line[end] in DECIMAL_DIGITS or line[end] in "._"):
            if line[end] == ".":
                if seen_dot:
                    break
                seen_dot = True
            if line[end] != "_":
                chars.append(line[end])
            end += 1
        self.pos = end
        return Token(type=TokenType.NUMBER, lexeme="".join(chars), offset=start)

    def _consume_word(self) -> Token:
        line = self.line
        start = self.pos
        end = start + 1
        while end < len(line) and _is_valid_in_identifier(line[end]):
            end += 1
        self.pos = end
        word = line[start:end]
        if is_bare_hex(word):
            return Token(type=TokenType.NUMBER, lexeme="0x" + word, offset=start)
        return Token(type=TokenType.IDENTIFIER, lexeme=word, offset=start)


def tokenize(line: str) -> list[Token]:
    """All tokens of ``line`` up to and including the first END token"""
    tokenizer = Tokenizer(line)
    tokens: list[Token] = []
    while True:
        token = tokenizer.next()
        tokens.append(token)
        if token.type is TokenType.END:
            return tokens



def untokenize(tokens: list[Token]) -> str:
    """Canonical spelling of a token list, for diagnostics"""
    result = " ".join(t.lexeme for t in tokens if t.lexeme)

    # ( 1 + 2 ) => (1 + 2)
    result = re.sub(r"\(\s+", "(", result)
    result = re.sub(r"\s+\)", ")", result)

    # max (1 , 2) => max(1, 2)
    result = re.sub(r"(\w)\s+\(", r"\1(", result)
    result = re.sub(r"\s+,", ",", result)

    # 4 ^ 5 => 4^5
    result = re.sub(r"\s*\^\s*", "^", result)
    return result
