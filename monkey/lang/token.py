"""Token kinds and token values produced by the lexer."""

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Every kind of token in the monkey language. Fixed tokens use their canonical literal as value, variable tokens
    (identifiers, integers) and markers use a display name.
    """
    EOF = "EOF"
    ILLEGAL = "ILLEGAL"

    IDENT = "IDENT"
    INT = "INT"

    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"

    EQUAL = "=="
    NOT_EQUAL = "!="
    LT = "<"
    GT = ">"

    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    FUNCTION = "fn"
    LET = "let"
    TRUE = "true"
    FALSE = "false"
    IF = "if"
    ELSE = "else"
    RETURN = "return"

    def token(self):
        """Token with this kind's canonical literal. EOF carries an empty literal."""
        return Token(self, "" if self is TokenType.EOF else self.value)

    def create_token(self, literal):
        return Token(self, literal)

    def __str__(self):
        return self.value


KEYWORDS = {
    kind.value: kind
    for kind in (TokenType.FUNCTION, TokenType.LET, TokenType.TRUE, TokenType.FALSE, TokenType.IF, TokenType.ELSE,
                 TokenType.RETURN)
}


def lookup_ident(ident):
    """Returns keyword token for ident, or an IDENT token carrying ident."""
    if ident in KEYWORDS:
        return KEYWORDS[ident].token()
    return TokenType.IDENT.create_token(ident)


@dataclass(frozen=True)
class Token:
    type: TokenType
    literal: str

    def localize(self, line, column, code_line):
        return LocalizedToken(self, line, column, code_line)

    def __str__(self):
        return f"{self.type.name}('{self.literal}')"


@dataclass(frozen=True)
class LocalizedToken:
    """Token plus where it starts in the source (0-based line and column) and the text of that line. Only used for
    diagnostics.
    """
    token: Token
    line: int
    column: int
    code_line: str

    @property
    def type(self):
        return self.token.type

    @property
    def literal(self):
        return self.token.literal

    def __str__(self):
        return f"{self.line}:{self.column} {self.token}"
