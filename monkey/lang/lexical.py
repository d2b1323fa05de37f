"""Lexical analysis for the monkey language. Tokens are pulled one at a time from a Lexer; nothing is scanned ahead of
what the caller asks for.

```
<ident>   ::= (<letter> | "_")+          ; keywords are identifiers found in token.KEYWORDS
<int>     ::= <digit>+                   ; no sign: "-" is always its own token
<symbol>  ::= "{" | "}" | "(" | ")" | "," | ";" | "+" | "-" | "*" | "/" | "<" | ">"
            | "=" | "==" | "!" | "!="
```

Any other character becomes an ILLEGAL token and scanning carries on. Once the input is exhausted every call returns
EOF.
"""

import string

from monkey.lang.token import TokenType, lookup_ident


NUL = "\0"  # end of input sentinel

SINGLE_CHAR_TOKENS = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    ">": TokenType.GT,
    "<": TokenType.LT,
}

# char: (token if followed by "=", token otherwise)
LOOKAHEAD_TOKENS = {
    "=": (TokenType.EQUAL, TokenType.ASSIGN),
    "!": (TokenType.NOT_EQUAL, TokenType.BANG),
}


class Lexer:
    """Pull-based scanner over a source string. Keeps track of line/column for localized tokens."""

    def __init__(self, source):
        self.source = source
        self.lines = source.split("\n")

        self.pos = 0
        self.line = 0
        self.column = 0

    @staticmethod
    def is_letter(char):
        return char.isalpha() or char == "_"

    @staticmethod
    def is_digit(char):
        return char in string.digits

    def next_localized(self):
        """Returns next token along with the line, column and source line it starts at."""
        self._skip_whitespace()

        line, column = self.line, self.column
        code_line = self.lines[line] if line < len(self.lines) else ""

        return self.next_token().localize(line, column, code_line)

    def next_token(self):
        """Advances past and returns the next token."""
        self._skip_whitespace()

        char = self._read_char()

        if char == NUL:
            return TokenType.EOF.token()
        elif char in SINGLE_CHAR_TOKENS:
            return SINGLE_CHAR_TOKENS[char].token()
        elif char in LOOKAHEAD_TOKENS:
            double, single = LOOKAHEAD_TOKENS[char]
            if self._peek_char() == "=":
                self._advance()
                return double.token()
            return single.token()
        elif Lexer.is_letter(char):
            return lookup_ident(self._read_while(char, Lexer.is_letter))
        elif Lexer.is_digit(char):
            return TokenType.INT.create_token(self._read_while(char, Lexer.is_digit))

        return TokenType.ILLEGAL.create_token(char)

    def _advance(self):
        if self.pos >= len(self.source):
            return
        self.pos += 1
        self.column += 1

    def _peek_char(self):
        if self.pos >= len(self.source):
            return NUL
        return self.source[self.pos]

    def _read_char(self):
        char = self._peek_char()
        self._advance()
        return char

    def _read_while(self, first_char, predicate):
        """Reads maximal run of chars matching predicate, first_char having already been consumed."""
        start = self.pos
        while predicate(self._peek_char()):
            self._advance()
        return first_char + self.source[start:self.pos]

    def _skip_whitespace(self):
        while self._peek_char().isspace():
            if self._peek_char() == "\n":
                self.column = -1  # _advance moves it back to 0
                self.line += 1
            self._advance()


def tokenize(source, localized=False):
    """Lazily yields the tokens of source, ending with (and including) the first EOF token."""
    lexer = Lexer(source)
    while True:
        token = lexer.next_localized() if localized else lexer.next_token()
        yield token

        if token.type is TokenType.EOF:
            return
