"""Parser for the monkey language: recursive descent for statements, operator-precedence (Pratt) parsing for
expressions. See nodes.py for the grammar.

Every token kind that can start an expression has a prefix parse function, and every infix operator has a precedence
and an infix parse function. Parsing an expression calls the prefix function for the current token and then keeps
folding infix operators into the left operand for as long as they bind tighter than the caller's precedence, so
operators of equal precedence associate to the left.

A Parser doesn't stop at the first problem: every diagnostic of a pass is collected in Parser.errors, and callers
decide whether a non-empty list is fatal (see Parser.check_errors).
"""

from enum import IntEnum

from monkey.lang.error import ParseError
from monkey.lang.lexical import Lexer
from monkey.lang.nodes import (BlockStatement, BooleanLiteral, ExpressionStatement, FunctionLiteral, Identifier,
                               IfExpression, InfixExpression, IntegerLiteral, LetStatement, PrefixExpression, Program,
                               ReturnStatement)
from monkey.lang.token import TokenType


INT64_MAX = 2 ** 63 - 1


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # !x -x
    CALL = 7         # reserved for function calls


PRECEDENCES = {
    TokenType.EQUAL: Precedence.EQUALS,
    TokenType.NOT_EQUAL: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.SLASH: Precedence.PRODUCT,
}


class Parser:
    """Single-use parser over a Lexer's token stream."""

    def __init__(self, lexer):
        self.lexer = lexer
        self.errors = []
        self.error_location = None  # localized token of the first error

        self._cur = None   # localized tokens: position is kept for diagnostics only
        self._peek = None

        self.prefix_parse_fns = {
            TokenType.IDENT: self.parse_identifier,
            TokenType.INT: self.parse_integer_literal,
            TokenType.TRUE: self.parse_boolean,
            TokenType.FALSE: self.parse_boolean,
            TokenType.BANG: self.parse_prefix_expression,
            TokenType.MINUS: self.parse_prefix_expression,
            TokenType.LPAREN: self.parse_grouped_expression,
            TokenType.IF: self.parse_if_expression,
            TokenType.FUNCTION: self.parse_function_literal,
        }
        self.infix_parse_fns = {token_type: self.parse_infix_expression for token_type in PRECEDENCES}

        # read two tokens, so cur_token and peek_token are both set
        self.next_token()
        self.next_token()

    @classmethod
    def from_source(cls, source):
        return cls(Lexer(source))

    @property
    def cur_token(self):
        return self._cur.token

    @property
    def peek_token(self):
        return self._peek.token

    def next_token(self):
        self._cur = self._peek
        self._peek = self.lexer.next_localized()

    def cur_token_is(self, token_type):
        return self.cur_token.type is token_type

    def peek_token_is(self, token_type):
        return self.peek_token.type is token_type

    def cur_precedence(self):
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    def peek_precedence(self):
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def expect_peek(self, token_type):
        """Advances if the next token is of token_type. Otherwise records a diagnostic and steps onto the offending
        token, so that the statement loop resumes after it. A "}" is left in place for the enclosing block to close on.
        """
        if self.peek_token_is(token_type):
            self.next_token()
            return True

        self.error(f"expected next token to be {token_type}, got {self.peek_token.type} instead", self._peek)
        if not self.peek_token_is(TokenType.EOF) and not self.peek_token_is(TokenType.RBRACE):
            self.next_token()
        return False

    def error(self, msg, location=None):
        if not self.errors:
            self.error_location = location if location is not None else self._cur
        self.errors.append(msg)

    def check_errors(self):
        """Raises a ParseError carrying every diagnostic if the last pass failed."""
        if self.errors:
            raise ParseError(self.errors, self.error_location)

    # ==================== STATEMENTS ====================

    def parse_program(self):
        statements = []
        while not self.cur_token_is(TokenType.EOF):
            try:
                statement = self.parse_statement()
            except RecursionError:
                self.error("expression is nested too deeply")
                break

            if statement is not None:
                statements.append(statement)
            self.next_token()

        return Program(tuple(statements))

    def parse_statement(self):
        if self.cur_token_is(TokenType.LET):
            return self.parse_let_statement()
        elif self.cur_token_is(TokenType.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self):
        token = self.cur_token

        if not self.expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(TokenType.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return LetStatement(token, name, value)

    def parse_return_statement(self):
        token = self.cur_token

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return ReturnStatement(token, value)

    def parse_expression_statement(self):
        token = self.cur_token

        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if self.peek_token_is(TokenType.SEMICOLON):  # optional, so that the shell accepts "5 + 5"
            self.next_token()

        return ExpressionStatement(token, expression)

    def parse_block_statement(self):
        token = self.cur_token
        statements = []

        self.next_token()
        while not self.cur_token_is(TokenType.RBRACE) and not self.cur_token_is(TokenType.EOF):
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
            self.next_token()

        if self.cur_token_is(TokenType.EOF):
            self.error(f"expected next token to be {TokenType.RBRACE}, got {TokenType.EOF} instead")

        return BlockStatement(token, tuple(statements))

    # ==================== EXPRESSIONS ====================

    def parse_expression(self, precedence):
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.error(f"no prefix parse function for {self.cur_token.type} found")
            return None
        left = prefix()

        while not self.peek_token_is(TokenType.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left

            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self):
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self):
        token = self.cur_token

        value = int(token.literal)
        if value > INT64_MAX:
            self.error(f"could not parse {token.literal} as integer")
            return None

        return IntegerLiteral(token, value)

    def parse_boolean(self):
        return BooleanLiteral(self.cur_token, self.cur_token_is(TokenType.TRUE))

    def parse_prefix_expression(self):
        token = self.cur_token

        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)

        return PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left):
        token = self.cur_token
        precedence = self.cur_precedence()

        self.next_token()
        right = self.parse_expression(precedence)

        return InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self):
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return expression

    def parse_if_expression(self):
        token = self.cur_token

        if not self.expect_peek(TokenType.LPAREN):
            return None

        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(TokenType.RPAREN):
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(TokenType.ELSE):
            self.next_token()

            if not self.expect_peek(TokenType.LBRACE):
                return None
            alternative = self.parse_block_statement()

        return IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self):
        token = self.cur_token

        if not self.expect_peek(TokenType.LPAREN):
            return None

        parameters = self.parse_function_parameters()
        if parameters is None:
            return None

        if not self.expect_peek(TokenType.LBRACE):
            return None
        body = self.parse_block_statement()

        return FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self):
        """Parses "(" [<ident> ("," <ident>)*] ")" with cur_token on the "(". Duplicate names are kept."""
        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return ()

        if not self.expect_peek(TokenType.IDENT):
            return None
        identifiers = [Identifier(self.cur_token, self.cur_token.literal)]

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENT):
                return None
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return tuple(identifiers)


def parse(source):
    """Parses source, returning the Program and the (possibly empty) list of diagnostics."""
    parser = Parser.from_source(source)
    program = parser.parse_program()
    return program, list(parser.errors)
