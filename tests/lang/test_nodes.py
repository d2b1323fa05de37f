import dataclasses
import unittest

from monkey.lang.nodes import (BlockStatement, BooleanLiteral, ExpressionStatement, FunctionLiteral, Identifier,
                               IfExpression, InfixExpression, IntegerLiteral, LetStatement, PrefixExpression, Program,
                               ReturnStatement)
from monkey.lang.token import Token, TokenType


def ident(name):
    return Identifier(TokenType.IDENT.create_token(name), name)


def integer(value):
    return IntegerLiteral(TokenType.INT.create_token(str(value)), value)


def statement(expression):
    return ExpressionStatement(expression.token, expression)


def block(*expressions):
    return BlockStatement(TokenType.LBRACE.token(), tuple(statement(expression) for expression in expressions))


class RenderingTestCase(unittest.TestCase):

    def test_let_statement(self):
        program = Program((LetStatement(TokenType.LET.token(), ident("myVar"), ident("anotherVar")),))
        self.assertEqual("let myVar = anotherVar;", str(program))

    def test_expressions(self):
        plus = TokenType.PLUS.token()
        cases = {
            "(-a)": PrefixExpression(TokenType.MINUS.token(), "-", ident("a")),
            "(!true)": PrefixExpression(TokenType.BANG.token(), "!", BooleanLiteral(TokenType.TRUE.token(), True)),
            "(1 + 2)": InfixExpression(plus, integer(1), "+", integer(2)),
            "((1 + 2) + x)": InfixExpression(plus, InfixExpression(plus, integer(1), "+", integer(2)), "+", ident("x")),
            "return 5;": ReturnStatement(TokenType.RETURN.token(), integer(5)),
        }
        for expected, node in cases.items():
            self.assertEqual(expected, str(node), expected)

    def test_if_expression(self):
        condition = InfixExpression(TokenType.LT.token(), ident("x"), "<", ident("y"))

        node = IfExpression(TokenType.IF.token(), condition, block(ident("x")))
        self.assertEqual("if (x < y) {\nx\n}", str(node))

        node = IfExpression(TokenType.IF.token(), condition, block(ident("x")), block(ident("y"), integer(1)))
        self.assertEqual("if (x < y) {\nx\n} else {\ny\n1\n}", str(node))

        node = IfExpression(TokenType.IF.token(), ident("ok"), block(integer(1)))
        self.assertEqual("if (ok) {\n1\n}", str(node))

    def test_function_literal(self):
        body = block(InfixExpression(TokenType.PLUS.token(), ident("x"), "+", ident("y")))
        node = FunctionLiteral(TokenType.FUNCTION.token(), (ident("x"), ident("y")), body)
        self.assertEqual("fn(x, y) {\n(x + y)\n}", str(node))

        node = FunctionLiteral(TokenType.FUNCTION.token(), (), block())
        self.assertEqual("fn() {\n\n}", str(node))

    def test_program(self):
        self.assertEqual("", str(Program()))
        self.assertEqual("", Program().token_literal)

        program = Program((statement(integer(3)), LetStatement(TokenType.LET.token(), ident("x"), integer(4))))
        self.assertEqual("3\nlet x = 4;", str(program))
        self.assertEqual("3", program.token_literal)


class NodeTestCase(unittest.TestCase):

    def test_token_literal(self):
        cases = {
            "let": LetStatement(TokenType.LET.token(), ident("x"), integer(1)),
            "return": ReturnStatement(TokenType.RETURN.token(), integer(1)),
            "foo": ident("foo"),
            "5": integer(5),
            "{": block(),
            "fn": FunctionLiteral(TokenType.FUNCTION.token(), (), block()),
        }
        for expected, node in cases.items():
            self.assertEqual(expected, node.token_literal, expected)

    def test_immutable(self):
        node = ident("x")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            node.value = "y"

        node = block(ident("x"))
        self.assertIsInstance(node.statements, tuple)

    def test_equality(self):
        self.assertEqual(ident("x"), ident("x"))
        self.assertNotEqual(ident("x"), ident("y"))
        self.assertNotEqual(integer(1), Identifier(Token(TokenType.INT, "1"), "1"))

    def test_nodes(self):
        node = InfixExpression(TokenType.PLUS.token(), integer(1), "+", ident("x"))
        self.assertEqual([integer(1), ident("x")], node.nodes)

        node = FunctionLiteral(TokenType.FUNCTION.token(), (ident("a"), ident("b")), block())
        self.assertEqual([ident("a"), ident("b"), block()], node.nodes)

    def test_display(self):
        node = InfixExpression(TokenType.PLUS.token(), integer(1), "+", ident("x"))
        expected = ("InfixExpression(token='+', operator='+', nodes=[\n"
                    "    IntegerLiteral(token='1', value=1),\n"
                    "    Identifier(token='x', value='x')\n"
                    "])")
        self.assertEqual(expected, node.display())


if __name__ == '__main__':
    unittest.main()
