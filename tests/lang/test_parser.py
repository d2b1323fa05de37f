import unittest

from monkey.lang.error import ParseError
from monkey.lang.nodes import (BooleanLiteral, ExpressionStatement, FunctionLiteral, Identifier, IfExpression,
                               InfixExpression, IntegerLiteral, LetStatement, PrefixExpression, ReturnStatement)
from monkey.lang.parser import Parser, parse
from monkey.lang.token import TokenType


class ParserTestCase(unittest.TestCase):

    def build_program(self, source):
        parser = Parser.from_source(source)
        program = parser.parse_program()
        self.assertEqual([], parser.errors, source)
        return program

    def single_expression(self, source):
        program = self.build_program(source)
        self.assertEqual(1, len(program.statements), source)
        self.assertIsInstance(program.statements[0], ExpressionStatement, source)
        return program.statements[0].expression

    def assert_literal(self, expected, expression):
        if isinstance(expected, bool):
            self.assertIsInstance(expression, BooleanLiteral)
            self.assertEqual(str(expected).lower(), expression.token_literal)
        elif isinstance(expected, int):
            self.assertIsInstance(expression, IntegerLiteral)
            self.assertEqual(str(expected), expression.token_literal)
        else:
            self.assertIsInstance(expression, Identifier)
            self.assertEqual(expected, expression.token_literal)
        self.assertEqual(expected, expression.value)

    def assert_infix(self, expression, left, operator, right):
        self.assertIsInstance(expression, InfixExpression)
        self.assert_literal(left, expression.left)
        self.assertEqual(operator, expression.operator)
        self.assert_literal(right, expression.right)

    def test_let_statements(self):
        cases = {
            "let x = 5;": ("x", 5),
            "let y = true;": ("y", True),
            "let foobar = y": ("foobar", "y"),
        }
        for case, (name, value) in cases.items():
            program = self.build_program(case)
            self.assertEqual(1, len(program.statements), case)

            statement = program.statements[0]
            self.assertIsInstance(statement, LetStatement, case)
            self.assertEqual(TokenType.LET.token().literal, statement.token_literal)
            self.assertEqual(name, statement.name.value)
            self.assertEqual(name, statement.name.token_literal)
            self.assert_literal(value, statement.value)

    def test_return_statements(self):
        program = self.build_program("return 5;\nreturn 10;\nreturn 993322;")
        self.assertEqual(3, len(program.statements))

        for statement, value in zip(program.statements, [5, 10, 993322]):
            self.assertIsInstance(statement, ReturnStatement)
            self.assertEqual(TokenType.RETURN.token().literal, statement.token_literal)
            self.assert_literal(value, statement.value)

    def test_literal_expressions(self):
        cases = {"foobar;": "foobar", "5;": 5, "true;": True, "false": False}
        for case, expected in cases.items():
            self.assert_literal(expected, self.single_expression(case))

        program = self.build_program("true; false;")
        self.assertEqual([True, False], [statement.expression.value for statement in program.statements])

    def test_prefix_expressions(self):
        cases = [("!5", "!", 5), ("- 15;", "-", 15), ("!true", "!", True), ("!false", "!", False)]
        for case, operator, right in cases:
            expression = self.single_expression(case)
            self.assertIsInstance(expression, PrefixExpression, case)
            self.assertEqual(operator, expression.operator, case)
            self.assert_literal(right, expression.right)

    def test_infix_expressions(self):
        cases = [
            ("5 + 5;", 5, "+", 5), ("3 + 10", 3, "+", 10), ("5 - 5;", 5, "-", 5), ("5 * 5;", 5, "*", 5),
            ("5 / 5;", 5, "/", 5), ("5 > 5;", 5, ">", 5), ("5 < 5;", 5, "<", 5), ("0 < 83", 0, "<", 83),
            ("5 == 5;", 5, "==", 5), ("5 != 5;", 5, "!=", 5), ("true == true", True, "==", True),
            ("true != false;", True, "!=", False), ("false == false", False, "==", False), ("a * b", "a", "*", "b"),
        ]
        for case, left, operator, right in cases:
            self.assert_infix(self.single_expression(case), left, operator, right)

    def test_operator_precedence(self):
        cases = {
            "-a * b": "((-a) * b)",
            "!-a": "(!(-a))",
            "--a": "(-(-a))",
            "a + b + c": "((a + b) + c)",
            "a + b - c": "((a + b) - c)",
            "a * b * c": "((a * b) * c)",
            "a * b / c": "((a * b) / c)",
            "a + b / c": "(a + (b / c))",
            "a + b * c + d / e - f": "(((a + (b * c)) + (d / e)) - f)",
            "3 + 4; -5 * 5": "(3 + 4)\n((-5) * 5)",
            "5 > 4 == 3 < 4": "((5 > 4) == (3 < 4))",
            "5 < 4 != 3 > 4": "((5 < 4) != (3 > 4))",
            "3 + 4 * 5 == 3 * 1 + 4 * 5": "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))",
            "true": "true",
            "false": "false",
            "3 > 5 == false": "((3 > 5) == false)",
            "3 < 5 == true": "((3 < 5) == true)",
            "1 + (2 + 3) + 4": "((1 + (2 + 3)) + 4)",
            "(5 + 5) * 2": "((5 + 5) * 2)",
            "2 / (5 + 5)": "(2 / (5 + 5))",
            "-(5 + 5)": "(-(5 + 5))",
            "!(true == true)": "(!(true == true))",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(self.build_program(case)), case)

    def test_if_expression(self):
        expression = self.single_expression("if (x < y) { x }")
        self.assertIsInstance(expression, IfExpression)
        self.assert_infix(expression.condition, "x", "<", "y")

        self.assertEqual(1, len(expression.consequence.statements))
        self.assert_literal("x", expression.consequence.statements[0].expression)
        self.assertIsNone(expression.alternative)
        self.assertEqual("if (x < y) {\nx\n}", str(expression))

    def test_if_else_expression(self):
        expression = self.single_expression("if (y > x) { x } else { y }")
        self.assertIsInstance(expression, IfExpression)
        self.assert_infix(expression.condition, "y", ">", "x")

        self.assert_literal("x", expression.consequence.statements[0].expression)
        self.assertIsNotNone(expression.alternative)
        self.assertEqual(1, len(expression.alternative.statements))
        self.assert_literal("y", expression.alternative.statements[0].expression)
        self.assertEqual("if (y > x) {\nx\n} else {\ny\n}", str(expression))

    def test_function_literal(self):
        expression = self.single_expression("fn(x, y) { x + y; }")
        self.assertIsInstance(expression, FunctionLiteral)

        self.assertEqual(["x", "y"], [param.value for param in expression.parameters])
        self.assertEqual(1, len(expression.body.statements))
        self.assert_infix(expression.body.statements[0].expression, "x", "+", "y")
        self.assertEqual("fn(x, y) {\n(x + y)\n}", str(expression))

    def test_function_parameters(self):
        cases = {
            "fn () {};": [],
            "fn (x) {};": ["x"],
            "fn (x, y, z) {};": ["x", "y", "z"],
            "fn (x, x) {};": ["x", "x"],
        }
        for case, expected in cases.items():
            expression = self.single_expression(case)
            self.assertEqual(expected, [param.value for param in expression.parameters], case)

    def test_errors(self):
        cases = {
            "let = 10;": ["expected next token to be IDENT, got = instead"],
            "let x 5;": ["expected next token to be =, got INT instead", "no prefix parse function for ; found"],
            "let x = 5; let = 10; let 838383;": [
                "expected next token to be IDENT, got = instead",
                "expected next token to be IDENT, got INT instead",
                "no prefix parse function for ; found",
            ],
            "}": ["no prefix parse function for } found"],
            "(1 + 2": ["expected next token to be ), got EOF instead"],
            "if (x) { x": ["expected next token to be }, got EOF instead"],
            "if x { x }": [
                "expected next token to be (, got IDENT instead",
                "no prefix parse function for { found",
                "no prefix parse function for } found",
            ],
            "fn(1) {}": [
                "expected next token to be IDENT, got INT instead",
                "no prefix parse function for ) found",
                "no prefix parse function for { found",
                "no prefix parse function for } found",
            ],
            "9223372036854775808": ["could not parse 9223372036854775808 as integer"],
        }
        for case, expected in cases.items():
            __, errors = parse(case)
            self.assertEqual(expected, errors, case)

    def test_block_keeps_its_closing_brace(self):
        program, errors = parse("if (x) { let } 5")
        self.assertEqual(["expected next token to be IDENT, got } instead"], errors)
        self.assertEqual(2, len(program.statements))

        expression = program.statements[0].expression
        self.assertIsInstance(expression, IfExpression)
        self.assertEqual(0, len(expression.consequence.statements))
        self.assert_literal(5, program.statements[1].expression)

    def test_deep_nesting(self):
        cases = ["-" * 3000 + "1", "(" * 3000 + "1" + ")" * 3000]
        for case in cases:
            __, errors = parse(case)
            self.assertEqual(["expression is nested too deeply"], errors, case[:10])

        parser = Parser.from_source("!" * 3000 + "true")
        parser.parse_program()
        with self.assertRaises(ParseError):
            parser.check_errors()

    def test_largest_integer(self):
        self.assert_literal(9223372036854775807, self.single_expression("9223372036854775807"))

    def test_check_errors(self):
        parser = Parser.from_source("let x = 1;\nlet = 10;\nlet 838383;")
        parser.parse_program()

        with self.assertRaises(ParseError) as ctx:
            parser.check_errors()
        self.assertEqual(3, len(ctx.exception.errors))
        self.assertEqual(1, ctx.exception.line)
        self.assertEqual(4, ctx.exception.start)
        self.assertEqual("let = 10;", ctx.exception.expr)

        parser = Parser.from_source("1 + 1")
        parser.parse_program()
        parser.check_errors()

    def test_rendering_is_fixed_point(self):
        cases = [
            "let x = 5 * -2;",
            "return a + b;",
            "if (a < b) { if (b < c) { return 1; } return 2; } else { 3 }",
            "fn(x, y) { x * y }",
            "fn() {}",
            "if (x) { 1 }",
            "if (-x) { 1 } else { if (true) { 2 } }",
            "3 + 4; -5 * 5",
            "!(true == !false) != false",
        ]
        for case in cases:
            rendered = str(self.build_program(case))
            self.assertEqual(rendered, str(self.build_program(rendered)), case)


if __name__ == '__main__':
    unittest.main()
