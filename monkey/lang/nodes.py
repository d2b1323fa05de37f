"""Abstract syntax tree for the monkey language.

There are two families of nodes, statements and expressions, and a Program root holding the top-level statements:

```
<program>    ::= <statement>*
<statement>  ::= "let" <ident> "=" <expression> [";"]      ; LetStatement
               | "return" <expression> [";"]              ; ReturnStatement
               | <expression> [";"]                       ; ExpressionStatement
<block>      ::= "{" <statement>* "}"                     ; BlockStatement
<expression> ::= <ident> | <int> | "true" | "false"
               | ("!" | "-") <expression>                 ; PrefixExpression
               | <expression> <operator> <expression>     ; InfixExpression
               | "(" <expression> ")"
               | "if" "(" <expression> ")" <block> ["else" <block>]
               | "fn" "(" [<ident> ("," <ident>)*] ")" <block>
```

Nodes are frozen dataclasses: once the parser builds one it cannot change, and children are held in tuples. str() of any
node is its canonical rendering, which is stable under re-parsing.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Optional, Tuple

from monkey.lang.token import Token


def _render(node):
    return "" if node is None else str(node)


class Node(ABC):
    """Superclass of every syntax tree node."""

    @property
    def token_literal(self):
        """Literal of the token the node starts with."""
        return self.token.literal

    @property
    def nodes(self):
        """Child nodes, in source order."""
        children = []
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, Node):
                children.append(value)
            elif isinstance(value, tuple):
                children.extend(value)
        return children

    @abstractmethod
    def __str__(self):
        """Canonical rendering of the node."""

    def display(self, indents=0):
        """Recursively displays node tree with readable format.

        Format:
        <Node>(token='<literal>', <attr>=<value>, nodes=[
            <Node>(token='<literal>', nodes=[
                ...
                <Node>(token='<literal>')  # <-- if nodes is empty
            ])
        ])
        """
        attrs = []
        for field in fields(self):
            value = getattr(self, field.name)
            if field.name != "token" and not isinstance(value, (Node, tuple)) and value is not None:
                attrs.append(f"{field.name}={value!r}")

        result = f"{'    ' * indents}{type(self).__name__}(token='{self.token_literal}'"
        if attrs:
            result += ", " + ", ".join(attrs)

        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"


class Statement(Node):
    """Superclass of statement nodes."""


class Expression(Node):
    """Superclass of expression nodes."""


# ==================== EXPRESSIONS ====================

@dataclass(frozen=True)
class Identifier(Expression):
    token: Token
    value: str

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    token: Token
    value: int

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    token: Token
    value: bool

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class PrefixExpression(Expression):
    token: Token
    operator: str
    right: Optional[Expression]

    def __str__(self):
        return f"({self.operator}{_render(self.right)})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    token: Token
    left: Expression
    operator: str
    right: Optional[Expression]

    def __str__(self):
        return f"({_render(self.left)} {self.operator} {_render(self.right)})"


@dataclass(frozen=True)
class IfExpression(Expression):
    token: Token
    condition: Optional[Expression]
    consequence: "BlockStatement"
    alternative: Optional["BlockStatement"] = None  # present iff an else clause was parsed

    def __str__(self):
        condition = _render(self.condition)
        if not isinstance(self.condition, (PrefixExpression, InfixExpression)):
            condition = f"({condition})"  # operator expressions already render in parentheses

        result = f"if {condition} {{\n{self.consequence}\n}}"
        if self.alternative is not None:
            result += f" else {{\n{self.alternative}\n}}"
        return result


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    token: Token
    parameters: Tuple[Identifier, ...]  # declaration order, duplicates allowed
    body: "BlockStatement"

    def __str__(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"{self.token_literal}({params}) {{\n{self.body}\n}}"


# ==================== STATEMENTS ====================

@dataclass(frozen=True)
class LetStatement(Statement):
    token: Token
    name: Identifier
    value: Optional[Expression]

    def __str__(self):
        return f"{self.token_literal} {self.name} = {_render(self.value)};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    token: Token
    value: Optional[Expression]

    def __str__(self):
        return f"{self.token_literal} {_render(self.value)};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    token: Token  # first token of the expression
    expression: Optional[Expression]

    def __str__(self):
        return _render(self.expression)


@dataclass(frozen=True)
class BlockStatement(Statement):
    token: Token  # the "{"
    statements: Tuple[Statement, ...] = ()

    def __str__(self):
        return "\n".join(str(statement) for statement in self.statements)


@dataclass(frozen=True)
class Program(Node):
    """Parse root: the top-level statements of a source text."""
    statements: Tuple[Statement, ...] = ()

    @property
    def token_literal(self):
        return self.statements[0].token_literal if self.statements else ""

    def __str__(self):
        return "\n".join(str(statement) for statement in self.statements)
