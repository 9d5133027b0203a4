"""Expression evaluator: recursive descent that computes while it parses.

Grammar, lowest precedence first::

    or_expr     := and_expr ( "||" and_expr )*
    and_expr    := unary ( "&&" unary )*
    unary       := "!" unary | comparison
    comparison  := primary ( ( "==" | "!=" ) primary )?
    primary     := "(" or_expr ")"
                 | STRING | NUMBER | BOOLEAN
                 | IDENT ( "." IDENT )* [ "(" args ")" ]
    args        := [ arg ( "," arg )* ]
    arg         := "[" [ primary ( "," primary )* ] "]" | primary

No AST is built.  Expressions are short and each branch condition is
evaluated at most once, so values are produced directly while the token
stream is consumed.
"""

from __future__ import annotations

from dataclasses import dataclass

from mdtool.model.options import ConditionalOptions
from mdtool.model.values import (
    ArrayValue,
    BooleanValue,
    NumberValue,
    StringValue,
    Value,
)

from ._builtins import call_builtin
from ._resolver import ValueResolver
from ._tokenizer import Token, TokenKind, tokenize
from ._values import (
    ExpressionError,
    StrictModeError,
    truthy,
    values_equal,
)


# ---------------------------------------------------------------------------
# Token stream
# ---------------------------------------------------------------------------

@dataclass
class _TokenStream:
    tokens: list[Token]
    pos: int = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def peek(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def check(self, kind: TokenKind) -> bool:
        token = self.peek()
        return token is not None and token.kind == kind

    def advance(self) -> Token:
        token = self.peek()
        if token is None:
            raise ExpressionError("Unexpected end of expression")
        self.pos += 1
        return token

    def expect(self, kind: TokenKind, what: str) -> Token:
        if not self.check(kind):
            found = self.peek()
            got = "end of expression" if found is None else repr(found.text)
            raise ExpressionError(f"Expected {what}, got {got}")
        return self.advance()


# ---------------------------------------------------------------------------
# ExpressionEvaluator
# ---------------------------------------------------------------------------

class ExpressionEvaluator:
    """Evaluates conditional expressions against a resolver.

    Parameters
    ----------
    resolver : ValueResolver
        Source of variable values.
    options : ConditionalOptions
        Strictness and string-comparison settings.
    """

    def __init__(self, resolver: ValueResolver, options: ConditionalOptions | None = None) -> None:
        self.resolver = resolver
        self.options = options or ConditionalOptions()

    # -----------------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------------

    def evaluate(self, tokens: list[Token]) -> bool:
        """Evaluate a token list to a truth value."""
        stream = _TokenStream(tokens)
        if stream.at_end():
            raise ExpressionError("Empty expression")

        result = self._parse_or(stream)

        if not stream.at_end():
            raise ExpressionError(f"Unexpected token {stream.peek().text!r}")
        return result

    def evaluate_text(self, expression: str) -> bool:
        """Tokenize and evaluate *expression*."""
        return self.evaluate(tokenize(expression))

    # -----------------------------------------------------------------------
    # Boolean layers
    # -----------------------------------------------------------------------

    def _parse_or(self, stream: _TokenStream) -> bool:
        left = self._parse_and(stream)
        while stream.check(TokenKind.OR):
            stream.advance()
            right = self._parse_and(stream)
            left = left or right
        return left

    def _parse_and(self, stream: _TokenStream) -> bool:
        left = self._parse_unary(stream)
        while stream.check(TokenKind.AND):
            stream.advance()
            right = self._parse_unary(stream)
            left = left and right
        return left

    def _parse_unary(self, stream: _TokenStream) -> bool:
        if stream.check(TokenKind.NOT):
            stream.advance()
            return not self._parse_unary(stream)
        return self._parse_comparison(stream)

    def _parse_comparison(self, stream: _TokenStream) -> bool:
        left = self._parse_primary(stream)

        if stream.check(TokenKind.EQUALS) or stream.check(TokenKind.NOT_EQUALS):
            op = stream.advance().kind
            right = self._parse_primary(stream)
            equal = values_equal(
                left, right,
                strict=self.options.strict,
                case_sensitive=self.options.case_sensitive_strings,
            )
            return equal if op == TokenKind.EQUALS else not equal

        # No comparison: coerce the bare primary
        return truthy(left)

    # -----------------------------------------------------------------------
    # Primaries
    # -----------------------------------------------------------------------

    def _parse_primary(self, stream: _TokenStream) -> Value:
        token = stream.advance()
        kind = token.kind

        if kind == TokenKind.LEFT_PAREN:
            value = self._parse_or(stream)
            stream.expect(TokenKind.RIGHT_PAREN, "')'")
            return BooleanValue(value=value)

        if kind == TokenKind.STRING:
            return StringValue(value=token.text)

        if kind == TokenKind.NUMBER:
            return NumberValue(value=float(token.text))

        if kind == TokenKind.BOOLEAN:
            return BooleanValue(value=token.text == "true")

        if kind == TokenKind.IDENTIFIER:
            return self._parse_reference(token.text, stream)

        if kind == TokenKind.LEFT_BRACKET:
            raise ExpressionError("Array literals are only allowed as function arguments")

        raise ExpressionError(f"Unexpected token {token.text!r}")

    def _parse_reference(self, first: str, stream: _TokenStream) -> Value:
        """Variable path, function call, or method-call sugar."""
        if stream.check(TokenKind.LEFT_PAREN):
            args = self._parse_args(stream)
            return BooleanValue(value=call_builtin(first, args, self.options))

        segments = [first]
        while stream.check(TokenKind.DOT):
            stream.advance()
            segments.append(stream.expect(TokenKind.IDENTIFIER, "name after '.'").text)

        if len(segments) > 1 and stream.check(TokenKind.LEFT_PAREN):
            # x.y.f(a, b) == f(x.y, a, b)
            method = segments.pop()
            receiver = self._resolve(".".join(segments))
            args = self._parse_args(stream)
            return BooleanValue(value=call_builtin(method, [receiver, *args], self.options))

        return self._resolve(".".join(segments))

    def _parse_args(self, stream: _TokenStream) -> list[Value]:
        stream.expect(TokenKind.LEFT_PAREN, "'('")
        args: list[Value] = []
        if stream.check(TokenKind.RIGHT_PAREN):
            stream.advance()
            return args

        while True:
            if stream.check(TokenKind.LEFT_BRACKET):
                args.append(self._parse_array(stream))
            else:
                args.append(self._parse_primary(stream))

            if stream.check(TokenKind.COMMA):
                stream.advance()
                continue
            stream.expect(TokenKind.RIGHT_PAREN, "',' or ')' in argument list")
            return args

    def _parse_array(self, stream: _TokenStream) -> ArrayValue:
        stream.expect(TokenKind.LEFT_BRACKET, "'['")
        items: list[Value] = []
        if stream.check(TokenKind.RIGHT_BRACKET):
            stream.advance()
            return ArrayValue(items=items)

        while True:
            items.append(self._parse_primary(stream))
            if stream.check(TokenKind.COMMA):
                stream.advance()
                continue
            stream.expect(TokenKind.RIGHT_BRACKET, "',' or ']' in array literal")
            return ArrayValue(items=items)

    def _resolve(self, path: str) -> Value:
        value = self.resolver.resolve(path)
        if value is not None:
            return value
        if self.options.strict:
            raise StrictModeError(f"Unknown variable: {path}")
        return BooleanValue(value=False)
