"""
Test suite for the Netflu parser.

Tests cover:
- Statement shapes for every leading keyword
- Assignment versus call statements
- Call argument separators
- Method and procedure bodies
- Error reporting (unexpected token, end of input, invalid return)
"""

import os
import sys
import tempfile
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from netflu.lexer import tokenize_string
from netflu.parser import (
    Parser, ParseError, parse_string, parse_file, ASTNodeType, ASTVisitor,
    MethodDef, FunDef, Let, Assign, Print, Back,
    FunctionCall, Identifier, NumberLiteral, StringLiteral,
)


class TestParserStatements(unittest.TestCase):
    """Test cases for well-formed programs."""

    def test_let_number(self):
        statements = parse_string("let x = 5;")

        self.assertEqual(len(statements), 1)
        let = statements[0]
        self.assertIsInstance(let, Let)
        self.assertEqual(let.name, "x")
        self.assertIsInstance(let.value, NumberLiteral)
        self.assertEqual(let.value.value, "5")
        self.assertEqual(let.node_type, ASTNodeType.LET)

    def test_let_string_keeps_quotes(self):
        let = parse_string('let s = "hi";')[0]
        self.assertIsInstance(let.value, StringLiteral)
        self.assertEqual(let.value.value, '"hi"')

    def test_print(self):
        stmt = parse_string("print(x);")[0]
        self.assertIsInstance(stmt, Print)
        self.assertIsInstance(stmt.value, Identifier)
        self.assertEqual(stmt.value.name, "x")

    def test_assignment(self):
        stmt = parse_string("x = y;")[0]
        self.assertIsInstance(stmt, Assign)
        self.assertEqual(stmt.name, "x")
        self.assertIsInstance(stmt.value, Identifier)

    def test_call_statement(self):
        stmt = parse_string("foo();")[0]
        self.assertIsInstance(stmt, FunctionCall)
        self.assertEqual(stmt.name, "foo")
        self.assertEqual(stmt.args, [])

    def test_call_as_expression(self):
        let = parse_string("let x = foo(1);")[0]
        self.assertIsInstance(let.value, FunctionCall)
        self.assertEqual(let.value.name, "foo")
        self.assertEqual([a.value for a in let.value.args], ["1"])

    def test_call_argument_separators(self):
        """Arguments may be separated by '+' or ';'."""
        call = parse_string('foo(a + 1; "s" + bar());')[0]

        self.assertIsInstance(call, FunctionCall)
        self.assertEqual(len(call.args), 4)
        self.assertIsInstance(call.args[0], Identifier)
        self.assertIsInstance(call.args[1], NumberLiteral)
        self.assertIsInstance(call.args[2], StringLiteral)
        self.assertIsInstance(call.args[3], FunctionCall)

    def test_method_without_parens(self):
        method = parse_string("method m { let a = 1; back a; }")[0]

        self.assertIsInstance(method, MethodDef)
        self.assertEqual(method.name, "m")
        self.assertEqual(len(method.body), 2)
        self.assertIsInstance(method.body[1], Back)
        self.assertEqual(method.body[1].value, "a")

    def test_method_with_parens(self):
        method = parse_string("method m() { back 1; }")[0]
        self.assertIsInstance(method, MethodDef)
        self.assertEqual(method.body[0].value, "1")

    def test_fun_with_parens(self):
        fun = parse_string("fun main() { print(\"hi\"); }")[0]
        self.assertIsInstance(fun, FunDef)
        self.assertEqual(fun.name, "main")
        self.assertIsInstance(fun.body[0], Print)

    def test_empty_body(self):
        fun = parse_string("fun main() {}")[0]
        self.assertEqual(fun.body, [])

    def test_stray_semicolons_in_body(self):
        fun = parse_string("fun f { ;; let x = 1; ; }")[0]
        self.assertEqual(len(fun.body), 1)
        self.assertIsInstance(fun.body[0], Let)

    def test_optional_trailing_semicolon(self):
        statements = parse_string("method a { back 1; }; fun b { }")
        self.assertEqual([type(s) for s in statements], [MethodDef, FunDef])

    def test_nested_definitions(self):
        fun = parse_string("fun outer { method inner { back 2; } }")[0]
        self.assertIsInstance(fun.body[0], MethodDef)
        self.assertEqual(fun.children(), fun.body)

    def test_visitor_walks_tree(self):
        class NodeTypeCollector(ASTVisitor):
            def __init__(self):
                self.seen = []

            def visit(self, node):
                self.seen.append(node.node_type)
                for child in node.children():
                    child.accept(self)

        collector = NodeTypeCollector()
        for stmt in parse_string("method m { let a = f(1); back a; }"):
            stmt.accept(collector)

        self.assertEqual(collector.seen, [
            ASTNodeType.METHOD_DEF, ASTNodeType.LET, ASTNodeType.FUNCTION_CALL,
            ASTNodeType.NUMBER_LITERAL, ASTNodeType.BACK,
        ])

    def test_empty_program(self):
        self.assertEqual(parse_string(""), [])

    def test_locations(self):
        statements = parse_string("let a = 1;\nprint(a);")
        self.assertEqual(statements[0].location.line, 1)
        self.assertEqual(statements[1].location.line, 2)

    def test_parser_from_tokens(self):
        tokens = tokenize_string("back x;")
        statements = Parser(tokens).parse()
        self.assertIsInstance(statements[0], Back)
        self.assertEqual(statements[0].value, "x")

    def test_parse_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "main.ntf")
            with open(path, "w", encoding="utf-8") as f:
                f.write("fun main() {\n    let x = 1;\n}\n")

            statements = parse_file(path)

        self.assertEqual(len(statements), 1)
        self.assertEqual(statements[0].location.filename, path)


class TestParserErrors(unittest.TestCase):
    """Test cases for malformed programs."""

    def _parse_error(self, source: str) -> ParseError:
        with self.assertRaises(ParseError) as ctx:
            parse_string(source)
        return ctx.exception

    def test_back_with_string(self):
        error = self._parse_error('method m { back "s"; }')
        self.assertEqual(error.code, "P005")
        self.assertEqual(error.message, "Invalid expression in return statement")

    def test_back_with_call(self):
        error = self._parse_error("method m { back f(); }")
        self.assertEqual(error.code, "P005")

    def test_missing_semicolon(self):
        error = self._parse_error("let x = 5 let y = 6;")
        self.assertEqual(error.code, "P001")
        self.assertEqual(error.message, "Expected SEMICOLON, found LET")

    def test_end_of_input(self):
        error = self._parse_error("let x = 5")
        self.assertEqual(error.code, "P010")
        self.assertEqual(error.message, "Unexpected end of input, expected SEMICOLON")

    def test_end_of_input_in_expression(self):
        error = self._parse_error("let x =")
        self.assertEqual(error.code, "P010")
        self.assertIn("expression", error.message)

    def test_unclosed_body(self):
        error = self._parse_error("fun main() { let x = 1;")
        self.assertEqual(error.code, "P010")
        self.assertIn("RIGHT_BRACE", error.message)

    def test_unexpected_token_in_expression(self):
        error = self._parse_error("let x = ;")
        self.assertEqual(error.code, "P001")
        self.assertEqual(error.message, "Unexpected token SEMICOLON in expression")

    def test_missing_argument_separator(self):
        error = self._parse_error("foo(a b);")
        self.assertEqual(error.message, "Expected PLUS, found IDENTIFIER")

    def test_statement_cannot_start_with_number(self):
        error = self._parse_error("5;")
        self.assertEqual(error.code, "P001")
        self.assertEqual(error.message, "Expected statement, found NUMBER")

    def test_identifier_statement_without_call(self):
        error = self._parse_error("x;")
        self.assertEqual(error.message, "Expected LEFT_PAREN, found SEMICOLON")

    def test_error_carries_token_location(self):
        error = self._parse_error("let x = 1;\nlet = 2;")
        self.assertEqual(error.location.line, 2)
        self.assertEqual(error.token.type.name, "ASSIGN")


if __name__ == '__main__':
    unittest.main()
