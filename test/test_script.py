# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from typing import Any

import pytest

from hobbyparse.bnf import parse, ParseError, skeleton
from hobbyparse.script.ast import (BinaryExpr, BlockStmnt, ForStmt, IfStmnt, Import, Name, NullStmt, OptionStmt,
  WhileStmt)
from hobbyparse.script.grammar import ScriptParser
from hobbyparse.script.lex import zh_lexer
from hobbyparse.source import Source, Token
from hobbyparse.tokens import TokenSource


parser = ScriptParser()
zh_parser = ScriptParser(zh_lexer)


def stmt(text:str, p:ScriptParser=parser) -> Any:
  nodes = list(p.statements(Source('test', text)))
  assert len(nodes) == 1, nodes
  return nodes[0]


def skel(text:str, p:ScriptParser=parser) -> Any:
  return skeleton(stmt(text, p))


def parse_block(text:str) -> BlockStmnt:
  return parse(parser.block, parser.token_source(Source('test', text)), parser.grammar)


def test_precedence() -> None:
  assert skel('a + b * c') == ('+', 'a', ('*', 'b', 'c'))
  assert skel('a * b + c') == ('+', ('*', 'a', 'b'), 'c')
  assert skel('a % b / c - d') == ('-', ('/', ('%', 'a', 'b'), 'c'), 'd')
  assert skel('x < 1 && y >= 2 || z') == ('||', ('&&', ('<', 'x', 1), ('>=', 'y', 2)), 'z')
  assert skel('a == b != c') == ('!=', ('==', 'a', 'b'), 'c')


def test_assignment_is_right_associative() -> None:
  assert skel('a = b = c + 1') == ('=', 'a', ('=', 'b', ('+', 'c', 1)))


def test_parentheses() -> None:
  assert skel('(a + b) * c') == ('*', ('+', 'a', 'b'), 'c')
  assert skel('((a))') == 'a'


def test_prefix_operators() -> None:
  assert skel('-a * b') == ('*', ('-', 'a'), 'b')
  assert skel('a - -b') == ('-', 'a', ('-', 'b'))
  assert skel('!done && -(x)') == ('&&', ('!', 'done'), ('-', 'x'))


def test_literals() -> None:
  assert skel('42') == 42
  assert skel('3.5') == 3.5
  assert skel('true') is True
  assert skel('false') is False
  assert skel('null') is None
  assert skel('"hi\\n"') == '"hi\n"'
  assert isinstance(stmt('name'), Name)


def test_binary_accessors() -> None:
  node = stmt('total = total + 1')
  assert isinstance(node, BinaryExpr)
  assert node.operator == '='
  assert skeleton(node.left) == 'total'
  assert skeleton(node.right) == ('+', 'total', 1)
  assert str(node) == '(total = (total + 1))'


def test_import() -> None:
  node = stmt('import "lib/math"')
  assert isinstance(node, Import)
  assert node.path == 'lib/math'
  assert str(node) == '(import "lib/math")'


def test_if_else() -> None:
  node = stmt('if (x) { y = 1 } else { y = 2 }')
  assert isinstance(node, IfStmnt)
  assert skeleton(node) == ('IfStmnt', 'x', ('BlockStmnt', ('=', 'y', 1)), ('BlockStmnt', ('=', 'y', 2)))
  assert node.else_block is not None
  no_else = stmt('if (a < b) { }')
  assert no_else.else_block is None
  assert skeleton(no_else.condition) == ('<', 'a', 'b')


def test_while_and_break() -> None:
  node = stmt('while (i < 10) { i = i + 1; }')
  assert isinstance(node, WhileStmt)
  assert skeleton(node.body) == ('BlockStmnt', ('=', 'i', ('+', 'i', 1)))
  assert skel('while (true) { break }') == ('WhileStmt', True, ('BlockStmnt', ('BreakStmt',)))


def test_block_children_ignore_trailing_separator() -> None:
  with_trailing = parse_block('{ a ; b ; }')
  without_trailing = parse_block('{ a ; b }')
  assert isinstance(with_trailing, BlockStmnt)
  assert [skeleton(s) for s in with_trailing.statements] == ['a', 'b']
  assert with_trailing == without_trailing


def test_block_with_newlines() -> None:
  block = parse_block('{\n  a\n  b;\n\n}')
  assert [skeleton(s) for s in block.statements] == ['a', 'b']
  assert parse_block('{ }').statements == []
  assert parse_block('{\n}').statements == []


def test_nested_blocks() -> None:
  node = stmt('while (a) {\n  if (b) { break }\n  c = 1\n}')
  assert skeleton(node) == ('WhileStmt', 'a', ('BlockStmnt',
    ('IfStmnt', 'b', ('BlockStmnt', ('BreakStmt',))),
    ('=', 'c', 1)))


def test_for_with_empty_clauses() -> None:
  node = stmt('for (;;) { }')
  assert isinstance(node, ForStmt)
  assert isinstance(node.init, OptionStmt) and node.init.expressions == []
  assert isinstance(node.condition, NullStmt)
  assert isinstance(node.step, OptionStmt) and node.step.expressions == []
  assert node.body.statements == []


def test_for() -> None:
  assert skel('for (i = 0, j = 1; i < j; i = i + 1) { x }') == ('ForStmt',
    ('OptionStmt', ('=', 'i', 0), ('=', 'j', 1)),
    ('<', 'i', 'j'),
    ('OptionStmt', ('=', 'i', ('+', 'i', 1))),
    ('BlockStmnt', 'x'))


def test_program_units() -> None:
  units = list(parser.parse_all(Source('test', 'a = 1;\nb\n')))
  assert [type(n).__name__ for n in units] == ['BinaryExpr', 'NullStmt', 'NullStmt', 'Name', 'NullStmt']
  assert [skeleton(n) for n in parser.statements(Source('test', 'a = 1;\nb\n'))] == [('=', 'a', 1), 'b']


def test_parse_consumes_one_unit() -> None:
  tokens = parser.token_source(Source('test', 'a; b'))
  assert skeleton(parser.parse(tokens)) == 'a'
  assert tokens.peek().kind == 'semi'
  assert isinstance(parser.parse(tokens), NullStmt)
  assert skeleton(parser.parse(tokens)) == 'b'
  assert tokens.at_end


def test_reserved_word_is_not_a_name() -> None:
  with pytest.raises(ParseError) as info:
    parser.parse(TokenSource([Token('name', 'while')]))
  assert info.value.failure is not None
  assert 'name' in info.value.failure.expected


def test_parse_error_diagnostic() -> None:
  with pytest.raises(ParseError) as info:
    list(parser.parse_all(Source('test.hobby', 'a = 1\nb = (1 + ;\n')))
  e = info.value
  assert e.failure is not None
  assert e.failure.token.text == 'b'
  assert {'semi', 'newline', 'kw_if', 'name'} <= e.failure.expected
  assert e.diagnostic().startswith('test.hobby:2:1-2: parse error: expected one of: ')


def test_invalid_token() -> None:
  with pytest.raises(ParseError) as info:
    list(parser.parse_all(Source('test', 'a $ b')))
  assert info.value.failure is not None
  assert info.value.failure.token.kind == 'invalid'


def test_chinese_vocabulary() -> None:
  node = stmt('如果 (真 与 x) { 跳出语句 } 那么 { y = 空 }', zh_parser)
  assert skeleton(node) == ('IfStmnt', ('与', True, 'x'), ('BlockStmnt', ('BreakStmt',)), ('BlockStmnt', ('=', 'y', None)))
  assert isinstance(stmt('计次循环 (;;) { }', zh_parser), ForStmt)
  assert skel('if = 1', zh_parser) == ('=', 'if', 1)


def test_chinese_without_spaces() -> None:
  assert skel('如果 (真与x) {跳出语句}', zh_parser) == ('IfStmnt', ('与', True, 'x'), ('BlockStmnt', ('BreakStmt',)))
  assert skel('循环(甲或乙){甲=空}', zh_parser) == ('WhileStmt', ('或', '甲', '乙'), ('BlockStmnt', ('=', '甲', None)))


def test_grammars_are_independent() -> None:
  assert parser.grammar is not zh_parser.grammar
  assert parser.grammar.operators.is_frozen
  assert 'if' in parser.grammar.reserved
  assert 'if' not in zh_parser.grammar.reserved
  assert '如果' in zh_parser.grammar.reserved
