# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

import pytest

from hobbyparse.lex import Lexer
from hobbyparse.script.lex import lexer, zh_lexer
from hobbyparse.source import Source


def lex_pairs(lexer:Lexer, text:str) -> list[tuple[str,str]]:
  return [(t.kind, t.text) for t in lexer.lex(Source('test', text))]


def test_keywords_and_punctuation() -> None:
  assert lex_pairs(lexer, 'if (x) { y = 1.5; }') == [
    ('kw_if', 'if'), ('paren_o', '('), ('name', 'x'), ('paren_c', ')'),
    ('brace_o', '{'), ('name', 'y'), ('eq', '='), ('number', '1.5'), ('semi', ';'), ('brace_c', '}')]


def test_keyword_prefix_is_a_name() -> None:
  assert lex_pairs(lexer, 'iffy for_ null') == [('name', 'iffy'), ('name', 'for_'), ('null', 'null')]


def test_multi_character_operators() -> None:
  assert [k for k, _ in lex_pairs(lexer, 'a==b!=c<=d>=e&&f||!g')] == [
    'name', 'eq2', 'name', 'exclaim_eq', 'name', 'le', 'name', 'ge', 'name', 'amp2', 'name', 'pipe2', 'exclaim', 'name']


def test_newlines_and_comments() -> None:
  assert lex_pairs(lexer, 'a # note\n\tb\n') == [('name', 'a'), ('newline', '\n'), ('name', 'b'), ('newline', '\n')]


def test_string() -> None:
  assert lex_pairs(lexer, r'import "a\"b"') == [('kw_import', 'import'), ('string', r'"a\"b"')]


def test_invalid_text() -> None:
  assert lex_pairs(lexer, 'a $@ b') == [('name', 'a'), ('invalid', '$@'), ('name', 'b')]


def test_end_of_text() -> None:
  tokens = list(lexer.lex(Source('test', 'a'), eot=True))
  assert [t.kind for t in tokens] == ['name', 'end_of_text']
  assert tokens[-1].pos == 1


def test_explicit_drop() -> None:
  assert lex_pairs(lexer, 'a b') == [('name', 'a'), ('name', 'b')]
  assert [t.kind for t in lexer.lex(Source('test', 'a b'), drop=())] == ['name', 'spaces', 'name']


def test_chinese_vocabulary() -> None:
  assert lex_pairs(zh_lexer, '如果 (真 与 x) { 跳出语句 }') == [
    ('kw_if', '如果'), ('paren_o', '('), ('true', '真'), ('amp2', '与'), ('name', 'x'), ('paren_c', ')'),
    ('brace_o', '{'), ('kw_break', '跳出语句'), ('brace_c', '}')]
  assert [k for k, _ in lex_pairs(zh_lexer, '计次循环 循环 if')] == ['kw_for', 'kw_while', 'name']


def test_kinds() -> None:
  assert {'kw_if', 'kw_import', 'true', 'name', 'newline', 'invalid', 'end_of_text'} <= lexer.kinds


def test_definition_errors() -> None:
  with pytest.raises(Lexer.DefinitionError): Lexer(patterns={})
  with pytest.raises(Lexer.DefinitionError): Lexer(patterns={'invalid': 'x'})
  with pytest.raises(Lexer.DefinitionError): Lexer(patterns={'bad name': 'x'})
  with pytest.raises(Lexer.DefinitionError): Lexer(patterns={'paren': '('})
  with pytest.raises(Lexer.DefinitionError): Lexer(patterns={'x': 'x'}, keywords={'if': 'kw_if'})
  with pytest.raises(Lexer.DefinitionError): Lexer(patterns={'x': 'x'}, drop=['spaces'])
  with pytest.raises(Lexer.DefinitionError): Lexer(flags='q', patterns={'x': 'x'})


def test_zero_length_match() -> None:
  star = Lexer(patterns={'xs': 'x*'})
  with pytest.raises(Lexer.DefinitionError): list(star.lex(Source('test', 'y')))


def test_chinese_without_spaces() -> None:
  assert lex_pairs(zh_lexer, '如果(真与x){跳出语句}') == [
    ('kw_if', '如果'), ('paren_o', '('), ('true', '真'), ('amp2', '与'), ('name', 'x'), ('paren_c', ')'),
    ('brace_o', '{'), ('kw_break', '跳出语句'), ('brace_c', '}')]
  assert lex_pairs(zh_lexer, 'a与b或c&&d') == [
    ('name', 'a'), ('amp2', '与'), ('name', 'b'), ('pipe2', '或'), ('name', 'c'), ('amp2', '&&'), ('name', 'd')]
  assert lex_pairs(zh_lexer, '变量1与值') == [('name', '变量1'), ('amp2', '与'), ('name', '值')]
  assert [k for k, _ in lex_pairs(zh_lexer, '计次循环(;;){}')][:2] == ['kw_for', 'paren_o']
