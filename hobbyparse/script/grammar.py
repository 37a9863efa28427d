# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
The HobbyScript grammar.
'''

from typing import Any, Iterator

from ..bnf import Grammar, LEFT, Operators, Parser, RIGHT, rule
from ..lex import Lexer
from ..source import Source
from ..tokens import TokenSource
from .ast import mk_node, NullStmt
from .lex import lexer as default_lexer


# Lower numbers bind tighter.
operator_entries = [
  ('star', 3, LEFT),
  ('slash', 3, LEFT),
  ('percent', 3, LEFT),
  ('plus', 4, LEFT),
  ('dash', 4, LEFT),
  ('lt', 6, LEFT),
  ('gt', 6, LEFT),
  ('le', 6, LEFT),
  ('ge', 6, LEFT),
  ('eq2', 7, LEFT),
  ('exclaim_eq', 7, LEFT),
  ('amp2', 11, LEFT),
  ('pipe2', 12, LEFT),
  ('eq', 14, RIGHT),
]


class ScriptParser:
  '''
  A parser for HobbyScript programs, built from a keyword vocabulary supplied by `lexer`.
  Every keyword spelling of the vocabulary is reserved.

  Each call to `parse` consumes one program unit:
  a statement, or a NullStmt for a lone statement separator (`;` or a newline).
  Statements within a block are separated by the same separators; a trailing separator is optional.
  '''

  def __init__(self, lexer:Lexer=default_lexer) -> None:
    self.grammar = Grammar(reserved=set(lexer.keywords), operators=Operators(operator_entries), factory=mk_node)
    operators = self.grammar.operators

    expr0 = rule()
    statement0 = rule()

    number = rule().number('NumberLiteral')
    name = rule().identifier('Name')
    string = rule().string('StringLiteral')
    bool_ = rule().bool_('BoolLiteral')
    null = rule().null('NullLiteral')

    primary = rule('PrimaryExpr').or_(
      rule().sep('paren_o').ast(expr0).sep('paren_c'),
      number, name, string, bool_, null)

    factor = rule().or_(
      rule('NegativeExpr').sep('dash').ast(primary),
      rule('NotExpr').sep('exclaim').ast(primary),
      primary)

    expr = expr0.expression('BinaryExpr', factor, operators)

    import_ = rule('Import').sep('kw_import').ast(string)

    simple = rule().or_(expr, import_)

    block = (rule('BlockStmnt')
      .sep('brace_o')
      .option(statement0)
      .repeat(rule().sep('semi', 'newline').option(statement0))
      .sep('brace_c'))

    if_ = (rule('IfStmnt')
      .sep('kw_if').sep('paren_o').ast(expr).sep('paren_c').ast(block)
      .option(rule().sep('kw_else').ast(block)))

    while_ = rule('WhileStmt').sep('kw_while').sep('paren_o').ast(expr).sep('paren_c').ast(block)

    option = rule('OptionStmt').option(expr).repeat(rule().sep('comma').option(expr))

    for_ = (rule('ForStmt')
      .sep('kw_for').sep('paren_o')
      .or_(option, rule('NullStmt')).sep('semi')
      .or_(expr, rule('NullStmt')).sep('semi')
      .or_(option, rule('NullStmt')).sep('paren_c')
      .ast(block))

    break_ = rule('BreakStmt').sep('kw_break')

    statement = statement0.or_(if_, while_, for_, break_, simple)

    self.program = rule().or_(statement, rule('NullStmt').sep('semi', 'newline'))
    self.expr = expr
    self.block = block
    self.statement = statement
    self.parser = Parser(self.grammar, self.program, lexer=lexer)


  def token_source(self, source:Source, dbg_tokens:bool=False) -> TokenSource:
    return self.parser.token_source(source, dbg_tokens=dbg_tokens)


  def parse(self, tokens:TokenSource) -> Any:
    'Parse one program unit.'
    return self.parser.parse(tokens)


  def parse_all(self, source:Source|TokenSource, dbg_tokens:bool=False) -> Iterator[Any]:
    'Yield every program unit of `source`, including the NullStmt units produced by separators.'
    return self.parser.parse_all(source, dbg_tokens=dbg_tokens)


  def statements(self, source:Source|TokenSource, dbg_tokens:bool=False) -> Iterator[Any]:
    'Yield the statements of `source`, omitting empty statements.'
    for node in self.parse_all(source, dbg_tokens=dbg_tokens):
      if not isinstance(node, NullStmt): yield node
