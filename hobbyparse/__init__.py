# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
A grammar combinator engine with backtracking and precedence climbing, and the HobbyScript grammar built with it.
'''

from .bnf import (Assoc, DefinitionError, evaluate, Failure, Grammar, LEFT, Node, Operators, parse, ParseError, Parser,
  RIGHT, Rule, rule, RuleKind, skeleton)
from .lex import Lexer
from .source import Source, Token
from .tokens import TokenSource
