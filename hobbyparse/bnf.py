# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
A grammar combinator engine based on backtracking recursive descent and precedence climbing.

A grammar is a graph of Rule objects declared with fluent builder calls, each of which returns the rule itself:

  expr = rule()
  primary = rule('PrimaryExpr').or_(rule().sep('paren_o').ast(expr).sep('paren_c'), rule().number('Number'))
  expr.expression('BinaryExpr', primary, operators)

`rule()` returns a placeholder that can be referenced before its body is declared;
this is how mutually recursive rules are written.

Every Rule has a `kind` that selects how the evaluator treats it:
* terminal: one token whose kind is in a set; optionally converted to a single-value leaf node.
* sequence: components evaluated in order; the result is a tagged node, or else the single captured value.
* alternation: the value of the first alternative that matches, in declared order.
* optional: the value of the sub-rule, or None; never fails.
* repetition: a list of the values of consecutive matches of the sub-rule; never fails.
* capture: the value of the sub-rule, captured by the enclosing sequence.
* expression: a chain of binary operators over an operand rule, parsed by precedence climbing.

Evaluation returns either a value or a Failure; failures are ordinary return values, not exceptions.
Every attempt that can fail saves the token position first and restores it on failure,
so a failed branch never leaks partial consumption.
Only a Failure that escapes the root rule is raised, as a ParseError.

Evaluation is recursive, so the depth of nesting that can be parsed is bounded by the Python recursion limit;
pathologically nested input raises RecursionError.
'''

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Container, Iterable, Iterator, NamedTuple, NoReturn

from .io import errL
from .lex import Lexer, valid_name_re
from .source import Source, Syntax, Token
from .tokens import TokenSource


TokenKind = str
NodeTag = str
NodeFactory = Callable[[NodeTag,list[Any]],Any]
LiteralFn = Callable[[Token],Any]


class DefinitionError(Exception):
  'Raised for structural misuse of rules, operator tables, or grammar configuration.'

  def __init__(self, *msgs:Any):
    super().__init__(''.join(str(msg) for msg in msgs))



@dataclass(frozen=True)
class Failure:
  '''
  The result of a failed match.
  `pos` is the token index at which matching failed, `token` is the token found there,
  and `expected` is the set of token kinds that would have allowed matching to continue.
  '''
  pos:int
  token:Token
  expected:frozenset[TokenKind]

  @property
  def msg(self) -> str:
    exp = ', '.join(sorted(self.expected))
    if len(self.expected) > 1: exp = f'one of: {exp}'
    received = self.token.kind
    if self.token.text and self.token.text != received: received += f' {self.token.text!r}'
    return f'expected {exp}; received {received}.'



class ParseError(Exception):
  error_prefix = 'parse'

  def __init__(self, source:Source|None, syntax:Syntax, msg:str, *, failure:Failure|None=None):
    self.source = source
    self.syntax = syntax
    self.msg = msg
    self.failure = failure
    super().__init__(msg)

  def diagnostic(self) -> str:
    msg = f'{self.error_prefix} error: {self.msg}'
    if self.source is None: return msg
    return self.source.diagnostic((self.syntax, msg))

  def fail(self) -> NoReturn:
    exit(self.diagnostic())



class Assoc(Enum):
  LEFT = 'left'
  RIGHT = 'right'

LEFT = Assoc.LEFT
RIGHT = Assoc.RIGHT


class OpEntry(NamedTuple):
  prec:int
  assoc:Assoc


class Operators:
  '''
  An operator table mapping operator token kinds to precedence and associativity.
  Lower precedence numbers bind tighter, e.g. `star` at 3 binds tighter than `plus` at 4.
  A table is frozen once a Parser compiles a grammar that uses it.
  '''

  def __init__(self, entries:Iterable[tuple[TokenKind,int,Assoc]]=()):
    self._entries:dict[TokenKind,OpEntry] = {}
    self.is_frozen = False
    for kind, prec, assoc in entries:
      self.add(kind, prec, assoc)


  def __repr__(self) -> str:
    entries = ', '.join(f'{k}:{e.prec}{"R" if e.assoc is RIGHT else "L"}' for k, e in self._entries.items())
    return f'{type(self).__name__}({entries})'


  def __contains__(self, kind:TokenKind) -> bool: return kind in self._entries

  def __iter__(self) -> Iterator[TokenKind]: return iter(self._entries)

  def __len__(self) -> int: return len(self._entries)


  def add(self, kind:TokenKind, prec:int, assoc:Assoc=LEFT) -> 'Operators':
    if self.is_frozen: raise DefinitionError(f'operator table is frozen; cannot add operator: {kind!r}')
    validate_kind(kind)
    if not isinstance(prec, int) or isinstance(prec, bool):
      raise DefinitionError(f'operator precedence must be an int: {kind!r}: {prec!r}')
    if not isinstance(assoc, Assoc): raise DefinitionError(f'operator associativity must be LEFT or RIGHT: {assoc!r}')
    if kind in self._entries: raise DefinitionError(f'duplicate operator: {kind!r}')
    self._entries[kind] = OpEntry(prec, assoc)
    return self


  def get(self, kind:TokenKind) -> OpEntry|None:
    return self._entries.get(kind)


  def freeze(self) -> None:
    self.is_frozen = True



@dataclass(frozen=True)
class Node:
  'A generic syntax tree node: the tag of the rule that produced it and its captured child values.'
  tag:NodeTag
  children:tuple[Any,...]

  def __init__(self, tag:NodeTag, children:Iterable[Any]=()):
    object.__setattr__(self, 'tag', tag)
    object.__setattr__(self, 'children', tuple(children))

  def __repr__(self) -> str:
    return f'Node({self.tag!r}, {list(self.children)!r})'

  def skeletonize(self, skeletonize_sub:Callable[[Any],Any]) -> Any:
    return (self.tag, *(skeletonize_sub(c) for c in self.children))


def skeleton(node:Any) -> Any:
  '''
  Produce a simplified skeleton of a syntax tree, which is convenient for writing test expectations.
  A node that implements `skeletonize(skeletonize_sub)` produces its own skeleton,
  using `skeletonize_sub` to simplify its children.
  Tokens are replaced by their text, and lists and tuples are simplified element by element.
  '''
  def _skeleton(node:Any) -> Any:
    try: skeletonize = node.skeletonize
    except AttributeError: pass
    else: return skeletonize(_skeleton)
    match node:
      case Token(): return node.text
      case list(): return [_skeleton(el) for el in node]
      case tuple(): return tuple(_skeleton(el) for el in node)
      case _: return node

  return _skeleton(node)



@dataclass
class Grammar:
  '''
  The configuration shared by the rules of one grammar.
  `reserved` is the set of words that `identifier` terminals reject unless they are given their own set;
  `operators` is the table that the grammar passes to the `expression` builder.
  `factory` constructs nodes from a tag and the ordered list of captured child values;
  the engine never looks inside the nodes it returns.
  `token_kinds`, if provided, is the complete set of legal token kinds,
  against which a Parser validates every terminal and operator.
  '''
  reserved:set[str]|frozenset[str] = field(default_factory=set)
  operators:Operators = field(default_factory=Operators)
  factory:NodeFactory = Node
  eot_kind:TokenKind = 'end_of_text'
  token_kinds:frozenset[TokenKind]|None = None



class RuleKind(Enum):
  terminal, sequence, alternation, optional, repetition, capture, expression = range(7)


class _GrammarReserved:
  def __repr__(self) -> str: return 'GRAMMAR_RESERVED'

GRAMMAR_RESERVED:Any = _GrammarReserved()
#^ The default for `identifier`: the terminal rejects the reserved words of the Grammar it is evaluated with.


class Rule:
  '''
  A node in the grammar graph; see the module docstring for the behavior of each kind.
  Only sequence rules, as returned by `rule()`, accept builder calls.
  Each builder call appends one component rule and returns the sequence itself.
  Once a Parser has compiled a grammar that reaches the rule, the rule is frozen.
  '''

  def __init__(self, kind:RuleKind, tag:NodeTag|None=None, children:Iterable['Rule']=(), *,
   kinds:Iterable[TokenKind]=(), literal:LiteralFn|None=None, reserved:Container[str]|None=None,
   operators:Operators|None=None) -> None:
    self.kind = kind
    self.tag = tag
    self.children:list[Rule] = list(children)
    self.kinds = frozenset(kinds) # Terminal matcher set.
    self.literal = literal # Terminal value conversion; None for pure delimiters.
    self.reserved = reserved # Texts rejected by identifier terminals.
    self.operators = operators
    self.is_frozen = False


  def __repr__(self) -> str:
    parts = [self.kind.name]
    if self.tag is not None: parts.append(f'tag={self.tag!r}')
    if self.kinds: parts.append(f'kinds={sorted(self.kinds)}')
    if self.operators is not None: parts.append(f'operators={self.operators!r}')
    if self.children: parts.append(f'children={len(self.children)}')
    return f'Rule({", ".join(parts)})'


  @property
  def captures(self) -> bool:
    'Whether the value of this rule is captured when it is a component of a sequence.'
    return self.kind is not RuleKind.terminal or self.literal is not None


  @property
  def capture_count(self) -> int:
    return sum(1 for c in self.children if c.captures)


  def _append(self, component:'Rule') -> 'Rule':
    if self.is_frozen:
      raise DefinitionError(f'{self!r} is frozen; rules cannot be extended after a Parser compiles them.')
    if self.kind is not RuleKind.sequence:
      raise DefinitionError(f'builder methods require a sequence rule; received {self!r}.')
    if component.captures and self.tag is None and self.capture_count:
      raise DefinitionError(f'{self!r} captures multiple values but has no node tag.')
    self.children.append(component)
    return self


  def sep(self, *kinds:TokenKind) -> 'Rule':
    'Require one token of any of `kinds`; the token is consumed but not captured.'
    if not kinds: raise DefinitionError('`sep` requires at least one token kind.')
    return self._append(Rule(RuleKind.terminal, kinds=[validate_kind(k) for k in kinds]))


  def ast(self, sub:'Rule') -> 'Rule':
    'Require `sub` to match and capture its value.'
    return self._append(Rule(RuleKind.capture, children=[validate_rule(sub)]))


  def option(self, sub:'Rule') -> 'Rule':
    'Capture the value of `sub` if it matches, or else None.'
    return self._append(Rule(RuleKind.optional, children=[validate_rule(sub)]))


  def repeat(self, sub:'Rule') -> 'Rule':
    'Capture a list of the values of zero or more consecutive matches of `sub`.'
    return self._append(Rule(RuleKind.repetition, children=[validate_rule(sub)]))


  def or_(self, *alternatives:'Rule') -> 'Rule':
    'Capture the value of the first of `alternatives` that matches.'
    if not alternatives: raise DefinitionError('`or_` requires at least one alternative.')
    return self._append(Rule(RuleKind.alternation, children=[validate_rule(a) for a in alternatives]))


  def number(self, tag:NodeTag, kind:TokenKind='number') -> 'Rule':
    return self._terminal(tag, [kind], number_value)


  def identifier(self, tag:NodeTag, reserved:Container[str]=GRAMMAR_RESERVED, kind:TokenKind='name') -> 'Rule':
    'Match a name token whose text is not in `reserved`, which defaults to the reserved words of the grammar.'
    return self._terminal(tag, [kind], text_value, reserved=reserved)


  def string(self, tag:NodeTag, kind:TokenKind='string') -> 'Rule':
    return self._terminal(tag, [kind], string_value)


  def bool_(self, tag:NodeTag, true_kind:TokenKind='true', false_kind:TokenKind='false') -> 'Rule':
    def bool_value(token:Token) -> bool: return token.kind == true_kind
    return self._terminal(tag, [true_kind, false_kind], bool_value)


  def null(self, tag:NodeTag, kind:TokenKind='null') -> 'Rule':
    return self._terminal(tag, [kind], null_value)


  def _terminal(self, tag:NodeTag, kinds:list[TokenKind], literal:LiteralFn, reserved:Container[str]|None=None
   ) -> 'Rule':
    return self._append(Rule(RuleKind.terminal, validate_tag(tag), kinds=[validate_kind(k) for k in kinds],
      literal=literal, reserved=reserved))


  def expression(self, tag:NodeTag, operand:'Rule', operators:Operators) -> 'Rule':
    '''
    Capture a binary operator expression over `operand`, parsed by precedence climbing with `operators`.
    Each binary node is constructed as `factory(tag, [left, operator_text, right])`.
    '''
    if not isinstance(operators, Operators): raise DefinitionError(f'expected Operators; received {operators!r}')
    return self._append(Rule(RuleKind.expression, validate_tag(tag), children=[validate_rule(operand)],
      operators=operators))



def rule(tag:NodeTag|None=None) -> Rule:
  '''
  Create a sequence rule, optionally bound to a node tag.
  An untagged rule with no components is a placeholder; it must be filled in before a Parser compiles it.
  '''
  return Rule(RuleKind.sequence, None if tag is None else validate_tag(tag))


def validate_kind(kind:Any) -> TokenKind:
  if not isinstance(kind, str) or not valid_name_re.fullmatch(kind):
    raise DefinitionError(f'invalid token kind: {kind!r}')
  return kind


def validate_tag(tag:Any) -> NodeTag:
  if not isinstance(tag, str) or not valid_name_re.fullmatch(tag):
    raise DefinitionError(f'invalid node tag: {tag!r}')
  return tag


def validate_rule(sub:Any) -> Rule:
  if not isinstance(sub, Rule): raise DefinitionError(f'expected a Rule; received {sub!r}')
  return sub


# Literal conversions for terminal rules.

def text_value(token:Token) -> str: return token.text

def null_value(token:Token) -> None: return None


def number_value(token:Token) -> int|float:
  text = token.text
  if any(c in text for c in '.eE'): return float(text)
  return int(text)


_escapes = {'n': '\n', 't': '\t', 'r': '\r', '0': '\0'}
_escape_re = re.compile(r'\\(.)', flags=re.DOTALL)

def string_value(token:Token) -> str:
  'Strip the quotes from a string literal and decode its backslash escapes.'
  text = token.text
  if len(text) >= 2 and text[0] == text[-1] and text[0] in '"\'': text = text[1:-1]
  return _escape_re.sub(lambda m: _escapes.get(m[1], m[1]), text)



def evaluate(rule:Rule, tokens:TokenSource, grammar:Grammar) -> Any:
  '''
  Evaluate `rule` at the current position of `tokens`.
  Returns the resulting value, or a Failure; after a Failure the position of `tokens` is unchanged.
  '''
  match rule.kind:

    case RuleKind.terminal:
      token = tokens.peek()
      reserved = grammar.reserved if rule.reserved is GRAMMAR_RESERVED else rule.reserved
      if token.kind not in rule.kinds or (reserved is not None and token.text in reserved):
        return Failure(tokens.mark(), token, rule.kinds)
      tokens.next()
      if rule.literal is None: return None
      return grammar.factory(rule.tag, [rule.literal(token)]) # type: ignore[arg-type]

    case RuleKind.sequence:
      start = tokens.mark()
      vals:list[Any] = []
      for component in rule.children:
        res = evaluate(component, tokens, grammar)
        if isinstance(res, Failure):
          tokens.reset(start)
          return res
        if component.captures: vals.append(res)
      if rule.tag is not None: return grammar.factory(rule.tag, vals)
      return vals[0] if vals else None

    case RuleKind.alternation:
      start = tokens.mark()
      expected:set[TokenKind] = set()
      failure:Failure|None = None
      for alt in rule.children:
        res = evaluate(alt, tokens, grammar)
        if not isinstance(res, Failure): return res
        tokens.reset(start)
        expected.update(res.expected)
        failure = res
      assert failure is not None
      return Failure(failure.pos, failure.token, frozenset(expected))
      #^ The last alternative determines the position; the expected kinds are the union over all alternatives.

    case RuleKind.optional:
      start = tokens.mark()
      res = evaluate(rule.children[0], tokens, grammar)
      if isinstance(res, Failure):
        tokens.reset(start)
        return None
      return res

    case RuleKind.repetition:
      sub = rule.children[0]
      els:list[Any] = []
      while True:
        start = tokens.mark()
        res = evaluate(sub, tokens, grammar)
        if isinstance(res, Failure):
          tokens.reset(start)
          return els
        els.append(res)
        if tokens.mark() == start: return els # The match consumed nothing, so repeating it would never terminate.

    case RuleKind.capture:
      return evaluate(rule.children[0], tokens, grammar)

    case RuleKind.expression:
      start = tokens.mark()
      res = _climb(rule, tokens, grammar, limit=_loosest)
      if isinstance(res, Failure): tokens.reset(start)
      return res

  raise ValueError(f'invalid rule kind: {rule!r}')


_loosest = float('inf')


def _climb(rule:Rule, tokens:TokenSource, grammar:Grammar, limit:float) -> Any:
  'Parse an operand, then fold in every following operator whose precedence is at or below `limit`.'
  operators = rule.operators
  assert operators is not None
  left = evaluate(rule.children[0], tokens, grammar)
  if isinstance(left, Failure): return left
  while True:
    op_token = tokens.peek()
    entry = operators.get(op_token.kind)
    if entry is None or entry.prec > limit: return left # Not an operator, or it binds more loosely than this level.
    tokens.next()
    right = _climb(rule, tokens, grammar, limit=(entry.prec - 1 if entry.assoc is LEFT else entry.prec))
    if isinstance(right, Failure): return right # A missing right operand is a hard failure.
    left = grammar.factory(rule.tag, [left, op_token.text, right]) # type: ignore[arg-type]



def parse(rule:Rule, tokens:TokenSource, grammar:Grammar) -> Any:
  'Parse one unit of `rule` from `tokens`, raising ParseError if it does not match.'
  res = evaluate(rule, tokens, grammar)
  if isinstance(res, Failure):
    raise ParseError(tokens.source, res.token, res.msg, failure=res)
  return res



class Parser:
  '''
  A compiled grammar: a Grammar configuration, a root rule, and optionally the Lexer that produces its tokens.

  Construction visits every rule reachable from `root` and validates it;
  the token kinds of terminals and operators are checked against `grammar.token_kinds`, or else the lexer's kinds.
  The rules, the operator tables, and the reserved word sets are then frozen,
  so that the parser can be reused for any number of token sources.
  '''

  def __init__(self, grammar:Grammar, root:Rule, *, lexer:Lexer|None=None) -> None:
    self.grammar = grammar
    self.root = validate_rule(root)
    self.lexer = lexer
    self.token_kinds = grammar.token_kinds if grammar.token_kinds is not None else (lexer.kinds if lexer else None)
    if self.token_kinds is not None and grammar.eot_kind not in self.token_kinds:
      raise DefinitionError(f'end of text kind is not a token kind: {grammar.eot_kind!r}')

    self.rules = reachable_rules(root)
    for r in self.rules:
      self._validate(r)

    # Freeze.
    grammar.operators.freeze()
    grammar.reserved = frozenset(grammar.reserved)
    for r in self.rules:
      r.is_frozen = True
      if r.reserved is not None and r.reserved is not GRAMMAR_RESERVED:
        r.reserved = frozenset(r.reserved) # type: ignore[arg-type]
      if r.operators is not None: r.operators.freeze()


  def _validate(self, r:Rule) -> None:
    match r.kind:
      case RuleKind.sequence:
        if r.tag is None and not r.children:
          raise DefinitionError('placeholder rule was never defined: ', r)
        if r.tag is None and r.capture_count > 1:
          raise DefinitionError(r, ' captures multiple values but has no node tag.')
      case RuleKind.terminal:
        if not r.kinds: raise DefinitionError(r, ' matches no token kinds.')
        self._validate_kinds(r, r.kinds)
      case RuleKind.alternation:
        if not r.children: raise DefinitionError(r, ' has no alternatives.')
      case RuleKind.expression:
        if len(r.children) != 1 or r.operators is None or r.tag is None:
          raise DefinitionError(r, ' requires a tag, one operand rule, and an operator table.')
        if not r.operators: raise DefinitionError(r, ' has an empty operator table.')
        self._validate_kinds(r, r.operators)
      case RuleKind.optional|RuleKind.repetition|RuleKind.capture:
        if len(r.children) != 1: raise DefinitionError(r, ' requires exactly one sub-rule.')


  def _validate_kinds(self, r:Rule, kinds:Iterable[TokenKind]) -> None:
    if self.token_kinds is None: return
    for kind in kinds:
      if kind not in self.token_kinds:
        raise DefinitionError(r, f' refers to nonexistent token kind: {kind!r}')


  def token_source(self, source:Source, dbg_tokens:bool=False) -> TokenSource:
    'Lex `source` into a TokenSource.'
    if self.lexer is None: raise ValueError('Parser was constructed without a lexer.')
    tokens = list(self.lexer.lex(source, eot=True))
    if dbg_tokens:
      for i, t in enumerate(tokens):
        errL(f'Parser tokens[{i}]: {t}: {t.text!r}')
    return TokenSource(tokens, source=source, eot_kind=self.grammar.eot_kind)


  def parse(self, tokens:TokenSource) -> Any:
    '''
    Parse one unit of the root rule, leaving `tokens` positioned at the start of the next unit.
    Callers loop until `tokens.at_end`.
    '''
    return parse(self.root, tokens, self.grammar)


  def parse_all(self, source:Source|TokenSource, dbg_tokens:bool=False) -> Iterator[Any]:
    'Yield successive units of the root rule until the end of text.'
    tokens = source if isinstance(source, TokenSource) else self.token_source(source, dbg_tokens=dbg_tokens)
    while not tokens.at_end:
      pos = tokens.mark()
      result = self.parse(tokens)
      if tokens.mark() == pos:
        raise ParseError(tokens.source, tokens.peek(), 'root rule matched without consuming any tokens.')
      yield result



def reachable_rules(root:Rule) -> list[Rule]:
  '''
  Return every rule reachable from `root`, each exactly once, in depth-first order.
  The rule graph may contain cycles.
  '''
  visited:set[int] = set()
  rules:list[Rule] = []
  remaining = [root]
  while remaining:
    r = remaining.pop()
    if id(r) in visited: continue
    visited.add(id(r))
    rules.append(r)
    remaining.extend(reversed(r.children))
  return rules
