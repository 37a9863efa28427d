# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Simple lexing using python regular expressions.
'''

import re
from typing import Container, Iterable, Iterator, Pattern

from .source import Source, Token


class Lexer:
  '''
  Define a Lexer using python regular expressions.
  `patterns` maps token kinds to regexes; earlier patterns take priority over later ones.
  `keywords` maps exact token texts to kinds; it is applied to tokens of `keyword_kind`,
  so that keywords and names share a single pattern.
  `drop` is the default set of kinds omitted from the output stream.
  Text that no pattern matches is emitted as an `invalid` token.
  Note: A zero-length match, e.g. r'^' causes an exception; otherwise the stream would never advance.
  '''

  class DefinitionError(Exception): pass


  def __init__(self, *, flags='', patterns:dict[str,str], keywords:dict[str,str]|None=None, keyword_kind:str='name',
   drop:Iterable[str]=()) -> None:

    # Validate flags.
    for flag in flags:
      if flag not in 'aimsux':
        raise Lexer.DefinitionError(f'invalid global regex flag: {flag}')
    flags_pattern = f'(?{flags})' if flags else ''

    # Validate patterns.
    if not patterns: raise Lexer.DefinitionError('Lexer instance must define at least one pattern')
    self.patterns:dict[str,str] = {}
    for n, v in patterns.items():
      validate_name(n)
      if n == 'invalid':
        raise Lexer.DefinitionError(f'{n!r} pattern name collides with the invalid token name')
      if not isinstance(v, str):
        raise Lexer.DefinitionError(f'{n!r} pattern value must be a string; found {v!r}')
      pattern = f'(?P<{n}>{v})'
      try: r = re.compile(flags_pattern + pattern) # compile each expression by itself to improve error clarity.
      except re.error as e:
        raise Lexer.DefinitionError(f'{n!r} pattern is invalid: {pattern}') from e
      for group_name in r.groupindex:
        if group_name in patterns and group_name != n:
          raise Lexer.DefinitionError(f'{n!r} pattern contains a conflicting capture group name: {group_name!r}')
      self.patterns[n] = pattern

    self.regex:Pattern = re.compile(flags_pattern + '|'.join(self.patterns.values()))
    #^ Declaration order determines pattern priority.

    # Validate keywords.
    self.keywords:dict[str,str] = {}
    if keywords:
      if keyword_kind not in self.patterns:
        raise Lexer.DefinitionError(f'keyword kind is not a pattern name: {keyword_kind!r}')
      for text, kind in keywords.items():
        validate_name(kind)
        if not text: raise Lexer.DefinitionError(f'empty keyword for kind: {kind!r}')
        self.keywords[text] = kind
    self.keyword_kind = keyword_kind

    self.drop = frozenset(drop)
    for kind in self.drop:
      if kind not in self.patterns:
        raise Lexer.DefinitionError(f'drop kind is not a pattern name: {kind!r}')

    self.kinds = frozenset([*self.patterns, *self.keywords.values(), 'invalid', 'end_of_text'])


  def _lex_one(self, source:Source, pos:int, end:int) -> Token:
    text = source.text
    m = self.regex.search(text, pos, end)
    if not m:
      return Token('invalid', text[pos:end], pos=pos, end=end)
    p, e = m.span()
    if pos < p:
      return Token('invalid', text[pos:p], pos=pos, end=p)
    if p == e:
      raise Lexer.DefinitionError(f'Zero-length patterns are disallowed.\n  kind: {m.lastgroup}; match: {m}')
    kind = m.lastgroup
    assert isinstance(kind, str)
    token_text = text[p:e]
    if kind == self.keyword_kind:
      kind = self.keywords.get(token_text, kind)
    return Token(kind, token_text, pos=p, end=e)


  def lex(self, source:Source, *, drop:Container[str]|None=None, eot=False) -> Iterator[Token]:
    if not isinstance(source, Source): raise TypeError(source)
    if drop is None: drop = self.drop
    pos = 0
    end = len(source.text)
    while pos < end:
      token = self._lex_one(source, pos=pos, end=end)
      pos = token.end
      if token.kind not in drop:
        yield token
    if eot:
      yield source.eot_token()



def validate_name(name:str) -> str:
  if not isinstance(name, str) or not valid_name_re.fullmatch(name):
    raise Lexer.DefinitionError(f'invalid name: {name!r}')
  if name in reserved_names:
    raise Lexer.DefinitionError(f'name is reserved: {name!r}')
  return name


valid_name_re = re.compile(r'[A-Za-z_]\w*')

reserved_names = frozenset({'end_of_text'})


whitespace_patterns = dict(
  spaces    = r'\ +',
  tabs      = r'\t+',
  newline   = r'\r?\n',
)
