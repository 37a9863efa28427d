# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
A buffered token source with constant time peeking and backtracking.
'''

from typing import Iterable

from .source import Source, Token


class TokenSource:
  '''
  TokenSource holds a fully buffered list of tokens and a current index.
  The final token is always an end-of-text token; it is never consumed,
  so `peek` and `next` past the end keep returning it.
  A position saved by `mark` is just the index, so `reset` is constant time.
  '''

  def __init__(self, tokens:Iterable[Token], *, source:Source|None=None, eot_kind:str='end_of_text'):
    self.source = source
    self.eot_kind = eot_kind
    self.tokens = list(tokens)
    if not self.tokens or self.tokens[-1].kind != eot_kind:
      last = self.tokens[-1] if self.tokens else None
      if source is not None: eot = source.eot_token(kind=eot_kind)
      elif last is not None: eot = last.end_token(kind=eot_kind)
      else: eot = Token(eot_kind)
      self.tokens.append(eot)
    self.pos = 0


  def __repr__(self) -> str:
    return f'{type(self).__name__}(pos={self.pos}, len={len(self.tokens)})'


  def peek(self, offset:int=0) -> Token:
    if offset < 0: raise ValueError(f'peek offset must be non-negative: {offset}')
    return self.tokens[min(self.pos + offset, len(self.tokens) - 1)]


  def next(self) -> Token:
    'Return the current token and advance past it, unless it is the end-of-text token.'
    token = self.tokens[self.pos]
    if token.kind != self.eot_kind: self.pos += 1
    return token


  def mark(self) -> int:
    return self.pos


  def reset(self, pos:int) -> None:
    if not (0 <= pos < len(self.tokens)): raise IndexError(pos)
    self.pos = pos


  @property
  def at_end(self) -> bool:
    return self.tokens[self.pos].kind == self.eot_kind
