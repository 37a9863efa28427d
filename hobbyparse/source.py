# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Token and Source classes shared by the lexer and the combinator engine.
A Token records its kind, its text, and the slice of the Source it came from;
the text is kept on the token so that hand-built token streams need no Source.
'''

from bisect import bisect_right
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class HasSlc(Protocol):
  @property
  def slc(self) -> slice: ...


Syntax = slice|HasSlc


def get_syntax_slc(syntax:Syntax) -> slice:
  return syntax if isinstance(syntax, slice) else syntax.slc


_setattr = object.__setattr__


@dataclass(frozen=True)
class Token:
  slc:slice
  kind:str
  text:str

  def __init__(self, kind:str, text:str='', pos:int=0, end:int|None=None):
    _setattr(self, 'slc', slice(pos, pos + len(text) if end is None else end))
    _setattr(self, 'kind', kind)
    _setattr(self, 'text', text)

  def __str__(self) -> str:
    return f'{self.slc.start}-{self.slc.stop}:{self.kind}'

  def __repr__(self) -> str:
    return f'{type(self).__qualname__}({self.kind!r}, {self.text!r}, pos={self.pos}, end={self.end})'

  @property
  def pos(self) -> int: return int(self.slc.start)

  @property
  def end(self) -> int: return int(self.slc.stop)

  def end_token(self, kind:str|None=None) -> 'Token':
    'Create a new token with position and end set to `token.end`.'
    if kind is None: kind = self.kind
    return Token(kind, '', pos=self.end, end=self.end)


SyntaxMsg = tuple[Syntax,str]


class Source:

  def __init__(self, name:str, text:str):
    if not isinstance(text, str): raise TypeError(text)
    self.name = name
    self.text = text
    self.newline_positions:list[int] = []
    self._scanned = 0


  def __repr__(self):
    return f'{self.__class__.__name__}({self.name!r}, text=<str[{len(self.text)}]>)'


  def update_line_positions(self, pos:int) -> None:
    'Lazily update newline positions array up to `pos`.'
    text = self.text
    for i in range(self._scanned, pos):
      if text[i] == '\n': self.newline_positions.append(i)
    self._scanned = max(self._scanned, pos)


  def get_line_index(self, pos:int) -> int:
    text = self.text
    length = len(text)
    if not (0 <= pos <= length): raise IndexError(pos)
    self.update_line_positions(pos)
    if pos == length:
      newline_count = len(self.newline_positions)
      return (newline_count - 1) if text.endswith('\n') else newline_count
      #^ The end of text never gets a line index beyond the last line.
    return bisect_right(self.newline_positions, pos - 1)


  def get_line_start(self, pos:int) -> int:
    'Return the character index for the start of the line containing `pos`.'
    text = self.text
    if pos == len(text) and text.endswith('\n'): pos -= 1
    return text.rfind('\n', 0, pos) + 1 # rfind returns -1 for no match.


  def get_line_end(self, pos:int) -> int:
    '''
    Return the character index for the end of the line containing `pos`;
    a newline is considered the final character of a line.
    '''
    newline_pos = self.text.find('\n', pos)
    return len(self.text) if newline_pos == -1 else newline_pos + 1


  def eot_token(self, kind:str='end_of_text') -> Token:
    end = len(self.text)
    return Token(kind, '', pos=end, end=end)


  def diagnostic(self, *syntax_msgs:SyntaxMsg|None) -> str:
    'Render each (syntax, msg) pair as a `name:line:col: msg` line followed by the source line and an underline.'
    return ''.join(self.diagnostic_for_syntax(sm[0], sm[1]) for sm in syntax_msgs if sm is not None)


  def diagnostic_for_syntax(self, syntax:Syntax, msg:str) -> str:
    slc = get_syntax_slc(syntax)
    return self.diagnostic_for_pos(pos=slc.start, end=slc.stop, msg=msg)


  def diagnostic_for_pos(self, pos:int, *, end:int, msg:str='') -> str:
    line_idx = self.get_line_index(pos)
    line_pos = self.get_line_start(pos)
    line_end = self.get_line_end(pos)
    end = min(end, line_end) # Tokens never span lines; clamp anything longer to the first line.
    assert 0 <= line_pos <= pos <= end, (line_pos, pos, end)
    line_str = self.text[line_pos:line_end]

    src_line:str
    if line_str.endswith('\n'):
      s = line_str[:-1]
      src_line = (s + '⏎') if (pos == len(line_str) - 1 + line_pos or end == line_end) else s # RETURN SYMBOL.
    else:
      src_line = line_str + '⏎͓' # RETURN SYMBOL, COMBINING X BELOW.

    src_bar = '| ' if src_line else '|'
    indent = ''.join('\t' if c == '\t' else ' ' for c in line_str[:pos - line_pos])
    underline = indent + ('^' if pos >= end else '~' * (end - pos))

    def col_str(p:int) -> str: return str((p - line_pos) + 1)

    col = f'{col_str(pos)}-{col_str(end)}' if pos < end else col_str(pos)
    msg_space = '' if (not msg or msg.startswith('\n')) else ' '
    name_colon = (self.name + ':') if self.name else ''
    return f'{name_colon}{line_idx+1}:{col}:{msg_space}{msg}\n{src_bar}{src_line}\n  {underline}\n'
