# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
HobbyScript lexers.
English keywords are lexed as names and then retagged by the keyword table.
Chinese is written without spaces between words, so the Chinese vocabulary gets its own patterns instead.
'''

import re

from ..lex import Lexer, whitespace_patterns


patterns = dict(
  **whitespace_patterns,
  comment     = r'\#[^\n]*',
  number      = r'\d+(?:\.\d+)?(?:[eE][+-]?\d+)?',
  name        = r'[^\W\d]\w*',
  string      = r'"(?:[^\\"\n]|\\.)*"',

  paren_o     = r'\(',
  paren_c     = r'\)',
  brace_o     = r'{',
  brace_c     = r'}',
  comma       = r',',
  semi        = r';',

  # Order-dependent patterns.
  eq2         = r'==',
  eq          = r'=',
  exclaim_eq  = r'!=',
  exclaim     = r'!',
  le          = r'<=',
  lt          = r'<',
  ge          = r'>=',
  gt          = r'>',
  amp2        = r'&&',
  pipe2       = r'\|\|',
  plus        = r'\+',
  dash        = r'-',
  star        = r'\*',
  slash       = r'/',
  percent     = r'%',
)


keywords = {
  'if': 'kw_if',
  'else': 'kw_else',
  'while': 'kw_while',
  'for': 'kw_for',
  'break': 'kw_break',
  'import': 'kw_import',
  'true': 'true',
  'false': 'false',
  'null': 'null',
}


keywords_zh = {
  '如果': 'kw_if',
  '那么': 'kw_else',
  '循环': 'kw_while',
  '计次循环': 'kw_for',
  '跳出语句': 'kw_break',
  '导入': 'kw_import',
  '真': 'true',
  '假': 'false',
  '空': 'null',
  '与': 'amp2',
  '或': 'pipe2',
}


def spelled_keyword_patterns(patterns:dict[str,str], keywords:dict[str,str]) -> dict[str,str]:
  '''
  Return a copy of `patterns` in which every keyword spelling is matched by a pattern of its own kind,
  placed ahead of `name`; spellings of existing kinds (e.g. `与` for `amp2`) join that kind's pattern.
  `name` is rewritten to stop at any keyword spelling, so that `真与x` lexes as three tokens.
  '''
  spellings = sorted(keywords, key=len, reverse=True) # Longest first.
  any_keyword = '|'.join(re.escape(s) for s in spellings)
  kind_spellings:dict[str,list[str]] = {}
  for s in spellings:
    kind_spellings.setdefault(keywords[s], []).append(re.escape(s))

  res:dict[str,str] = {}
  for kind, pattern in patterns.items():
    if kind == 'name':
      for kw_kind, texts in kind_spellings.items():
        if kw_kind not in patterns: res[kw_kind] = '|'.join(texts)
      pattern = f'(?:(?!{any_keyword})[^\\W\\d])(?:(?!{any_keyword})\\w)*'
    elif kind in kind_spellings:
      pattern = '|'.join([pattern, *kind_spellings[kind]])
    res[kind] = pattern
  return res


drop = ('spaces', 'tabs', 'comment')

lexer = Lexer(patterns=patterns, keywords=keywords, drop=drop)

zh_lexer = Lexer(patterns=spelled_keyword_patterns(patterns, keywords_zh), keywords=keywords_zh, drop=drop)
#^ The keyword table still declares the vocabulary, whose spellings the grammar reserves.
