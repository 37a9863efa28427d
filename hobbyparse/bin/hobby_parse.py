#!/usr/bin/env python3
# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Parse HobbyScript source and print the resulting syntax trees, one program unit per line.
'''

from argparse import ArgumentParser
from sys import stdin

from ..bnf import ParseError, skeleton
from ..io import outL
from ..script.ast import NullStmt
from ..script.grammar import ScriptParser
from ..script.lex import lexer, zh_lexer
from ..source import Source


def main() -> None:
  parser = ArgumentParser(prog='hobby-parse', description='Parse HobbyScript source and print the syntax trees.')
  parser.add_argument('paths', nargs='*', help='Source files to parse; stdin is read if no paths or `-code` are given.')
  parser.add_argument('-code', help='Parse the argument string as source.')
  parser.add_argument('-zh', action='store_true', help='Use the Chinese keyword vocabulary.')
  parser.add_argument('-skeleton', action='store_true', help='Print tree skeletons instead of s-expressions.')
  parser.add_argument('-all', action='store_true', help='Also print the empty statements produced by separators.')
  parser.add_argument('-dbg-tokens', action='store_true', help='Print each lexed token to stderr.')
  args = parser.parse_args()

  if args.code is not None and args.paths: exit('`-code` and `paths` are mutually exclusive.')

  script_parser = ScriptParser(zh_lexer if args.zh else lexer)

  sources:list[Source]
  if args.code is not None: sources = [Source('<code>', args.code)]
  elif args.paths: sources = [load_source(path) for path in args.paths]
  else: sources = [Source('<stdin>', stdin.read())]

  for source in sources:
    try:
      for node in script_parser.parse_all(source, dbg_tokens=args.dbg_tokens):
        if isinstance(node, NullStmt) and not args.all: continue
        outL(' => ', skeleton(node) if args.skeleton else node)
    except ParseError as e: e.fail()


def load_source(path:str) -> Source:
  try:
    with open(path) as f: return Source(path, f.read())
  except OSError as e:
    exit(f'hobby-parse error: could not read {path!r}: {e.strerror}.')


if __name__ == '__main__': main()
