# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Print-style output helpers: `err*` functions write to stderr and `out*` functions write to stdout.
The L suffix means newline-terminated with no separator between items.
'''

import sys
from typing import Any


def outL(*items:Any, sep='', flush=False) -> None:
  "Write `items` to std out; sep='', end='\\n'."
  print(*items, sep=sep, end='\n', flush=flush)


def errL(*items:Any, sep='', flush=False) -> None:
  "Write items to std err; sep='', end='\\n'."
  print(*items, sep=sep, end='\n', file=sys.stderr, flush=flush)
