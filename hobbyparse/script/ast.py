# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
HobbyScript syntax tree nodes.
Each node class is named by the tag of the grammar rule that constructs it; `mk_node` maps tags to classes.
'''

from typing import Any, Callable, Iterable, Iterator


class AstNode:
  '''
  Base class for HobbyScript syntax tree nodes.
  The engine passes the captured values of a rule in order;
  nested repetition lists are spliced in place and absent optional values are dropped,
  so `children` holds only the nodes that actually occurred.
  '''

  def __init__(self, children:Iterable[Any]=()) -> None:
    self.children:list[Any] = list(flatten_children(children))

  @classmethod
  def create(cls, children:list[Any]) -> Any:
    return cls(children)

  @property
  def tag(self) -> str: return type(self).__name__

  def __eq__(self, other:Any) -> bool:
    return type(self) is type(other) and self.children == other.children

  def __repr__(self) -> str:
    return f'{self.tag}({self.children!r})'

  def __str__(self) -> str:
    return '(' + ' '.join(str(c) for c in self.children) + ')'

  def skeletonize(self, skeletonize_sub:Callable[[Any],Any]) -> Any:
    return (self.tag, *(skeletonize_sub(c) for c in self.children))


def flatten_children(children:Iterable[Any]) -> Iterator[Any]:
  for child in children:
    if child is None: continue
    if isinstance(child, list): yield from flatten_children(child)
    else: yield child


class AstLeaf(AstNode):
  'A node holding a single literal value.'

  def __init__(self, children:Iterable[Any]=()) -> None:
    self.children = list(children)
    if len(self.children) != 1: raise ValueError(f'{self.tag} requires exactly one value; received {self.children!r}')

  @property
  def value(self) -> Any: return self.children[0]

  def __str__(self) -> str: return str(self.value)

  def skeletonize(self, skeletonize_sub:Callable[[Any],Any]) -> Any:
    return self.value


class NumberLiteral(AstLeaf): pass

class Name(AstLeaf): pass


class StringLiteral(AstLeaf):

  def __str__(self) -> str: return f'"{self.value}"'

  def skeletonize(self, skeletonize_sub:Callable[[Any],Any]) -> Any: return str(self)


class BoolLiteral(AstLeaf):

  def __str__(self) -> str: return 'true' if self.value else 'false'


class NullLiteral(AstLeaf):

  def __str__(self) -> str: return 'null'


class PrimaryExpr(AstNode):

  @classmethod
  def create(cls, children:list[Any]) -> Any:
    'A primary expression with a single part is just that part.'
    node = cls(children)
    return node.children[0] if len(node.children) == 1 else node


class NegativeExpr(AstNode):

  @property
  def operand(self) -> Any: return self.children[0]

  def __str__(self) -> str: return f'-{self.operand}'

  def skeletonize(self, skeletonize_sub:Callable[[Any],Any]) -> Any:
    return ('-', skeletonize_sub(self.operand))


class NotExpr(AstNode):

  @property
  def operand(self) -> Any: return self.children[0]

  def __str__(self) -> str: return f'!{self.operand}'

  def skeletonize(self, skeletonize_sub:Callable[[Any],Any]) -> Any:
    return ('!', skeletonize_sub(self.operand))


class BinaryExpr(AstNode):
  'Children are the left operand, the operator text, and the right operand.'

  @property
  def left(self) -> Any: return self.children[0]

  @property
  def operator(self) -> str: return self.children[1]

  @property
  def right(self) -> Any: return self.children[2]

  def __str__(self) -> str: return f'({self.left} {self.operator} {self.right})'

  def skeletonize(self, skeletonize_sub:Callable[[Any],Any]) -> Any:
    return (self.operator, skeletonize_sub(self.left), skeletonize_sub(self.right))


class BlockStmnt(AstNode):

  @property
  def statements(self) -> list[Any]: return self.children


class IfStmnt(AstNode):

  @property
  def condition(self) -> Any: return self.children[0]

  @property
  def then_block(self) -> BlockStmnt: return self.children[1]

  @property
  def else_block(self) -> BlockStmnt|None:
    return self.children[2] if len(self.children) > 2 else None

  def __str__(self) -> str:
    else_str = '' if self.else_block is None else f' else {self.else_block}'
    return f'(if {self.condition} {self.then_block}{else_str})'


class WhileStmt(AstNode):

  @property
  def condition(self) -> Any: return self.children[0]

  @property
  def body(self) -> BlockStmnt: return self.children[1]

  def __str__(self) -> str: return f'(while {self.condition} {self.body})'


class OptionStmt(AstNode):
  'A comma-separated list of expressions, as found in the first and last clauses of a for statement.'

  @property
  def expressions(self) -> list[Any]: return self.children


class NullStmt(AstNode):
  'The empty statement.'

  def __str__(self) -> str: return '()'


class ForStmt(AstNode):
  'Children are the init, condition, and step clauses, and the body; an empty clause is an empty OptionStmt or a NullStmt.'

  @property
  def init(self) -> OptionStmt|NullStmt: return self.children[0]

  @property
  def condition(self) -> Any: return self.children[1]

  @property
  def step(self) -> OptionStmt|NullStmt: return self.children[2]

  @property
  def body(self) -> BlockStmnt: return self.children[3]

  def __str__(self) -> str: return f'(for {self.init} {self.condition} {self.step} {self.body})'


class BreakStmt(AstNode):

  def __str__(self) -> str: return '(break)'


class Import(AstNode):

  @property
  def path(self) -> str: return self.children[0].value

  def __str__(self) -> str: return f'(import {self.children[0]})'


node_types:dict[str,type[AstNode]] = { t.__name__: t for t in [
  NumberLiteral, Name, StringLiteral, BoolLiteral, NullLiteral,
  PrimaryExpr, NegativeExpr, NotExpr, BinaryExpr,
  BlockStmnt, IfStmnt, WhileStmt, OptionStmt, NullStmt, ForStmt, BreakStmt, Import,
]}


def mk_node(tag:str, children:list[Any]) -> Any:
  'Node factory for the HobbyScript grammar.'
  try: node_type = node_types[tag]
  except KeyError as e: raise ValueError(f'unknown node tag: {tag!r}') from e
  return node_type.create(children)
