# Core type aliases for MiniLisp's data model.
# Source is read into ExpressionNode trees (element + ordered children). A tree is
# desugared into canonical form and then folded into a runtime Value.
#
# Naming guidance:
# - Element:    the tag carried by a node (Identifier, Group, a form marker, or a Value).
# - LispValue:  use in evaluator/runtime code to denote evaluated values.
# - FoldResult: what the evaluation fold produces per node; a Value, or a bare
#               Identifier when the node sits in the name slot of define/set!.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Per-node result of the evaluation fold
FoldResult = Any

# Native function carried by a built-in procedure: ordered arguments -> result
NativeFn = Callable[[list], LispValue]
