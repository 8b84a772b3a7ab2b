"""Depth-first, pre-order traversal of unist-style dict trees.

The visitor decides per node what happens next:

    Action.CONTINUE  -- descend into the node's children (also the meaning of None)
    Action.SKIP      -- leave the node's subtree alone, carry on with its siblings
    Action.EXIT      -- stop the traversal immediately

Example: upper-case every text node outside inline code::

    def shout(node, index, parent):
        if node.get("tagName") == "code":
            return Action.SKIP
        if node["type"] == "text":
            node["value"] = node["value"].upper()
        return Action.CONTINUE

    visit(tree, shout)
"""

from enum import Enum
from typing import Callable


class Action(Enum):
    """What the traversal should do after a node has been visited."""

    CONTINUE = "continue"
    SKIP = "skip"
    EXIT = "exit"


Visitor = Callable[[dict, int | None, dict | None], "Action | None"]
Test = str | Callable[[dict], bool] | None


def _matches(node: dict, test: Test) -> bool:
    """Return True if *node* should be handed to the visitor."""
    if test is None:
        return True
    if isinstance(test, str):
        return node.get("type") == test
    return bool(test(node))


def _walk(node: dict, index: int | None, parent: dict | None, visitor: Visitor, test: Test) -> bool:
    """Visit *node* and its subtree.  Returns False once the traversal must stop."""
    action = Action.CONTINUE
    if _matches(node, test):
        action = visitor(node, index, parent) or Action.CONTINUE

    if action is Action.EXIT:
        return False
    if action is Action.SKIP:
        return True

    # Iterate over a snapshot so a visitor replacing children does not derail the walk
    for child_index, child in enumerate(list(node.get("children") or [])):
        if not _walk(child, child_index, node, visitor, test):
            return False
    return True


def visit(tree: dict, visitor: Visitor, test: Test = None) -> None:
    """Walk *tree* depth-first, calling ``visitor(node, index, parent)`` on matching nodes.

    *test* restricts which nodes reach the visitor: a node type string, a
    predicate, or None for every node.  Nodes that do not match are still
    descended into.
    """
    _walk(tree, None, None, visitor, test)
