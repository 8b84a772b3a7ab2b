"""Conversion context handed to node handlers.

A handler receives ``(state, node)`` and returns an output node, a list of
output nodes, or None.  The state gives it two capabilities:

  all(node)             -- convert the node's children with every registered handler
  patch(source, target) -- copy positional information from source to target

``ConversionState`` is the protocol the grid-table handler depends on.
``BasicState`` implements it with built-in handlers for common mdast content
so trees can be converted end to end without a host framework.
"""

import copy
from typing import Callable, Protocol

from gridtable_html.errors import InvalidNodeError, UnknownNodeTypeError


Handler = Callable[["BasicState", dict], "dict | list | None"]


class ConversionState(Protocol):
    """The part of a conversion context used by the grid-table handler."""

    def all(self, node: dict) -> list[dict]:
        """Convert the children of *node*."""

    def patch(self, source: dict, target: dict) -> None:
        """Attach provenance from *source* onto *target*."""


def element(tag_name: str, children: list | None = None, properties: dict | None = None) -> dict:
    """Build a hast element node."""
    return {
        "type": "element",
        "tagName": tag_name,
        "properties": properties if properties is not None else {},
        "children": children if children is not None else [],
    }


def text(value: str) -> dict:
    """Build a hast text node."""
    return {"type": "text", "value": value}


# ─── Built-in handlers ────────────────────────────────────────────────────────


def _append_converted(results: list[dict], converted: dict | list | None) -> None:
    """Add a handler's result to *results*: lists are flattened, None is dropped."""
    if converted is None:
        return
    if isinstance(converted, list):
        results.extend(converted)
    else:
        results.append(converted)


def _wrap(tag_name: str) -> Handler:
    """Return a handler that wraps the converted children in *tag_name*."""

    def handle(state: "BasicState", node: dict) -> dict:
        result = element(tag_name, state.all(node))
        state.patch(node, result)
        return result

    return handle


def _root(state: "BasicState", node: dict) -> dict:
    result = {"type": "root", "children": state.all(node)}
    state.patch(node, result)
    return result


def _text(state: "BasicState", node: dict) -> dict:
    result = text(node.get("value", ""))
    state.patch(node, result)
    return result


def _inline_code(state: "BasicState", node: dict) -> dict:
    code_text = text(node.get("value", ""))
    state.patch(node, code_text)
    result = element("code", [code_text])
    state.patch(node, result)
    return result


def _code(state: "BasicState", node: dict) -> dict:
    """Fenced code: ``pre > code`` with a trailing newline and a language class."""
    value = node.get("value", "")
    properties = {}
    if node.get("lang"):
        properties["className"] = [f"language-{node['lang']}"]
    code = element("code", [text(value + "\n" if value else "")], properties)
    state.patch(node, code)
    result = element("pre", [code])
    state.patch(node, result)
    return result


def _break(state: "BasicState", node: dict) -> list[dict]:
    result = element("br")
    state.patch(node, result)
    return [result, text("\n")]


def _heading(state: "BasicState", node: dict) -> dict:
    depth = min(max(int(node.get("depth", 1)), 1), 6)
    result = element(f"h{depth}", state.all(node))
    state.patch(node, result)
    return result


def _thematic_break(state: "BasicState", node: dict) -> dict:
    result = element("hr")
    state.patch(node, result)
    return result


def _link(state: "BasicState", node: dict) -> dict:
    properties = {"href": node.get("url", "")}
    if node.get("title") is not None:
        properties["title"] = node["title"]
    result = element("a", state.all(node), properties)
    state.patch(node, result)
    return result


def _image(state: "BasicState", node: dict) -> dict:
    properties = {"src": node.get("url", ""), "alt": node.get("alt") or ""}
    if node.get("title") is not None:
        properties["title"] = node["title"]
    result = element("img", properties=properties)
    state.patch(node, result)
    return result


def _list(state: "BasicState", node: dict) -> dict:
    properties = {}
    ordered = bool(node.get("ordered"))
    if ordered and node.get("start") not in (None, 1):
        properties["start"] = node["start"]
    result = element("ol" if ordered else "ul", state.all(node), properties)
    state.patch(node, result)
    return result


def _list_item(state: "BasicState", node: dict) -> dict:
    # Tight list items render their paragraphs without the <p> wrapper
    children: list[dict] = []
    for child in node.get("children") or []:
        if isinstance(child, dict) and child.get("type") == "paragraph" and node.get("spread") is not True:
            children.extend(state.all(child))
        else:
            _append_converted(children, state.one(child))
    result = element("li", children)
    state.patch(node, result)
    return result


DEFAULT_HANDLERS: dict[str, Handler] = {
    "root": _root,
    "paragraph": _wrap("p"),
    "text": _text,
    "emphasis": _wrap("em"),
    "strong": _wrap("strong"),
    "delete": _wrap("del"),
    "inlineCode": _inline_code,
    "code": _code,
    "break": _break,
    "heading": _heading,
    "thematicBreak": _thematic_break,
    "link": _link,
    "image": _image,
    "blockquote": _wrap("blockquote"),
    "list": _list,
    "listItem": _list_item,
}


# ─── State ────────────────────────────────────────────────────────────────────


class BasicState:
    """Dispatching conversion context built on a node-type -> handler table."""

    def __init__(self, handlers: dict[str, Handler] | None = None):
        self.handlers: dict[str, Handler] = {**DEFAULT_HANDLERS, **(handlers or {})}

    def one(self, node: dict) -> dict | list | None:
        """Convert a single node with the handler registered for its type.

        Raises InvalidNodeError if *node* is not a dict and UnknownNodeTypeError
        if no handler is registered for its type.
        """
        if not isinstance(node, dict):
            raise InvalidNodeError(node)
        node_type = node.get("type")
        handler = self.handlers.get(node_type)
        if handler is None:
            raise UnknownNodeTypeError(node_type)
        return handler(self, node)

    def all(self, node: dict) -> list[dict]:
        """Convert every child of *node*, in order, flattening list results."""
        results: list[dict] = []
        for child in node.get("children") or []:
            _append_converted(results, self.one(child))
        return results

    def patch(self, source: dict, target: dict) -> None:
        """Copy the source node's position onto the target, if it has one."""
        if source.get("position"):
            target["position"] = copy.deepcopy(source["position"])
