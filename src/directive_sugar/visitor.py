"""Tree walking for directive-sugar ASTs.

``transform`` rebuilds a frozen tree bottom-up and is what the dispatcher
runs on. ``BaseVisitor`` is the read-only counterpart for inspection
(collecting directives, counting images, ...).

Example (collect every directive name):

    class DirectiveCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.names: list[str] = []

        def visit_directive(self, node: Directive) -> None:
            self.names.append(node.name)

    collector = DirectiveCollector()
    collector.visit(doc)

Thread Safety:
    Visitors may accumulate mutable state; create one per thread.
    ``transform`` is pure.

"""

import dataclasses
from collections.abc import Callable

from directive_sugar.nodes import (
    BlockQuote,
    Directive,
    Document,
    Element,
    Emphasis,
    Heading,
    Image,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Text,
)

type Rewrite = Callable[[Node], Node | None]


def child_nodes(node: Node) -> tuple[Node, ...]:
    """Return the direct children of ``node`` (empty for leaves)."""
    match node:
        case List(items=items):
            return items
        case (
            Document(children=children)
            | Heading(children=children)
            | Paragraph(children=children)
            | BlockQuote(children=children)
            | ListItem(children=children)
            | Emphasis(children=children)
            | Strong(children=children)
            | Strikethrough(children=children)
            | Link(children=children)
            | Directive(children=children)
            | Element(children=children)
        ):
            return children
        case _:
            return ()


def with_children(node: Node, children: tuple[Node, ...]) -> Node:
    """Return a copy of ``node`` with ``children`` replaced.

    Leaf nodes are returned unchanged.
    """
    match node:
        case List():
            return dataclasses.replace(node, items=children)  # type: ignore[arg-type]
        case (
            Document()
            | Heading()
            | Paragraph()
            | BlockQuote()
            | ListItem()
            | Emphasis()
            | Strong()
            | Strikethrough()
            | Link()
            | Directive()
            | Element()
        ):
            return dataclasses.replace(node, children=children)
        case _:
            return node


class BaseVisitor[T]:
    """Depth-first, pre-order visitor.

    Hooks exist for the nodes directive resolution cares about; every
    other node type goes to ``visit_default``. Children are walked after
    the node's own hook. A resolved directive is walked through its source
    children, never through its render target.

    """

    def visit(self, node: Node) -> T:
        match node:
            case Document():
                result = self.visit_document(node)
            case Paragraph():
                result = self.visit_paragraph(node)
            case Directive():
                result = self.visit_directive(node)
            case Element():
                result = self.visit_element(node)
            case Image():
                result = self.visit_image(node)
            case Text():
                result = self.visit_text(node)
            case _:
                result = self.visit_default(node)
        for child in child_nodes(node):
            self.visit(child)
        return result

    def visit_default(self, node: Node) -> T:
        return None  # type: ignore[return-value]

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    def visit_directive(self, node: Directive) -> T:
        return self.visit_default(node)

    def visit_element(self, node: Element) -> T:
        return self.visit_default(node)

    def visit_image(self, node: Image) -> T:
        return self.visit_default(node)

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)


def transform(doc: Document, fn: Rewrite) -> Document:
    """Rebuild ``doc`` by passing every node through ``fn``, leaves first.

    A parent reaches ``fn`` after its children, already carrying the
    rewritten ones. Subtrees ``fn`` leaves untouched are shared with the
    input tree. A ``None`` result drops the node.

    Raises:
        TypeError: If ``fn`` drops the root or replaces it with a non-Document

    """
    result = _rewrite(doc, fn)
    if not isinstance(result, Document):
        msg = "transform fn must return a Document for the root"
        raise TypeError(msg)
    return result


def _rewrite(node: Node, fn: Rewrite) -> Node | None:
    children = child_nodes(node)
    if children:
        kept = tuple(
            rewritten for child in children if (rewritten := _rewrite(child, fn)) is not None
        )
        if kept != children:
            node = with_children(node, kept)
    return fn(node)
