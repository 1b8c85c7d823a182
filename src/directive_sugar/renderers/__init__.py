"""directive-sugar renderers.

Renderers convert resolved AST nodes into output formats.

Available Renderers:
- HtmlRenderer: Renders a resolved tree to HTML using StringBuilder pattern

Thread Safety:
All renderers use StringBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from directive_sugar.renderers.html import HtmlRenderer

__all__ = ["HtmlRenderer"]
