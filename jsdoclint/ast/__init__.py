"""ESTree-shaped AST nodes for JavaScript."""
