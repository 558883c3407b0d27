"""JavaScript lexer."""
