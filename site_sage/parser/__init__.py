"""site_sage.parser: markup helpers and page tokenisation."""
