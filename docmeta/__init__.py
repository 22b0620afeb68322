"""Documentation metadata extractor.

Locates named function declarations in JavaScript and TypeScript
sources and parses their leading documentation comments into
structured annotation records.
"""

__version__ = "0.1.0"
