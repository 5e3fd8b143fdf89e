from corpus.documents.frontmatter import parse_front_matter, split_front_matter
from corpus.documents.model import (
    CodeBlock,
    Document,
    FrontMatter,
    Heading,
    Link,
    LoadError,
)
from corpus.documents.parser import content_hash, parse_document

__all__ = [
    "CodeBlock",
    "Document",
    "FrontMatter",
    "Heading",
    "Link",
    "LoadError",
    "content_hash",
    "parse_document",
    "parse_front_matter",
    "split_front_matter",
]
