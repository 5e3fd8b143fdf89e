"""Markdown body parsing: headings, fenced code blocks and links."""

import hashlib
from collections.abc import Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token

from corpus.documents.frontmatter import parse_front_matter, split_front_matter
from corpus.documents.model import CodeBlock, Document, Heading, Link

_md = MarkdownIt("commonmark").enable("table")

_LINE_BREAKS = frozenset({"softbreak", "hardbreak"})


def content_hash(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def parse_document(path: str, text: str) -> Document:
    """Parse a guide's full file text into a Document.

    ``path`` is the POSIX path relative to the corpus root. Line numbers on
    headings, code blocks and links are 1-based and file-relative.

    Raises FrontMatterError if the front matter is missing or invalid.
    """
    data, body, offset = split_front_matter(text)
    front_matter = parse_front_matter(data)

    headings: list[Heading] = []
    code_blocks: list[CodeBlock] = []
    links: list[Link] = []
    section: str | None = None
    start = offset + 1

    tokens = _md.parse(body)
    for index, token in enumerate(tokens):
        # Inline tokens in table cells carry no map; reuse the row's line.
        if token.map:
            start = offset + token.map[0] + 1

        if token.type == "heading_open":
            inline = tokens[index + 1]
            section = inline.content.strip()
            headings.append(
                Heading(level=int(token.tag[1:]), text=section, line=start)
            )
        elif token.type == "fence":
            info = token.info.strip()
            code_blocks.append(
                CodeBlock(
                    language=info.split()[0] if info else "",
                    info=info,
                    content=token.content,
                    line=start,
                )
            )
        elif token.type == "inline" and token.children:
            links.extend(_collect_links(token.children, start, section))

    return Document(
        path=path,
        front_matter=front_matter,
        body=body,
        body_line_offset=offset,
        headings=headings,
        code_blocks=code_blocks,
        links=links,
        content_hash=content_hash(text),
    )


def _collect_links(
    children: Sequence[Token], first_line: int, section: str | None
) -> list[Link]:
    """Pull links out of an inline token's children.

    Line numbers advance on every soft or hard break inside the paragraph.
    """
    links: list[Link] = []
    line = first_line
    target: str | None = None
    target_line = first_line
    text_parts: list[str] = []

    for child in children:
        if child.type in _LINE_BREAKS:
            line += 1
        elif child.type == "link_open":
            target = str(child.attrGet("href") or "")
            target_line = line
            text_parts = []
        elif child.type == "link_close" and target is not None:
            links.append(
                Link(
                    target=target,
                    text="".join(text_parts).strip(),
                    line=target_line,
                    section=section,
                )
            )
            target = None
        elif target is not None and child.type in ("text", "code_inline"):
            text_parts.append(child.content)

    return links
