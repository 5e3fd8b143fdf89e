"""Markdown and Jinja2 rendering for guide pages."""

from pathlib import Path
from typing import Any

from jinja2 import FileSystemLoader, StrictUndefined
from jinja2.sandbox import SandboxedEnvironment
from markdown_it import MarkdownIt

from corpus.documents.model import is_internal_target, split_target

_TEMPLATE_DIR = Path(__file__).parent / "templates"

_md = MarkdownIt("commonmark", {"html": False}).enable("table")

_env = SandboxedEnvironment(
    loader=FileSystemLoader(_TEMPLATE_DIR),
    autoescape=True,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def rewrite_href(href: str) -> str:
    """Point internal ``.md`` links at the rendered ``.html`` page."""
    if not is_internal_target(href):
        return href
    path, suffix = split_target(href)
    if not path.endswith(".md"):
        return href
    return f"{path[: -len('.md')]}.html{suffix}"


def render_markdown(body: str) -> str:
    """Render a guide body to HTML.

    Raw HTML in the source is escaped. Fenced code keeps its language as a
    ``language-<lang>`` class for client-side highlighting.
    """
    env: dict[str, Any] = {}
    tokens = _md.parse(body, env)
    for token in tokens:
        for child in token.children or ():
            if child.type == "link_open":
                href = child.attrGet("href")
                if href is not None:
                    child.attrSet("href", rewrite_href(str(href)))
    return _md.renderer.render(tokens, _md.options, env)


def render_page(template_name: str, **context: Any) -> str:
    """Render one of the bundled page templates.

    StrictUndefined makes a missing context variable raise instead of
    rendering an empty string.
    """
    return _env.get_template(template_name).render(**context)
