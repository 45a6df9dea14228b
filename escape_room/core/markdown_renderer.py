"""Markdown rendering for question text shown in Qt rich-text labels.

Question banks may use light Markdown (emphasis, inline code, code blocks).
Qt labels understand a subset of HTML, so the text is rendered once per
question through markdown-it and handed to the label as rich text.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class QuestionRenderer:
    """Converts question markdown into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = MarkdownIt("commonmark", {"html": self.enable_html}).enable("strikethrough")

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""
        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>(No question text)</em></p>"
        return self._markdown.render(sanitized)

    def render_choice(self, choice_text: str) -> str:
        """Choices go on button labels, where a bare ampersand marks a mnemonic."""
        return choice_text.strip().replace("&", "&&")


renderer = QuestionRenderer()
