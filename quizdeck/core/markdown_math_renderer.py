"""Markdown + LaTeX rendering helpers shared by the Qt window and the web player.

Architecture note:
    Question text is converted to HTML once per view and MathJax typesets the
    math at display time, so the Qt window (via QWebEngineView) and the browser
    player show the same markup. Quiz files stay plain JSON and are not tied to
    a particular math engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape

from markdown_it import MarkdownIt

_MATHJAX_SCRIPT = (
    "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"
)


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Converts markdown-with-math into HTML fragments or full documents."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str) -> str:
        """Render a short markdown snippet such as option text without a wrapping paragraph."""

        return self._markdown.renderInline(markdown_text.strip())

    def wrap_with_mathjax(self, body_html: str, title: str = "QuizDeck", font_size: int = 14) -> str:
        """Wrap a fragment inside a minimal HTML document that loads MathJax."""

        return f"""<!doctype html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <title>{escape(title)}</title>
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <style>
      body {{ font-family: 'Segoe UI', system-ui, sans-serif; margin: 0; padding: 1rem; background: transparent; }}
      .question-html {{ font-size: {font_size}pt; line-height: 1.5; }}
      .option {{ margin: 0.35rem 0; padding: 0.4rem 0.6rem; border-radius: 6px; border: 1px solid #ccc; }}
      .option.correct {{ background: #dff6dd; border-color: #107c10; }}
      .option.wrong {{ background: #fde7e9; border-color: #d13438; }}
      .explanation {{ margin-top: 1rem; padding: 0.6rem; border-radius: 6px; background: #f5f5f5; color: #333; }}
    </style>
    <script>
      window.MathJax = {{ tex: {{ inlineMath: [['$','$']], displayMath: [['$$','$$']] }}, svg: {{ fontCache: 'global' }} }};
    </script>
    <script defer src=\"{_MATHJAX_SCRIPT}\"></script>
  </head>
  <body>
    <div class=\"question-html\">{body_html}</div>
  </body>
</html>"""


renderer = MarkdownMathRenderer()
# Shared instance; MarkdownIt is safe to reuse for read-only renders from the
# Qt thread and the FastAPI worker threads.
