from typing import Optional

from headline_generator.config import LayoutSettings
from headline_generator.line_wrapper import wrap
from headline_generator.svg_renderer import render


class EmptyHeadlineError(ValueError):
    """Raised when there is no headline text to lay out"""


def generate(headline: Optional[str], settings: Optional[LayoutSettings] = None) -> str:
    """
    Headline in, HTML document out.

    Pure and deterministic: the same headline and settings always give
    byte-identical markup.
    """
    if headline is None or not headline.strip():
        raise EmptyHeadlineError("Headline is required")

    settings = settings or LayoutSettings()
    lines = wrap(headline, settings.max_line_length)
    return render(lines, settings)
