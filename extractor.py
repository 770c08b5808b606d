"""
TourGpX — Tour to GPX Converter
Pulls the JSON payload out of a tour page.

The page embeds its state as a JavaScript call::

    kmtBoot.setProps("{\\"page\\":{...}}");

The argument is an HTML-escaped, backslash-escaped JSON string.
"""

import html

from errors import ExtractionError

START_MARKER = 'kmtBoot.setProps("'
END_MARKER = '");'


def extract_json_from_html(html_text: str, start_marker: str = START_MARKER,
                           end_marker: str = END_MARKER) -> str:
    """Return the unescaped JSON text between the two markers."""
    start = html_text.find(start_marker)
    if start == -1:
        raise ExtractionError("start marker not found in HTML content")
    start += len(start_marker)

    end = html_text.find(end_marker, start)
    if end == -1:
        raise ExtractionError("end marker not found in HTML content")

    # Order matters: entities first, then the two literal replacements.
    text = html.unescape(html_text[start:end])
    text = text.replace("\\\\", "\\")
    text = text.replace('\\"', '"')
    return text
