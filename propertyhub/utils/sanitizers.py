import html
import bleach


def sanitize_string(text, allowed_tags=None):
    """Sanitize a string by removing HTML tags and stripping whitespace.

    bleach entity-escapes the text it keeps; the result is unescaped again so
    plain characters such as ``&`` are stored as typed.
    """
    if text is None:
        return ''

    if allowed_tags:
        # Allow specific HTML tags
        text = bleach.clean(str(text), tags=allowed_tags, strip=True)
    else:
        # Remove all HTML tags
        text = html.unescape(bleach.clean(str(text), tags=[], strip=True))

    return text.strip()


def sanitize_list(values):
    """Sanitize a list of strings, or a pipe-delimited string, into a clean list"""
    if values is None:
        return []
    if isinstance(values, str):
        values = values.split('|')
    return [sanitize_string(v) for v in values if v is not None and sanitize_string(v)]
