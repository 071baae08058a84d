"""
HTML sanitization for user-supplied free text.

Disallowed tags are escaped rather than removed, so `<script>` comes back as
`&lt;script&gt;`. Allowed tags keep only their safe attributes, which drops every
`on*` event handler.
"""
import re

from bleach.sanitizer import Cleaner

ALLOWED_TAGS = frozenset({
    "a",
    "abbr",
    "b",
    "blockquote",
    "br",
    "code",
    "del",
    "div",
    "em",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "hr",
    "i",
    "img",
    "li",
    "ol",
    "p",
    "pre",
    "s",
    "small",
    "span",
    "strong",
    "sub",
    "sup",
    "table",
    "tbody",
    "td",
    "th",
    "thead",
    "tr",
    "u",
    "ul",
})

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title", "target"],
    "abbr": ["title"],
    "img": ["src", "alt", "title", "width", "height"],
    "td": ["colspan", "rowspan"],
    "th": ["colspan", "rowspan", "scope"],
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto"})

_CLEANER = Cleaner(
    tags=ALLOWED_TAGS,
    attributes=ALLOWED_ATTRIBUTES,
    protocols=ALLOWED_PROTOCOLS,
    strip=False,
    strip_comments=True,
)

# Either a whole tag as serialized by the cleaner (attribute values are always
# double-quoted) or a bare ampersand it escaped in text.
_TAG_OR_ESCAPED_AMPERSAND = re.compile(r'(<(?:[^>"]|"[^"]*")*>)|&amp;(?!#?\w+;)')


def _restore_text_ampersands(html: str) -> str:
    """Undo the cleaner's `&` -> `&amp;` escaping in text, leaving tags untouched."""
    return _TAG_OR_ESCAPED_AMPERSAND.sub(lambda m: m.group(1) or "&", html)


def sanitize_html(value: str | None) -> str | None:
    """
    Escape executable markup in `value` while keeping benign formatting tags.

    Only markup is changed: plain text such as "AT&T" comes back as written.
    """
    if value is None:
        return None
    return _restore_text_ampersands(_CLEANER.clean(value))
