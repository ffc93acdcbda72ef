"""String clean-up for text scraped out of HTML and embedded JSON."""

import json
import re

_NAMED_ENTITIES = (
    (re.compile(r"&amp;", re.I), "&"),
    (re.compile(r"&lt;", re.I), "<"),
    (re.compile(r"&gt;", re.I), ">"),
    (re.compile(r"&nbsp;", re.I), " "),
    (re.compile(r"&copy;", re.I), "©"),
    (re.compile(r"&reg;", re.I), "®"),
)

# 微信模板会把 & 二次转义成 \x26
_QUOTE_ENTITIES = (
    (re.compile(r"&quot;|&#34;|&#x22;", re.I), '"'),
    (re.compile(r"\\x26quot;", re.I), '"'),
    (re.compile(r"\\x26", re.I), "&"),
)

_APOS_ENTITY = re.compile(r"&#39;|&#x27;", re.I)
_DEC_ENTITY = re.compile(r"&#(\d+);")
_HEX_ENTITY = re.compile(r"&#x([0-9a-f]+);", re.I)

# u0023 u0025 u0026 u002F u003D u003F
_URL_ESCAPE = re.compile(r"\\u00(2[356fF]|3[dDfF])")

_SHARE_URL = re.compile(r"(https?://[^\s]+)", re.I)
_NON_ASCII_TAIL = re.compile(r"[^\x00-\x7F].*$", re.S)
_SPACE_TAIL = re.compile(r"\s+.*$", re.S)


def _code_point(m: re.Match, base: int) -> str:
    try:
        cp = int(m.group(1), base)
        # 代理区码点无法编码为 UTF-8
        if 0xD800 <= cp <= 0xDFFF:
            return m.group(0)
        return chr(cp)
    except (ValueError, OverflowError):
        return m.group(0)


def decode_entities(s: str) -> str:
    """Decode HTML entities and the ``\\x26`` double escape.

    Named entities go first, numeric ones last, so that a later step never
    re-interprets something an earlier step produced.
    """
    if not s:
        return s
    for pattern, repl in _NAMED_ENTITIES:
        s = pattern.sub(repl, s)
    for pattern, repl in _QUOTE_ENTITIES:
        s = pattern.sub(repl, s)
    s = _APOS_ENTITY.sub("'", s)
    s = _DEC_ENTITY.sub(lambda m: _code_point(m, 10), s)
    s = _HEX_ENTITY.sub(lambda m: _code_point(m, 16), s)
    return s


def decode_unicode_escapes(s: str) -> str:
    """Undo the unicode-escaped URL characters douyin leaves in its JSON."""
    if not s:
        return s
    return _URL_ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), s)


def unescape_json_string(raw: str) -> str:
    """Decode the body of a JSON string literal captured by a regex.

    Returns ``raw`` untouched when it is not a valid literal body.
    """
    if not raw or "\\" not in raw:
        return raw
    try:
        value = json.loads(f'"{raw}"')
    except ValueError:
        return raw
    return value if isinstance(value, str) else raw


def clean_share_url(text: str) -> str:
    """Pull the link out of pasted share text such as
    ``"7.43 复制打开抖音，看看【xx的作品】 https://v.douyin.com/abc/ 太好看了"``.
    """
    if not text:
        return ""
    url = text.strip()
    m = _SHARE_URL.search(url)
    if m:
        url = m.group(1)
    url = _NON_ASCII_TAIL.sub("", url)
    url = _SPACE_TAIL.sub("", url)
    return url
