# Splits JavaScript into code, comment and literal spans; joining them gives the input back.
import re
from collections import namedtuple

CODE = 'code'
LINE_COMMENT = 'line_comment'
BLOCK_COMMENT = 'block_comment'
STRING = 'string'
TEMPLATE = 'template'
REGEX = 'regex'

LITERALS = (STRING, TEMPLATE, REGEX)

Span = namedtuple('Span', 'kind text')

SPECIAL = re.compile(r'[/"\'`]')
WORD_TAIL = re.compile(r'[\w$]+$')

# a slash right after one of these opens a regex literal rather than dividing
REGEX_PRECEDERS = frozenset('(,=:[!&|?{};+-*%<>~^}')
REGEX_KEYWORDS = frozenset([
    'return', 'typeof', 'case', 'do', 'else', 'in', 'of', 'new', 'delete',
    'void', 'throw', 'instanceof', 'yield', 'await',
])
# one longer than the longest keyword, so a longer word never matches
KEYWORD_TAIL = 11


def scan(text):
    spans = []
    # tail of the last significant code: '' at the start, None right after a literal
    last = ''
    start = 0
    # code before `mark` is already folded into `last`
    mark = 0
    n = len(text)
    m = SPECIAL.search(text)
    while m:
        i = m.start()
        code = text[mark:i].rstrip()
        if code:
            last = code[-KEYWORD_TAIL:]
        kind, end = _token_at(text, i, last)
        if kind is None:
            # division
            last = '/'
            mark = i + 1
            m = SPECIAL.search(text, mark)
            continue
        if start < i:
            spans.append(Span(CODE, text[start:i]))
        spans.append(Span(kind, text[i:end]))
        if kind in LITERALS:
            last = None
        start = mark = end
        m = SPECIAL.search(text, end)
    if start < n:
        spans.append(Span(CODE, text[start:]))
    return spans


def join(spans):
    return ''.join(span.text for span in spans)


def _token_at(text, i, prev):
    ch = text[i]
    if ch == '/':
        if text.startswith('//', i):
            end = text.find('\n', i)
            return LINE_COMMENT, len(text) if end < 0 else end
        if text.startswith('/*', i):
            end = text.find('*/', i + 2)
            return BLOCK_COMMENT, len(text) if end < 0 else end + 2
        if regex_allowed(prev):
            end = _scan_regex(text, i)
            if end is not None:
                return REGEX, end
        return None, None
    if ch == '`':
        return TEMPLATE, _scan_template(text, i)
    return STRING, _scan_string(text, i)


def regex_allowed(prev):
    if prev is None:
        return False
    if not prev:
        return True
    # postfix i++ / i-- ends an operand
    if prev.endswith(('++', '--')):
        return False
    if prev[-1] in REGEX_PRECEDERS:
        return True
    word = WORD_TAIL.search(prev[-KEYWORD_TAIL:])
    return word is not None and word.group() in REGEX_KEYWORDS


def _scan_string(text, i):
    quote = text[i]
    n = len(text)
    j = i + 1
    while j < n:
        c = text[j]
        if c == '\\':
            j += 2
            continue
        if c == quote:
            return j + 1
        if c == '\n':
            return j
        j += 1
    return n


def _scan_template(text, i):
    n = len(text)
    j = i + 1
    while j < n:
        c = text[j]
        if c == '\\':
            j += 2
            continue
        if c == '`':
            return j + 1
        if text.startswith('${', j):
            j = _scan_substitution(text, j + 2)
            continue
        j += 1
    return n


def _scan_substitution(text, j):
    n = len(text)
    depth = 1
    while j < n:
        c = text[j]
        if c in '"\'':
            j = _scan_string(text, j)
            continue
        if c == '`':
            j = _scan_template(text, j)
            continue
        if c == '{':
            depth += 1
        elif c == '}':
            depth -= 1
            if depth == 0:
                return j + 1
        j += 1
    return n


def _scan_regex(text, i):
    n = len(text)
    j = i + 1
    in_class = False
    while j < n:
        c = text[j]
        if c == '\\':
            j += 2
            continue
        if c in '\r\n':
            return None
        if in_class:
            if c == ']':
                in_class = False
        elif c == '[':
            in_class = True
        elif c == '/':
            j += 1
            break
        j += 1
    else:
        return None
    while j < n and text[j].isalpha():
        j += 1
    return j


# private-use code point: never an identifier character, whitespace or operator
PLACEHOLDER_MARK = '\ue000'
PLACEHOLDER = re.compile(PLACEHOLDER_MARK + r'(\d+)' + PLACEHOLDER_MARK)


def shield(text, kinds=LITERALS):
    """Returns the text with placeholders and a placeholder -> literal dict."""
    literals = {}
    out = []
    for span in scan(text):
        if span.kind in kinds:
            key = f'{PLACEHOLDER_MARK}{len(literals)}{PLACEHOLDER_MARK}'
            literals[key] = span.text
            out.append(key)
        else:
            out.append(span.text)
    return ''.join(out), literals


def unshield(text, literals):
    if not literals:
        return text
    return PLACEHOLDER.sub(lambda m: literals.get(m.group(0), m.group(0)), text)
