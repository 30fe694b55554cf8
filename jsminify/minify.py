import re

from jsminify.lexer import BLOCK_COMMENT, LINE_COMMENT, scan, shield, unshield
from jsminify.rename import shorten_variable_names

LICENSE = re.compile(r'/\*!.*?\*/', re.DOTALL)

OPERATORS = '+-*/=<>!?:&|;,'
SEMICOLONS_OR_BRACKETS = re.compile(r';{2,}|[()\[\]{}]')
# identifier characters on both sides, or `+ +` / `- -`, must not be glued
LINE_GLUE = re.compile(r'(?<=[\w$])\n(?=[\w$])|(?<=\+)\n(?=\+)|(?<=-)\n(?=-)')


def _operator_pattern(op):
    escaped = re.escape(op)
    if op in '+-':
        # `a + +b` must not turn into `a++b`
        return re.compile(rf'(?<!{escaped})\s*{escaped}\s*(?!{escaped})')
    return re.compile(rf'\s*{escaped}\s*')


OPERATOR_PATTERNS = [(op, _operator_pattern(op)) for op in OPERATORS]


def _is_word(ch):
    return ch.isalnum() or ch in '_$'


def extract_license(code, preserve_license):
    # returns (rest, license); license keeps a trailing newline or is empty
    if not preserve_license:
        return code, ''
    m = LICENSE.match(code)
    if m is None:
        return code, ''
    return code[m.end():], m.group(0) + '\n'


def strip_comments(code):
    spans = scan(code)
    out = []
    for i, span in enumerate(spans):
        if span.kind == LINE_COMMENT:
            continue
        if span.kind == BLOCK_COMMENT:
            before = out[-1][-1:] if out else ''
            after = spans[i + 1].text[:1] if i + 1 < len(spans) else ''
            if before and after and _is_word(before) and _is_word(after):
                out.append(' ')
            continue
        out.append(span.text)
    return ''.join(out)


def normalize_whitespace(code):
    code = '\n'.join(line.strip() for line in code.split('\n'))
    code = re.sub(r'\s{2,}', ' ', code)
    code = LINE_GLUE.sub(' ', code)
    return re.sub(r'[\r\n]+', '', code)


def collapse_semicolons(code):
    # runs of ; collapse except inside parentheses, where for(;;) lives
    stack = []

    def repl(m):
        tok = m.group(0)
        if tok in '([{':
            stack.append(tok)
        elif tok in ')]}':
            if stack:
                stack.pop()
        elif not stack or stack[-1] != '(':
            return ';'
        return tok

    return SEMICOLONS_OR_BRACKETS.sub(repl, code)


def compact_punctuation(code):
    for op, pattern in OPERATOR_PATTERNS:
        code = pattern.sub(op, code)
    code = collapse_semicolons(code)
    code = re.sub(r'(?<![\w$])function\s+(?=[\w$])', 'function ', code)
    code = re.sub(r'(?<![\w$])function\s+', 'function', code)
    code = re.sub(r',\s+', ',', code)
    return re.sub(r'\s*([{}\[\]()])\s*', r'\1', code)


# stateless per call; debug is an optional stream for per-stage trace lines
class Minifier:
    def __init__(self, preserve_license=False, shorten_vars=False, debug=None):
        self.preserve_license = preserve_license
        self.shorten_vars = shorten_vars
        self.debug = debug

    def _trace(self, stage, code):
        if self.debug is not None:
            self.debug.write(f'{stage}: {len(code)} chars\n')

    def minify(self, source):
        self._trace('input', source)
        code, license = extract_license(source, self.preserve_license)
        self._trace('license', code)
        code = strip_comments(code)
        self._trace('comments', code)

        # string, template and regex literals sit out the character-level passes
        code, literals = shield(code)
        code = normalize_whitespace(code)
        self._trace('whitespace', code)
        code = compact_punctuation(code)
        code = unshield(code, literals)
        self._trace('punctuation', code)

        if self.shorten_vars:
            code = shorten_variable_names(code)
            self._trace('rename', code)
        return license + code


def minify(source, preserve_license=False, shorten_vars=False, debug=None):
    return Minifier(preserve_license, shorten_vars, debug).minify(source)
