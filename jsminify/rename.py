import re
import string

from jsminify.lexer import REGEX, STRING, shield, unshield

ALPHABET = string.ascii_lowercase

DECLARATION = re.compile(r'(?<![\w$.])(?:var|let|const)\s+([A-Za-z_$][\w$]*)')
IDENTIFIER = re.compile(r'(?<![\w$])[A-Za-z_$][\w$]*')


def short_name(n):
    """a, b, ... z, a1, b1, ... z1, a2, ..."""
    letter = ALPHABET[n % len(ALPHABET)]
    suffix = n // len(ALPHABET)
    return f'{letter}{suffix}' if suffix else letter


def short_names():
    counter = 0
    while True:
        yield short_name(counter)
        counter += 1


def build_rename_map(code):
    # names already used by other identifiers are skipped
    declared = list(dict.fromkeys(m.group(1) for m in DECLARATION.finditer(code)))
    taken = set(IDENTIFIER.findall(code)).difference(declared)
    names = short_names()
    renames = {}
    for name in declared:
        short = next(names)
        while short in taken:
            short = next(names)
        renames[name] = short
    return renames


def rename_vars(code, renames):
    if not renames:
        return code
    # one pass over every name at once; `b->a` followed by `a->b` would chain
    alternatives = '|'.join(re.escape(k) for k in sorted(renames, key=len, reverse=True))
    pattern = re.compile(rf'(?<![\w$])(?:{alternatives})(?![\w$])')
    return pattern.sub(lambda m: renames[m.group(0)], code)


def shorten_variable_names(code):
    code, strings = shield(code, kinds=(STRING, REGEX))
    code = rename_vars(code, build_rename_map(code))
    return unshield(code, strings)
