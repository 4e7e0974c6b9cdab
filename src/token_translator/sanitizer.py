"""Key segment sanitizer for translation key paths."""

import re
from typing import FrozenSet
from .types import SanitizedKey


# Identifiers unsafe as a final key segment for the code generators that
# consume the developer export. Changing this table changes suggested fixes.
RESERVED_KEYWORDS: FrozenSet[str] = frozenset({
    # Java
    'abstract', 'assert', 'boolean', 'break', 'byte', 'case', 'catch', 'char',
    'class', 'const', 'continue', 'default', 'do', 'double', 'else', 'enum',
    'extends', 'final', 'finally', 'float', 'for', 'goto', 'if', 'implements',
    'import', 'instanceof', 'int', 'interface', 'long', 'native', 'new', 'null',
    'package', 'private', 'protected', 'public', 'return', 'short', 'static',
    'strictfp', 'super', 'switch', 'synchronized', 'this', 'throw', 'throws',
    'transient', 'try', 'void', 'volatile', 'while',
    # Kotlin
    'as', 'fun', 'in', 'is', 'object', 'typealias', 'typeof', 'val', 'var',
    'when', 'companion', 'data', 'sealed', 'internal', 'open', 'lateinit',
    'inline', 'crossinline', 'noinline', 'reified', 'suspend', 'tailrec',
    'vararg', 'where', 'it', 'out', 'dynamic', 'actual', 'expect',
    # Swift
    'let', 'func', 'self', 'true', 'false', 'nil', 'inout', 'init', 'deinit',
    'subscript', 'convenience', 'required', 'override', 'mutating', 'lazy',
    'weak', 'unowned', 'optional', 'prefix', 'postfix', 'infix', 'operator',
    'fileprivate', 'rethrows', 'repeat', 'guard', 'defer', 'fallthrough',
    'associatedtype', 'protocol', 'struct', 'extension', 'indirect', 'get', 'set',
    'willset', 'didset', 'any', 'some',
    # C
    'auto', 'register', 'extern', 'union', 'signed', 'unsigned', 'sizeof', 'typedef',
    # Android resource names and overloaded identifiers
    'id', 'string', 'layout', 'color', 'style', 'drawable', 'menu', 'raw', 'xml',
    'mipmap', 'name', 'anim', 'animator', 'array', 'attr', 'bool', 'dimen',
    'fraction', 'integer', 'interpolator', 'plurals', 'values', 'font', 'unit',
    'type', 'value', 'key', 'index', 'item', 'list', 'map', 'result', 'error',
})

INVALID_PREFIX = "fix_"
RESERVED_PREFIX = "common_fix_"

# ECMAScript whitespace and line terminators. Python's \s differs: it adds
# \x1c-\x1f and \x85 and lacks \ufeff, which would change suggested fixes.
_WHITESPACE_RE = re.compile(
    r'[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+'
)
_INVALID_CHARS_RE = re.compile(r'[^a-z0-9_]')
_UNDERSCORE_RUN_RE = re.compile(r'_+')


def sanitize_key(segment: str) -> SanitizedKey:
    """
    Sanitize a single key segment into a safe identifier.

    The segment is lowercased, whitespace runs become underscores, characters
    outside ``[a-z0-9_]`` are dropped, underscore runs are collapsed and
    leading/trailing underscores trimmed. Empty or digit-leading results get
    the ``fix_`` prefix; reserved identifiers get the ``common_fix_`` prefix.

    Args:
        segment: Raw key segment

    Returns:
        SanitizedKey with the result and whether it differs from the input
    """
    result = segment.lower()
    result = _WHITESPACE_RE.sub('_', result)
    result = _INVALID_CHARS_RE.sub('', result)
    result = _UNDERSCORE_RUN_RE.sub('_', result)
    result = result.strip('_')

    if not result or result[0].isdigit():
        result = INVALID_PREFIX + result

    if result in RESERVED_KEYWORDS:
        result = RESERVED_PREFIX + result

    return SanitizedKey(result=result, changed=segment != result)
