"""Case-style transformation of variant identifiers.

A variant without an explicit serialization derives its string form from
its identifier and the enum's ``serialize_all`` style:

    >>> render("DarkBlack", CaseStyle.SNAKE_CASE)
    'dark_black'
    >>> render("HTTPServer", CaseStyle.KEBAB_CASE)
    'http-server'

Word splitting:
    - ``_`` and ``-`` separate words and are dropped
    - a lowercase letter followed by an uppercase letter starts a new word
    - a digit next to a letter (either order) starts a new word
    - a run of uppercase letters is one word, except that the last
      letter of the run starts a new word when a lowercase letter
      follows it (``HTTPServer`` -> ``HTTP`` + ``Server``)

Words are lower-cased before the style applies its separator and
capitalization. The transformation is total and deterministic.

Python 3.13+. Zero external dependencies.
"""

from enum import StrEnum

__all__ = ["CaseStyle", "render", "split_words"]

_WORD_SEPARATORS = frozenset("_- \t")


class CaseStyle(StrEnum):
    """Closed set of case styles accepted by ``serialize_all``.

    Member values are the canonical spellings. ``CaseStyle.parse`` also
    accepts the snake_case aliases (``shouty_snake_case``, ``title_case``...).
    """

    LOWERCASE = "lowercase"
    """darkblack"""

    UPPERCASE = "UPPERCASE"
    """DARKBLACK"""

    SNAKE_CASE = "snake_case"
    """dark_black"""

    SCREAMING_SNAKE_CASE = "SCREAMING_SNAKE_CASE"
    """DARK_BLACK"""

    KEBAB_CASE = "kebab-case"
    """dark-black"""

    SCREAMING_KEBAB_CASE = "SCREAMING-KEBAB-CASE"
    """DARK-BLACK"""

    CAMEL_CASE = "camelCase"
    """darkBlack"""

    PASCAL_CASE = "PascalCase"
    """DarkBlack"""

    TITLE_CASE = "Title Case"
    """Dark Black"""

    SENTENCE_CASE = "Sentence case"
    """Dark black"""

    TRAIN_CASE = "Train-Case"
    """Dark-Black"""

    @classmethod
    def parse(cls, text: str) -> "CaseStyle | None":
        """Resolve a canonical spelling or alias; None if unknown.

        Example:
            >>> CaseStyle.parse("shouty_snake_case")
            <CaseStyle.SCREAMING_SNAKE_CASE: 'SCREAMING_SNAKE_CASE'>
        """
        return _ALIASES.get(text)

    @classmethod
    def spellings(cls) -> tuple[str, ...]:
        """Every accepted spelling, canonical names first."""
        return tuple(_ALIASES)


_ALIASES: dict[str, CaseStyle] = {style.value: style for style in CaseStyle}
_ALIASES.update(
    {
        "lower": CaseStyle.LOWERCASE,
        "upper": CaseStyle.UPPERCASE,
        "shouty_snake_case": CaseStyle.SCREAMING_SNAKE_CASE,
        "kebab_case": CaseStyle.KEBAB_CASE,
        "shouty_kebab_case": CaseStyle.SCREAMING_KEBAB_CASE,
        "camel_case": CaseStyle.CAMEL_CASE,
        "pascal_case": CaseStyle.PASCAL_CASE,
        "title_case": CaseStyle.TITLE_CASE,
        "sentence_case": CaseStyle.SENTENCE_CASE,
        "train_case": CaseStyle.TRAIN_CASE,
    }
)


def _starts_word(prev: str, ch: str, nxt: str | None) -> bool:
    """True if ``ch`` begins a new word given its neighbours."""
    if prev.islower() and ch.isupper():
        return True
    if prev.isdigit() != ch.isdigit():
        return True
    # Last capital of an acronym run belongs to the next word
    return prev.isupper() and ch.isupper() and nxt is not None and nxt.islower()


def split_words(identifier: str) -> list[str]:
    """Split an identifier into lower-cased words.

    Example:
        >>> split_words("HTTPServer2Go")
        ['http', 'server', '2', 'go']
    """
    words: list[str] = []
    current: list[str] = []

    for i, ch in enumerate(identifier):
        if ch in _WORD_SEPARATORS:
            if current:
                words.append("".join(current))
                current = []
            continue
        nxt = identifier[i + 1] if i + 1 < len(identifier) else None
        if current and _starts_word(current[-1], ch, nxt):
            words.append("".join(current))
            current = []
        current.append(ch)

    if current:
        words.append("".join(current))
    return [word.lower() for word in words]


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def render(identifier: str, style: CaseStyle) -> str:
    """Render ``identifier`` in ``style``.

    Args:
        identifier: Variant identifier as declared
        style: Target case style

    Returns:
        Transformed name; ``""`` for an empty identifier
    """
    words = split_words(identifier)
    if not words:
        return ""

    match style:
        case CaseStyle.LOWERCASE:
            return "".join(words)
        case CaseStyle.UPPERCASE:
            return "".join(words).upper()
        case CaseStyle.SNAKE_CASE:
            return "_".join(words)
        case CaseStyle.SCREAMING_SNAKE_CASE:
            return "_".join(words).upper()
        case CaseStyle.KEBAB_CASE:
            return "-".join(words)
        case CaseStyle.SCREAMING_KEBAB_CASE:
            return "-".join(words).upper()
        case CaseStyle.CAMEL_CASE:
            return words[0] + "".join(_capitalize(w) for w in words[1:])
        case CaseStyle.PASCAL_CASE:
            return "".join(_capitalize(w) for w in words)
        case CaseStyle.TITLE_CASE:
            return " ".join(_capitalize(w) for w in words)
        case CaseStyle.SENTENCE_CASE:
            return " ".join([_capitalize(words[0]), *words[1:]])
        case CaseStyle.TRAIN_CASE:
            return "-".join(_capitalize(w) for w in words)
