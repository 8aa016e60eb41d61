import re

NON_WORD = re.compile(r"[^\w\s]")


def tokenize(text: str) -> list[str]:
    """Lower-case ``text`` and split it into word tokens.

    Anything that is not a letter, digit or underscore separates tokens.
    No stemming and no stop words: ``"Hand-Stand!"`` gives ``["hand", "stand"]``.
    """
    return NON_WORD.sub(" ", text.lower()).split()
