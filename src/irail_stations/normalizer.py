"""Normalization of station names and queries into canonical token forms.

The pipeline strips bracketed content, folds accents and ligatures, splits
slash-separated alias segments, turns all punctuation into separators and
finally rewrites tokens with a small, context-scoped synonym table.
"""

import re
import unicodedata
from dataclasses import dataclass

from .models import CanonicalForm

_BRACKETS = re.compile(r"\([^()]*\)")
_SEPARATORS = re.compile(r"[\W_]+")

# Letters NFKD leaves intact
_LIGATURES = str.maketrans({
    "œ": "oe",
    "Œ": "oe",
    "æ": "ae",
    "Æ": "ae",
    "ø": "o",
    "Ø": "o",
    "ł": "l",
    "Ł": "l",
    "đ": "d",
    "Đ": "d",
})


@dataclass(frozen=True)
class SynonymRule:
    """Rewrite of one token, optionally restricted by its neighbours.

    ``replacement`` of None deletes the token. ``after`` requires the
    previous (already rewritten) token to be one of the given tokens;
    ``before`` does the same for the next token. ``needs_next`` only fires
    the rule when some token follows.
    """

    token: str
    replacement: str | None
    after: frozenset[str] | None = None
    before: frozenset[str] | None = None
    needs_next: bool = False

    def applies(self, previous: str | None, following: str | None) -> bool:
        if self.after is not None and previous not in self.after:
            return False
        if self.before is not None and following not in self.before:
            return False
        if self.needs_next and following is None:
            return False
        return True


SYNONYM_RULES: tuple[SynonymRule, ...] = (
    # "st", "st.", "st-" and "st.-" all end up as the token "st"
    SynonymRule("st", "saint"),
    # Frankfurt am Main: "am" only goes in front of "main", and "main" only
    # goes between "frankfurt" and a further token such as "flughafen".
    SynonymRule("am", None, before=frozenset({"main"})),
    SynonymRule("main", None, after=frozenset({"frankfurt"}), needs_next=True),
)

_RULES_BY_TOKEN: dict[str, tuple[SynonymRule, ...]] = {}
for _rule in SYNONYM_RULES:
    _RULES_BY_TOKEN[_rule.token] = _RULES_BY_TOKEN.get(_rule.token, ()) + (_rule,)


def strip_brackets(text: str) -> str:
    """Remove parenthesized substrings, innermost first."""
    previous = None
    while previous != text:
        previous = text
        text = _BRACKETS.sub(" ", text)
    return text


def _strip_accents(text: str) -> str:
    """Remove accents/diacritics from text via NFKD decomposition."""
    nfkd = unicodedata.normalize("NFKD", text)
    return "".join(c for c in nfkd if not unicodedata.combining(c))


def fold(text: str) -> str:
    """Remove accents and ligatures, then casefold."""
    # casefold can reintroduce decomposable characters, hence the second pass
    return _strip_accents(_strip_accents(text.translate(_LIGATURES)).casefold())


def tokenize(segment: str) -> list[str]:
    """Split on anything that is not a letter or a digit."""
    return [token for token in _SEPARATORS.split(segment) if token]


def _rewrite_once(tokens: list[str], deletions: bool) -> list[str]:
    result: list[str] = []
    for i, token in enumerate(tokens):
        following = tokens[i + 1] if i + 1 < len(tokens) else None
        previous = result[-1] if result else None
        for rule in _RULES_BY_TOKEN.get(token, ()):
            if rule.replacement is None and not deletions:
                continue
            if rule.applies(previous, following):
                token = rule.replacement
                break
        if token is not None:
            result.append(token)
    return result


def apply_synonyms(tokens: list[str], deletions: bool = True) -> list[str]:
    """Apply the synonym rules until the token list no longer changes.

    With ``deletions`` off only replacement rules run, which keeps optional
    tokens such as "am" and "main" in place.
    """
    while True:
        rewritten = _rewrite_once(tokens, deletions)
        if rewritten == tokens:
            return rewritten
        tokens = rewritten


def _segment_tokens(text: str | None) -> list[str]:
    if not text:
        return []
    tokens: list[str] = []
    for segment in fold(strip_brackets(text)).split("/"):
        tokens.extend(tokenize(segment))
    return tokens


def normalize(text: str | None) -> CanonicalForm:
    """Turn any string into its CanonicalForm. Never raises.

    Slash-separated segments are tokenized independently and concatenated in
    input order, so the token set covers every segment. Synonym rules run on
    the concatenated list; the rendered form carries no segment boundaries
    and must normalize to the same tokens.
    """
    return CanonicalForm(tokens=tuple(apply_synonyms(_segment_tokens(text))))


def index_forms(text: str | None) -> list[CanonicalForm]:
    """Forms a station name variant is indexed under.

    The CanonicalForm comes first. When a deletion rule dropped tokens, the
    form keeping them follows, so partially typed names such as
    "frankfurt am ma" still find "Frankfurt am Main Hbf".
    """
    form = normalize(text)
    if not form:
        return []

    full = CanonicalForm(tokens=tuple(apply_synonyms(_segment_tokens(text), deletions=False)))
    return [form] if full == form else [form, full]
