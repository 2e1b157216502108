# core/moderation.py
"""
Term based content moderation.

Text is normalised (lower-cased, accents stripped, leet-speak folded back to
letters, punctuation turned into spaces) and then matched against the term
rules configured in ``settings.MODERATION_TERMS_PATH``.
"""
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple
import json
import logging
import re
import unicodedata

from django.conf import settings

from .exceptions import ModerationRejected

logger = logging.getLogger(__name__)

CONTEXTS = ("profile", "upload", "message", "comment")

LEET_MAP = {
    "0": "o",
    "1": "i",
    "3": "e",
    "4": "a",
    "5": "s",
    "6": "g",
    "7": "t",
    "8": "b",
    "9": "g",
    "@": "a",
    "$": "s",
    "!": "i",
}

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class CompiledRule:
    label: str
    reason: str
    pattern: re.Pattern


@dataclass(frozen=True)
class ModerationIssue:
    field: str
    snippet: str
    reason: str


def normalize(value: str) -> str:
    decomposed = unicodedata.normalize("NFD", value.lower())
    chars = []
    for char in decomposed:
        if unicodedata.combining(char):
            continue
        if "a" <= char <= "z":
            chars.append(char)
        elif char in LEET_MAP:
            chars.append(LEET_MAP[char])
        else:
            chars.append(" ")
    return _WHITESPACE.sub(" ", "".join(chars)).strip()


def term_to_pattern(term: str) -> Optional[re.Pattern]:
    """Letters may repeat and be split by spaces; words need whitespace between them."""
    normalized = normalize(term)
    if not normalized:
        return None
    words = [
        r"\s*".join(f"{re.escape(char)}+" for char in word)
        for word in normalized.split(" ")
        if word
    ]
    body = r"\s+".join(words)
    return re.compile(rf"(^|\s){body}(?=\s|$)", re.IGNORECASE)


def compile_rules(rules: Iterable[dict]) -> List[CompiledRule]:
    compiled = []
    for rule in rules:
        label = rule.get("label", "")
        reason = rule.get("reason", "Content needs another pass before sharing")
        for term in rule.get("terms", []):
            pattern = term_to_pattern(term)
            if pattern is not None:
                compiled.append(CompiledRule(label=label, reason=reason, pattern=pattern))
    return compiled


@lru_cache(maxsize=1)
def get_rules() -> Tuple[CompiledRule, ...]:
    path = getattr(settings, "MODERATION_TERMS_PATH", None)
    try:
        with open(path, "r", encoding="utf-8") as handle:
            config = json.load(handle)
    except (OSError, TypeError, ValueError) as e:
        logger.warning(
            "Unable to load moderation terms from %s; moderation disabled: %s", path, e
        )
        return ()
    rules = tuple(compile_rules(config.get("rules", [])))
    logger.info("Loaded %d moderation patterns from %s", len(rules), path)
    return rules


def scan_field(label: str, text: str, rules: Iterable[CompiledRule]) -> List[ModerationIssue]:
    normalized = normalize(text)
    if not normalized:
        return []
    return [
        ModerationIssue(field=label, snippet=text, reason=rule.reason)
        for rule in rules
        if rule.pattern.search(normalized)
    ]


def review(fields: Iterable[Tuple[str, str]], rules=None) -> List[ModerationIssue]:
    rules = get_rules() if rules is None else rules
    issues = []
    for label, text in fields:
        issues.extend(scan_field(label, text, rules))
    return issues


def enforce_moderation(context: str, fields: Iterable[Tuple[str, Optional[str]]]) -> None:
    """
    Reject content that violates a term rule.

    ``fields`` is a sequence of ``(label, text)`` pairs. Blank fields are
    ignored. Raises ``ModerationRejected`` naming the first violation.
    """
    if context not in CONTEXTS:
        raise ValueError(f"Unknown moderation context: {context}")

    sanitized = [(label, (text or "").strip()) for label, text in fields]
    sanitized = [(label, text) for label, text in sanitized if text]
    if not sanitized:
        return

    issues = review(sanitized)
    if issues:
        issue = issues[0]
        logger.info("Moderation rejected %s content in field %s", context, issue.field)
        raise ModerationRejected(f"{issue.reason} ({issue.field}).")
