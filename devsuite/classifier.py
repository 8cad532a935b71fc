"""
Keyword-rule label suggestions for issue and pull request text.

Matching is a case-insensitive substring test against ``"{title} {body}"``,
so the keyword "test" also fires on "testing" or "latest".
"""

import re
from typing import Any, Iterable, NamedTuple

NEEDS_TRIAGE = "needs-triage"

MIN_CONFIDENCE = 60
MAX_CONFIDENCE = 95
PHRASE_BONUS = 15

SIGNAL_WORDS_PATTERN = re.compile(
    r"\b(bug|feature|fix|add|improve|update|error|issue|enhancement|documentation)\b"
)
BONUS_PHRASES = ("bug report", "feature request")


class LabelRule(NamedTuple):
    """A label and the keywords that trigger it."""

    label: str
    keywords: tuple[str, ...]
    active: bool = True
    description: str = ""
    color: str = ""

    def matches(self, content: str) -> bool:
        """Return True if any keyword occurs in already lower-cased content."""
        return any(keyword.lower() in content for keyword in self.keywords if keyword)


class RuleSet(NamedTuple):
    """An ordered, immutable table of label rules."""

    rules: tuple[LabelRule, ...]

    @property
    def labels(self) -> list[str]:
        return [rule.label for rule in self.rules]

    def get(self, label: str) -> LabelRule | None:
        for rule in self.rules:
            if rule.label == label:
                return rule
        return None

    def active_rules(self) -> list[LabelRule]:
        return [rule for rule in self.rules if rule.active]

    def _replace_rule(self, label: str, **changes: Any) -> "RuleSet":
        if self.get(label) is None:
            raise KeyError(f"Unknown label rule: {label}")
        return RuleSet(
            tuple(
                rule._replace(**changes) if rule.label == label else rule
                for rule in self.rules
            )
        )

    def toggle(self, label: str) -> "RuleSet":
        """Return a copy with the rule's active flag flipped."""
        rule = self.get(label)
        if rule is None:
            raise KeyError(f"Unknown label rule: {label}")
        return self._replace_rule(label, active=not rule.active)

    def set_active(self, label: str, active: bool) -> "RuleSet":
        return self._replace_rule(label, active=active)

    def with_keywords(self, label: str, keywords: Iterable[str]) -> "RuleSet":
        """Return a copy with the rule's keywords replaced."""
        return self._replace_rule(label, keywords=tuple(keywords))

    def with_rule(self, rule: LabelRule) -> "RuleSet":
        """Return a copy with ``rule`` replacing the same label, or appended."""
        if self.get(rule.label) is None:
            return RuleSet(self.rules + (rule,))
        return RuleSet(
            tuple(
                rule if existing.label == rule.label else existing
                for existing in self.rules
            )
        )


DEFAULT_LABEL_RULES = RuleSet(
    (
        LabelRule(
            "bug",
            ("bug", "error", "issue", "problem", "broken", "fix", "crash", "fail"),
            description="Issues reporting bugs or errors",
            color="#d73a49",
        ),
        LabelRule(
            "enhancement",
            ("feature", "enhancement", "improvement", "add", "new", "implement"),
            description="New feature requests",
            color="#28a745",
        ),
        LabelRule(
            "documentation",
            ("docs", "documentation", "readme", "guide", "tutorial", "example"),
            description="Documentation improvements",
            color="#0366d6",
        ),
        LabelRule(
            "performance",
            ("performance", "slow", "speed", "optimize", "memory", "cpu"),
            description="Performance-related issues",
            color="#f66a0a",
        ),
        LabelRule(
            "security",
            ("security", "vulnerability", "cve", "exploit", "auth", "permission"),
            description="Security vulnerabilities",
            color="#6f42c1",
        ),
        LabelRule(
            "ui/ux",
            ("ui", "ux", "design", "interface", "layout", "style", "css"),
            description="User interface and experience",
            color="#e99695",
        ),
        LabelRule(
            "testing",
            ("test", "testing", "spec", "unit", "integration", "e2e"),
            description="Tests and test infrastructure",
            color="#bfd4f2",
        ),
        LabelRule(
            "api",
            ("api", "endpoint", "rest", "graphql", "request", "response"),
            active=False,
            description="API surface changes",
            color="#1d76db",
        ),
    )
)


class Classification(NamedTuple):
    """Suggested labels for a piece of text."""

    labels: tuple[str, ...]
    confidence: int


class IssueSuggestion(NamedTuple):
    """Label suggestions for a fetched issue or pull request."""

    number: int | None
    title: str
    url: str
    current_labels: tuple[str, ...]
    suggested_labels: tuple[str, ...]
    confidence: int


def _content(title: str, body: str) -> str:
    return f"{title or ''} {body or ''}".lower()


def suggest_labels(
    title: str, body: str = "", rules: RuleSet | None = None
) -> tuple[str, ...]:
    """
    Suggest labels for the given text.

    Labels follow rule order and are never empty: when no active rule
    matches, ``("needs-triage",)`` is returned.
    """
    if rules is None:
        rules = DEFAULT_LABEL_RULES
    content = _content(title, body)

    labels: list[str] = []
    for rule in rules.active_rules():
        if rule.label not in labels and rule.matches(content):
            labels.append(rule.label)

    return tuple(labels) if labels else (NEEDS_TRIAGE,)


def calculate_confidence(title: str, body: str = "") -> int:
    """
    Heuristic 60-95 confidence from the density of signal words.

    Scoring:
    - ratio of whole-word signal matches to whitespace tokens, times 1000
    - +15 when "bug report" or "feature request" appears
    - clamped to [60, 95]
    """
    content = _content(title, body)
    total_words = max(1, len(content.split()))
    signal_words = len(SIGNAL_WORDS_PATTERN.findall(content))

    # Integer form of round-half-up(signal_words / total_words * 1000)
    confidence = (2000 * signal_words + total_words) // (2 * total_words)
    if any(phrase in content for phrase in BONUS_PHRASES):
        confidence += PHRASE_BONUS

    return min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, confidence))


def classify(
    title: str, body: str = "", rules: RuleSet | None = None
) -> Classification:
    """Suggest labels and a confidence score for an issue or pull request."""
    return Classification(
        labels=suggest_labels(title, body, rules),
        confidence=calculate_confidence(title, body),
    )


def classify_issues(
    issues: Iterable[dict[str, Any]], rules: RuleSet | None = None
) -> list[IssueSuggestion]:
    """
    Classify issues as returned by the GitHub REST API.

    Missing or null ``body`` values are treated as empty text.
    """
    suggestions = []
    for issue in issues:
        title = issue.get("title") or ""
        body = issue.get("body") or ""
        result = classify(title, body, rules)
        current = tuple(
            label.get("name", "") if isinstance(label, dict) else str(label)
            for label in issue.get("labels") or []
        )
        suggestions.append(
            IssueSuggestion(
                number=issue.get("number"),
                title=title,
                url=issue.get("html_url", ""),
                current_labels=current,
                suggested_labels=result.labels,
                confidence=result.confidence,
            )
        )
    return suggestions
