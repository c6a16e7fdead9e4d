from dataclasses import dataclass, field
from typing import Any, FrozenSet, List, Mapping


DEFAULT_STOP_WORDS = frozenset(
    {"what", "is", "how", "why", "explain", "tell", "me", "about", "the", "a", "an"}
)


# -----------------------------------------------------------------------------
# KEYWORD EXTRACTION
# Purpose: reduce a learning query to a handful of significant terms.
# Plain whitespace split + stop-word filter, no ranking and no dedup.
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class KeywordConfig:
    """Tunable knobs for keyword extraction."""

    stop_words: FrozenSet[str] = field(default=DEFAULT_STOP_WORDS)
    max_keywords: int = 5
    min_word_length: int = 3

    def __post_init__(self):
        if self.max_keywords < 0:
            raise ValueError("max_keywords must be >= 0")
        if self.min_word_length < 1:
            raise ValueError("min_word_length must be >= 1")
        # Normalize so callers can pass any iterable of words
        object.__setattr__(
            self, "stop_words", frozenset(w.lower() for w in self.stop_words)
        )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "KeywordConfig":
        """
        Build a config from a mapping of recognized options.
        Accepts both snake_case and camelCase names:
        stop_words/stopWords, max_keywords/maxKeywords, min_word_length/minWordLength.

        Example:
            KeywordConfig.from_mapping({"maxKeywords": 3})
        """
        aliases = {
            "stopWords": "stop_words",
            "maxKeywords": "max_keywords",
            "minWordLength": "min_word_length",
        }
        known = {"stop_words", "max_keywords", "min_word_length"}

        kwargs = {}
        for key, value in options.items():
            name = aliases.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown keyword option: {key}")
            kwargs[name] = value

        if "stop_words" in kwargs:
            kwargs["stop_words"] = frozenset(kwargs["stop_words"])
        return cls(**kwargs)


DEFAULT_KEYWORD_CONFIG = KeywordConfig()


def extract_keywords(
    query: str, config: KeywordConfig = DEFAULT_KEYWORD_CONFIG
) -> List[str]:
    """
    Return the first significant words of a query, in order of appearance.

    Args:
        query: Raw or sanitized query text.
        config: Stop words and length limits to apply.

    Returns:
        At most config.max_keywords lower-cased words.

    Example:
        extract_keywords("What is Python programming")  # -> ["python", "programming"]
    """
    keywords = [
        word
        for word in query.lower().split()
        if len(word) >= config.min_word_length and word not in config.stop_words
    ]
    return keywords[: config.max_keywords]
