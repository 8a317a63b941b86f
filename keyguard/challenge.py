"""
Keyguard Challenge Word Selector

When automation is suspected the user is asked to type an extra word so that
fresh keystroke timing can be collected. The word is picked from a static list
by hashing the username, so the same user always gets the same word.
"""

import hashlib
import logging
import os
from functools import lru_cache
from typing import Optional, Sequence, Tuple


logger = logging.getLogger(__name__)


DEFAULT_TYPING_CHALLENGE = "Ghost town#34"

DEFAULT_WORDLIST_PATH = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), "assets", "wordlist.txt"
)


@lru_cache(maxsize=8)
def load_word_list(path: Optional[str] = None) -> Tuple[str, ...]:
    """
    Load a newline-delimited word list once per path.

    Lines are stripped and blank lines skipped. A missing or unreadable file
    yields an empty tuple; the selector then falls back to
    DEFAULT_TYPING_CHALLENGE.
    """
    path = path or DEFAULT_WORDLIST_PATH
    try:
        with open(path, "r", encoding="utf-8") as f:
            words = tuple(line.strip() for line in f if line.strip())
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Challenge word list unavailable ({path}): {e}")
        return ()

    logger.info(f"Loaded {len(words)} challenge words from {path}")
    return words


def compute_word_index(username: str, limit: int) -> int:
    """
    Index of the challenge word for a username.

    SHA-256 over the UTF-8 bytes of the username, read as an unsigned
    big-endian integer, modulo limit.

    Raises:
        ValueError: If limit is not positive.
    """
    if limit <= 0:
        raise ValueError(f"Word list size must be positive, got {limit}")
    digest = hashlib.sha256(username.encode("utf-8")).digest()
    return int.from_bytes(digest, byteorder="big", signed=False) % limit


class ChallengeWordSelector:
    """
    Deterministic username -> challenge word mapping over an immutable list.

    Never raises: any failure returns the fallback word.
    """

    def __init__(
        self,
        words: Optional[Sequence[str]] = None,
        fallback: str = DEFAULT_TYPING_CHALLENGE,
    ) -> None:
        self.words: Tuple[str, ...] = tuple(words) if words is not None else load_word_list()
        self.fallback = fallback

    def select(self, username: str) -> str:
        """Pick the challenge word for username."""
        try:
            return self.words[compute_word_index(username, len(self.words))]
        except (ValueError, TypeError, AttributeError, UnicodeError) as e:
            logger.warning(f"Falling back to default challenge word: {e}")
            return self.fallback
