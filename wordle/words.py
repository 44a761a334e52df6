"""
Word list used both to pick the daily secret and to accept guesses.

A custom list can be loaded from a text file (one word per line); anything that
is not a clean lowercase word of the right length is dropped.
"""

from pathlib import Path
from typing import Iterable, Tuple

from .engine import normalize_word

WORD_LENGTH = 5
DEFAULT_WORD = "hello"

BUILTIN_WORDS: Tuple[str, ...] = (
    "about", "above", "abuse", "actor", "acute", "adapt", "admit", "adopt", "adult", "after",
    "again", "agent", "agree", "ahead", "alarm", "album", "alert", "alike", "alive", "allow",
    "alone", "along", "alter", "among", "anger", "angle", "angry", "apart", "apple", "apply",
    "arena", "argue", "arise", "array", "aside", "asset", "audio", "audit", "avoid", "award",
    "aware", "badly", "baker", "basic", "basis", "beach", "begin", "being", "below", "bench",
    "birth", "black", "blade", "blame", "blank", "blind", "block", "blood", "board", "boost",
    "booth", "bound", "brain", "brand", "bread", "break", "breed", "brief", "bring", "broad",
    "brown", "brush", "build", "built", "buyer", "cable", "candy", "cargo", "carry", "catch",
    "cause", "chain", "chair", "chaos", "charm", "chart", "chase", "cheap", "check", "chess",
    "chest", "chief", "child", "china", "chose", "civil", "claim", "class", "clean", "clear",
    "click", "clock", "close", "cloud", "coach", "coast", "could", "count", "court", "cover",
    "craft", "crane", "crash", "cream", "crime", "cross", "crowd", "crown", "curve", "cycle",
    "daily", "dance", "dated", "dealt", "death", "debut", "delay", "depth", "doubt", "dozen",
    "draft", "drama", "drank", "drawn", "dream", "dress", "drink", "drive", "drove", "dying",
    "eager", "early", "earth", "eight", "elite", "empty", "enemy", "enjoy", "enter", "entry",
    "equal", "erase", "error", "event", "every", "exact", "exist", "extra", "faith", "false",
    "fault", "fiber", "field", "fifth", "fifty", "fight", "final", "first", "flame", "fleet",
    "floor", "fluid", "focus", "force", "forth", "forty", "forum", "found", "frame", "fresh",
    "front", "fruit", "fully", "funny", "giant", "given", "glass", "globe", "glory", "grace",
    "grade", "grand", "grant", "grass", "great", "green", "gross", "group", "grown", "guard",
    "guess", "guest", "guide", "happy", "heart", "heavy", "hello", "hence", "horse", "hotel",
    "house", "human", "ideal", "image", "index", "inner", "input", "issue", "joint", "judge",
    "knife", "known", "label", "large", "laser", "later", "laugh", "layer", "learn", "lease",
    "least", "leave", "legal", "lemon", "level", "light", "limit", "local", "logic", "loose",
    "lower", "lucky", "lunch", "major", "maker", "march", "match", "maybe", "mayor", "meant",
    "media", "metal", "might", "minor", "mixed", "model", "money", "month", "moral", "motor",
    "mount", "mouse", "mouth", "movie", "music", "needs", "never", "newly", "night", "noise",
    "north", "noted", "novel", "nurse", "ocean", "offer", "often", "order", "other", "ought",
    "paint", "panel", "paper", "party", "peace", "phase", "phone", "photo", "piano", "piece",
    "pilot", "pitch", "place", "plain", "plane", "plant", "plate", "point", "pound", "power",
    "press", "price", "pride", "prime", "print", "prior", "prize", "proof", "proud", "prove",
    "queen", "quick", "quiet", "quite", "radio", "raise", "range", "rapid", "ratio", "reach",
    "ready", "refer", "relax", "reply", "right", "rival", "river", "robot", "rough", "round",
    "route", "royal", "rural", "scale", "scene", "scope", "score", "sense", "serve", "seven",
    "shall", "shape", "share", "sharp", "sheet", "shelf", "shell", "shift", "shirt", "shock",
    "shoot", "short", "shown", "sight", "since", "sixth", "sixty", "skill", "sleep", "slide",
    "small", "smart", "smile", "smoke", "solid", "solve", "sorry", "sound", "south", "space",
    "spare", "speak", "speed", "spend", "spent", "split", "spoke", "sport", "staff", "stage",
    "stake", "stand", "start", "state", "steam", "steel", "stick", "still", "stock", "stone",
    "stood", "store", "storm", "story", "strip", "stuck", "study", "stuff", "style", "sugar",
    "suite", "super", "sweet", "table", "taken", "taste", "teach", "teeth", "thank", "theme",
    "there", "thick", "thing", "think", "third", "those", "three", "threw", "throw", "tight",
    "tired", "title", "today", "topic", "total", "touch", "tough", "tower", "track", "trade",
    "train", "treat", "trend", "trial", "tried", "truck", "truly", "trust", "truth", "twice",
    "under", "union", "unity", "until", "upper", "upset", "urban", "usage", "usual", "valid",
    "value", "video", "virus", "visit", "vital", "voice", "waste", "watch", "water", "wheel",
    "where", "which", "while", "white", "whole", "whose", "woman", "world", "worry", "worse",
    "worst", "worth", "would", "wound", "write", "wrong", "wrote", "young", "youth",
)


class WordList:
    """Ordered, de-duplicated set of same-length words."""

    def __init__(self, words: Iterable[str], length: int = WORD_LENGTH) -> None:
        seen = set()
        ordered = []
        for raw in words:
            word = normalize_word(raw.strip())
            if len(word) != length or not word.isalpha() or word in seen:
                continue
            seen.add(word)
            ordered.append(word)

        self.length = length
        self.words: Tuple[str, ...] = tuple(ordered)
        self._lookup = frozenset(ordered)

    def __contains__(self, word: object) -> bool:
        return word in self._lookup

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self):
        return iter(self.words)


def load_word_list(path: Path | str, length: int = WORD_LENGTH) -> WordList:
    """Read a word file. Raises ValueError if nothing usable is in it."""
    with Path(path).open("r", encoding="utf-8") as f:
        word_list = WordList((line for line in f if line.strip()), length=length)
    if not len(word_list):
        raise ValueError(f"No {length}-letter words found in {path}")
    return word_list


def default_word_list() -> WordList:
    return WordList(BUILTIN_WORDS)
