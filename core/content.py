"""Drill items and answer checking."""


class DrillItem:
    """A single drillable unit: a kana glyph, a kanji or a vocabulary word."""

    def __init__(self, char: str, meanings: list[str], kunyomi: list[str] = None,
                 onyomi: list[str] = None):
        if not meanings:
            raise ValueError(f"Drill item {char!r} needs at least one meaning")
        self.char = char
        self.meanings = list(meanings)
        self.kunyomi = list(kunyomi or [])
        self.onyomi = list(onyomi or [])

    def __repr__(self) -> str:
        return f"DrillItem({self.char!r}, {self.meanings!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, DrillItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict:
        return {
            'char': self.char,
            'meanings': self.meanings,
            'kunyomi': self.kunyomi,
            'onyomi': self.onyomi
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'DrillItem':
        return cls(
            data['char'],
            data['meanings'],
            kunyomi=data.get('kunyomi'),
            onyomi=data.get('onyomi')
        )


def item_key(item: DrillItem, reverse: bool = False) -> str:
    """Key shown to the learner: the character, or its first meaning in reverse mode."""
    return item.meanings[0] if reverse else item.char


def pool_keys(items: list[DrillItem], reverse: bool = False) -> list[str]:
    """Candidate pool for the selector, in item order.

    Items sharing a key (あ and ア both read "a" in reverse mode) give one
    pool entry.
    """
    return list(dict.fromkeys(item_key(item, reverse) for item in items))


def find_items(items: list[DrillItem], key: str, reverse: bool = False) -> list[DrillItem]:
    """Every item shown under key."""
    return [item for item in items if item_key(item, reverse) == key]


def accepted_answers(item: DrillItem, reverse: bool = False) -> list[str]:
    """All answers accepted for an item.

    Forward drills take any meaning or reading (only the first word of a
    reading, so "ひと つ" accepts "ひと"). Reverse drills want the character.
    """
    if reverse:
        return [item.char]
    answers = [m.lower() for m in item.meanings]
    for reading in item.kunyomi + item.onyomi:
        parts = reading.split()
        if parts:
            answers.append(parts[0].lower())
    return answers


def is_answer_correct(item: DrillItem, answer: str, reverse: bool = False) -> bool:
    answer = answer.strip().lower()
    if not answer:
        return False
    if reverse:
        return answer == item.char
    return answer in accepted_answers(item)
