"""Domain models for dojo drills."""

import logging

from .config import MIN_SCORE
from .content import DrillItem, pool_keys, find_items, accepted_answers, is_answer_correct
from .selector import AdaptiveSelector, InvalidPoolError

logger = logging.getLogger(__name__)


class AnswerResult:
    """Outcome of one submitted answer."""

    def __init__(self, key: str, answer: str, correct: bool, expected: list[str],
                 next_key: str):
        self.key = key
        self.answer = answer
        self.correct = correct
        self.expected = expected
        self.next_key = next_key

    def to_dict(self) -> dict:
        return {
            'key': self.key,
            'answer': self.answer,
            'correct': self.correct,
            'expected': self.expected,
            'next_key': self.next_key
        }


class DrillSession:
    """One running drill over a fixed set of items.

    The selector is owned by the caller and may be shared by several drills of
    the same learner; the session only feeds it outcomes and asks it for the
    next character.
    """

    def __init__(self, items: list[DrillItem], selector: AdaptiveSelector, reverse: bool = False,
                 current_key: str = None):
        if not items:
            raise InvalidPoolError("Cannot start a drill without items")
        self.items = list(items)
        self.selector = selector
        self.reverse = reverse
        self.score = 0
        self.correct_answers = 0
        self.wrong_answers = 0
        self.skipped = 0
        self.wrong_streak = 0
        self.best_streak = 0
        self.streak = 0
        # Per-character outcome counts: {key: {correct: int, wrong: int}}
        self.character_scores = {}
        self.history = []  # Keys answered correctly, in order
        if current_key is not None and current_key in self.pool:
            # Resuming: the restored character is back on screen
            self.selector.mark_character_seen(current_key)
            self.current_key = current_key
        else:
            self.current_key = self._pick()

    @property
    def pool(self) -> list[str]:
        return pool_keys(self.items, self.reverse)

    @property
    def current_items(self) -> list[DrillItem]:
        """Every item shown under the current key."""
        return find_items(self.items, self.current_key, self.reverse)

    def _pick(self, exclude: str = None) -> str:
        key = self.selector.select_weighted_character(self.pool, exclude)
        self.selector.mark_character_seen(key)
        return key

    def _advance(self) -> str:
        self.current_key = self._pick(exclude=self.current_key)
        return self.current_key

    def _count(self, key: str, outcome: str) -> None:
        scores = self.character_scores.setdefault(key, {'correct': 0, 'wrong': 0})
        scores[outcome] += 1

    def submit(self, answer: str) -> AnswerResult | None:
        """Check an answer for the current character.

        A correct answer moves on to a new character; a wrong one keeps the
        same character up. Blank answers are ignored and return None.
        """
        if not answer or not answer.strip():
            return None

        key = self.current_key
        items = self.current_items
        correct = any(is_answer_correct(item, answer, self.reverse) for item in items)
        expected = list(dict.fromkeys(
            a for item in items for a in accepted_answers(item, self.reverse)
        ))

        if correct:
            self.score += 1
            self.correct_answers += 1
            self.wrong_streak = 0
            self.streak += 1
            self.best_streak = max(self.best_streak, self.streak)
            self._count(key, 'correct')
            self.history.append(key)
            self.selector.update_character_weight(key, True)
            next_key = self._advance()
        else:
            self.score = max(self.score - 1, MIN_SCORE)
            self.wrong_answers += 1
            self.wrong_streak += 1
            self.streak = 0
            self._count(key, 'wrong')
            self.selector.update_character_weight(key, False)
            next_key = key

        logger.debug(f"Answer {answer!r} for {key!r}: {'correct' if correct else 'wrong'}")
        return AnswerResult(key, answer.strip(), correct, expected, next_key)

    def skip(self) -> str:
        """Move on without recording an outcome. Returns the new current key."""
        self.skipped += 1
        self.streak = 0
        return self._advance()

    def get_accuracy(self) -> float:
        total = self.correct_answers + self.wrong_answers
        if total == 0:
            return 0.0
        return self.correct_answers / total

    def get_weak_characters(self, limit: int = 10) -> list[dict]:
        """Characters of this drill with the highest selector weight."""
        weak = [
            {'key': key, 'weight': self.selector.get_weight(key),
             **self.character_scores.get(key, {'correct': 0, 'wrong': 0})}
            for key in self.pool
            if key in self.selector
        ]
        weak.sort(key=lambda w: w['weight'], reverse=True)
        return weak[:limit]

    def stats(self) -> dict:
        return {
            'score': self.score,
            'correct_answers': self.correct_answers,
            'wrong_answers': self.wrong_answers,
            'skipped': self.skipped,
            'wrong_streak': self.wrong_streak,
            'streak': self.streak,
            'best_streak': self.best_streak,
            'accuracy': round(self.get_accuracy(), 3),
            'pool_size': len(self.items)
        }

    def to_dict(self) -> dict:
        return {
            'items': [item.to_dict() for item in self.items],
            'reverse': self.reverse,
            'current_key': self.current_key,
            'score': self.score,
            'correct_answers': self.correct_answers,
            'wrong_answers': self.wrong_answers,
            'skipped': self.skipped,
            'wrong_streak': self.wrong_streak,
            'streak': self.streak,
            'best_streak': self.best_streak,
            'character_scores': self.character_scores,
            'history': self.history
        }

    @classmethod
    def from_dict(cls, data: dict, selector: AdaptiveSelector) -> 'DrillSession':
        items = [DrillItem.from_dict(i) for i in data.get('items', [])]
        # The character that was on screen is kept if it is still in the pool
        session = cls(items, selector, reverse=data.get('reverse', False),
                      current_key=data.get('current_key'))
        session.score = data.get('score', 0)
        session.correct_answers = data.get('correct_answers', 0)
        session.wrong_answers = data.get('wrong_answers', 0)
        session.skipped = data.get('skipped', 0)
        session.wrong_streak = data.get('wrong_streak', 0)
        session.streak = data.get('streak', 0)
        session.best_streak = data.get('best_streak', 0)
        session.character_scores = data.get('character_scores', {})
        session.history = data.get('history', [])
        return session
