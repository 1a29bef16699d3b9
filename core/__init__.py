from .selector import AdaptiveSelector, InvalidPoolError
from .models import DrillSession, AnswerResult
from .content import DrillItem, pool_keys, is_answer_correct, accepted_answers
from .interfaces import Storage
from .utils import split_list
from .config import (
    DEFAULT_WEIGHT, CORRECT_FACTOR, WRONG_FACTOR,
    MIN_WEIGHT, MAX_WEIGHT, RECENCY_SIZE
)

__all__ = [
    'AdaptiveSelector', 'InvalidPoolError',
    'DrillSession', 'AnswerResult',
    'DrillItem', 'pool_keys', 'is_answer_correct', 'accepted_answers',
    'Storage',
    'split_list',
    'DEFAULT_WEIGHT', 'CORRECT_FACTOR', 'WRONG_FACTOR',
    'MIN_WEIGHT', 'MAX_WEIGHT', 'RECENCY_SIZE'
]
