# /grading_app/services/grading_helpers/keyword_matcher.py

"""
Automatic pre-scoring of open-text answers by keyword matching.

The score it produces is only a hint shown to the grader (and the default
used when a batch leaves an answer untouched); it never validates an answer.
"""

from typing import List, Dict, Optional, Tuple, Union

from ...models.grading_model import KeywordRule


def is_blank_answer(answer_text: Optional[str]) -> bool:
    return answer_text is None or not answer_text.strip()


def _as_rules(keywords: Optional[List[Union[Dict, KeywordRule]]]) -> List[KeywordRule]:
    if not keywords:
        return []
    return [k if isinstance(k, KeywordRule) else KeywordRule.model_validate(k) for k in keywords]


def auto_score_open_answer(
    answer_text: Optional[str],
    keywords: Optional[List[Union[Dict, KeywordRule]]],
) -> Tuple[Optional[float], List[str], List[str]]:
    """
    Matches each keyword case-insensitively as a substring of the answer.

    Returns `(score, matched, missed)` where score is the matched weight
    over the total weight (None when the question has no keywords) and
    `missed` lists the required keywords that were not found.
    """
    rules = _as_rules(keywords)
    if not rules:
        return None, [], []

    haystack = (answer_text or "").lower()
    matched: List[str] = []
    missed: List[str] = []
    matched_weight = 0.0
    total_weight = 0.0

    for rule in rules:
        total_weight += rule.weight
        if rule.keyword.lower() in haystack:
            matched.append(rule.keyword)
            matched_weight += rule.weight
        elif rule.isRequired:
            missed.append(rule.keyword)

    score = matched_weight / total_weight if total_weight > 0 else None
    return score, matched, missed
