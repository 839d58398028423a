from Levenshtein import ratio as lev_ratio
from typing import Dict, Any, Optional

DEFAULT_MATCH_THRESHOLD = 1.0

def normalize_answer(text: Optional[str]) -> str:
    return (text or "").strip().lower()

def is_answer_correct(user_answer: str, expected_answer: str, threshold: float = DEFAULT_MATCH_THRESHOLD) -> bool:
    """Case-insensitive match; below 1.0 the threshold also accepts close Levenshtein matches."""
    user_clean = normalize_answer(user_answer)
    expected_clean = normalize_answer(expected_answer)
    if not user_clean:
        return False
    if user_clean == expected_clean:
        return True
    if threshold >= 1.0:
        return False
    return lev_ratio(user_clean, expected_clean) >= threshold

def match_threshold(config: Optional[Dict[str, Any]]) -> float:
    grading_config = (config or {}).get('grading', {})
    return float(grading_config.get('answer_match_threshold', DEFAULT_MATCH_THRESHOLD))
