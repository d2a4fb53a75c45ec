"""
Visibility Evaluator - Decides which questions and options are shown.

Used by the wizard to render the current step and by the calculate endpoint
as a server-side guard that drops answers for hidden questions/options.
Evaluation never raises: missing answers, odd types and unknown operators
all fall back to documented defaults.
"""
from typing import Optional

from .formatting import number_to_text
from .models import Answers, AnswerValue, Operator, Question, VisibilityConfig, VisibilityRule


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_text(value) -> str:
    """Stringify an answer or rule value for loose comparison."""
    if isinstance(value, list):
        return ",".join(_as_text(v) for v in value)
    if _is_number(value) or isinstance(value, bool):
        return number_to_text(value)
    return str(value)


def _loosely_equal(answer: AnswerValue, expected) -> bool:
    # An unanswered question only equals a rule without a value
    if answer is None or expected is None:
        return answer is None and expected is None
    return _as_text(answer) == _as_text(expected)


def is_empty(answer: AnswerValue) -> bool:
    """True for an unanswered question, an empty string or an empty list."""
    return answer is None or answer == "" or (isinstance(answer, list) and len(answer) == 0)


def evaluate_rule(rule: VisibilityRule, answers: Answers) -> bool:
    """Evaluate a single rule against the current answers."""
    answer = answers.get(rule.question_key)
    operator = rule.operator

    if operator == Operator.IS_EMPTY:
        return is_empty(answer)

    elif operator == Operator.IS_NOT_EMPTY:
        return not is_empty(answer)

    elif operator == Operator.EQUALS:
        return _loosely_equal(answer, rule.value)

    elif operator == Operator.NOT_EQUALS:
        return not _loosely_equal(answer, rule.value)

    elif operator == Operator.INCLUDES:
        if isinstance(answer, list):
            return _as_text(rule.value) in answer
        return _loosely_equal(answer, rule.value)

    elif operator == Operator.NOT_INCLUDES:
        if isinstance(answer, list):
            return _as_text(rule.value) not in answer
        return not _loosely_equal(answer, rule.value)

    elif operator == Operator.GREATER_THAN:
        return _is_number(answer) and _is_number(rule.value) and answer > rule.value

    elif operator == Operator.LESS_THAN:
        return _is_number(answer) and _is_number(rule.value) and answer < rule.value

    elif operator == Operator.UNKNOWN:
        # Permissive: a rule we can't interpret never hides anything
        return True

    return True


def is_visible(config: Optional[VisibilityConfig], answers: Answers) -> bool:
    """
    Evaluate whether a question or option should be visible.

    Returns True when there is no config or it has no rules. Otherwise the
    rules are combined with "all" (AND) or "any" (OR), and the result is
    inverted when the config's action is "hide".
    """
    if config is None or not config.rules:
        return True

    if config.logic == "any":
        match = any(evaluate_rule(rule, answers) for rule in config.rules)
    else:
        match = all(evaluate_rule(rule, answers) for rule in config.rules)

    return not match if config.action == "hide" else match


def filter_visible_answers(questions: list[Question], answers: Answers) -> Answers:
    """
    Drop answers that belong to hidden questions or hidden options.

    Visibility is evaluated against the answers as submitted, not against the
    progressively filtered copy. Returns a new dict; `answers` is not touched.
    """
    filtered = dict(answers)

    for question in questions:
        key = question.question_key
        if not is_visible(question.visibility_rules, answers):
            filtered.pop(key, None)
            continue

        if not question.options:
            continue
        answer = filtered.get(key)
        if not answer:
            continue

        visible_values = {
            option.value
            for option in question.options
            if is_visible(option.visibility_rules, answers)
        }
        if isinstance(answer, str) and answer not in visible_values:
            filtered.pop(key, None)
        elif isinstance(answer, list):
            filtered[key] = [v for v in answer if v in visible_values]

    return filtered
