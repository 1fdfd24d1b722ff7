"""Per-question aggregation of a survey's responses."""
from typing import Dict, Iterable, List

from surveydesk.schemas.analytics import QuestionAnalytics, SurveyAnalytics
from surveydesk.schemas.response import SurveyResponse
from surveydesk.schemas.survey import CHOICE_TYPES, Question, Survey


def count_options(question: Question, responses: List[SurveyResponse]) -> Dict[str, int]:
    """Vote counts keyed by option value.

    Every declared option starts at 0. A value outside the declared options
    is counted under its own key rather than rejected.
    """
    counts = {value: 0 for value in question.option_values}
    for response in responses:
        answer = response.answer_for(question.id)
        if answer is None:
            continue
        if question.type == "radio":
            if answer.value is not None:
                counts[answer.value] = counts.get(answer.value, 0) + 1
        else:
            for value in answer.values or []:
                counts[value] = counts.get(value, 0) + 1
    return counts


def summarize_question(question: Question, responses: List[SurveyResponse]) -> QuestionAnalytics:
    answered = [r for r in responses if r.answer_for(question.id) is not None]
    summary = QuestionAnalytics(
        question_id=question.id,
        question_text=question.text,
        type=question.type,
        total_responses=len(answered),
    )
    if question.type in CHOICE_TYPES:
        summary.option_counts = count_options(question, answered)
    else:
        summary.responses = [
            r.answer_for(question.id).value
            for r in answered
            if r.answer_for(question.id).value is not None
        ]
    return summary


def aggregate(survey: Survey, responses: Iterable[SurveyResponse]) -> SurveyAnalytics:
    """Fold the survey's responses into one summary per question, in question order.

    Responses belonging to other surveys are ignored. Pure: the result only
    depends on the arguments.
    """
    matching = [r for r in responses if r.survey_id == survey.id]
    return SurveyAnalytics(
        survey_id=survey.id,
        survey_title=survey.title,
        total_responses=len(matching),
        analytics=[summarize_question(q, matching) for q in survey.questions],
    )
