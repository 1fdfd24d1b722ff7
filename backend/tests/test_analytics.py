"""Tests for the analytics aggregator."""
from datetime import datetime, timezone

import pytest

from surveydesk.schemas.response import SurveyResponse
from surveydesk.schemas.survey import Survey
from surveydesk.services.analytics import aggregate, count_options


NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_survey(questions, survey_id="s1"):
    return Survey(id=survey_id, title="Survey", created_at=NOW, questions=questions)


def make_response(answers, survey_id="s1", response_id="r"):
    return SurveyResponse(
        id=response_id,
        survey_id=survey_id,
        customer_id="cust1",
        answers=answers,
        submitted_at=NOW,
    )


YES_NO = {
    "id": "q1",
    "text": "Happy?",
    "type": "radio",
    "options": [{"value": "yes", "label": "Yes"}, {"value": "no", "label": "No"}],
}

FEATURES = {
    "id": "q2",
    "text": "Features used",
    "type": "checkbox",
    "options": [
        {"value": "a", "label": "A"},
        {"value": "b", "label": "B"},
        {"value": "c", "label": "C"},
    ],
}

COMMENT = {"id": "q3", "text": "Comments", "type": "text"}


class TestRadioQuestions:
    def test_yes_yes_no_example(self):
        survey = make_survey([YES_NO])
        responses = [
            make_response([{"questionId": "q1", "value": v}], response_id=str(i))
            for i, v in enumerate(["yes", "yes", "no"])
        ]

        result = aggregate(survey, responses)

        q = result.analytics[0]
        assert q.total_responses == 3
        assert q.option_counts == {"yes": 2, "no": 1}
        assert q.responses is None

    def test_sum_of_counts_equals_total(self):
        survey = make_survey([YES_NO])
        responses = [
            make_response([{"questionId": "q1", "value": "no"}]),
            make_response([]),
            make_response([{"questionId": "q1", "value": "yes"}]),
        ]

        q = aggregate(survey, responses).analytics[0]

        assert q.total_responses == 2
        assert sum(q.option_counts.values()) == q.total_responses

    def test_unknown_option_value_gets_its_own_key(self):
        survey = make_survey([YES_NO])
        responses = [make_response([{"questionId": "q1", "value": "maybe"}])]

        q = aggregate(survey, responses).analytics[0]

        assert q.option_counts == {"yes": 0, "no": 0, "maybe": 1}


class TestCheckboxQuestions:
    def test_counts_every_selected_value(self):
        survey = make_survey([FEATURES])
        responses = [
            make_response([{"questionId": "q2", "values": ["a", "b"]}]),
            make_response([{"questionId": "q2", "values": ["b"]}]),
        ]

        q = aggregate(survey, responses).analytics[0]

        assert q.total_responses == 2
        assert q.option_counts == {"a": 1, "b": 2, "c": 0}
        assert sum(q.option_counts.values()) >= q.total_responses

    def test_empty_selection_still_counts_as_answered(self):
        survey = make_survey([FEATURES])
        responses = [make_response([{"questionId": "q2", "values": []}])]

        q = aggregate(survey, responses).analytics[0]

        assert q.total_responses == 1
        assert q.option_counts == {"a": 0, "b": 0, "c": 0}


class TestTextQuestions:
    def test_collects_values_in_response_order(self):
        survey = make_survey([COMMENT])
        responses = [
            make_response([{"questionId": "q3", "value": "first"}]),
            make_response([]),
            make_response([{"questionId": "q3", "value": "second"}]),
        ]

        q = aggregate(survey, responses).analytics[0]

        assert q.total_responses == 2
        assert q.responses == ["first", "second"]
        assert q.option_counts is None


class TestAggregate:
    def test_one_summary_per_question_in_order(self):
        survey = make_survey([COMMENT, YES_NO, FEATURES])

        result = aggregate(survey, [])

        assert [q.question_id for q in result.analytics] == ["q3", "q1", "q2"]
        assert [q.type for q in result.analytics] == ["text", "radio", "checkbox"]

    def test_no_responses_yields_zeroes(self):
        survey = make_survey([YES_NO, FEATURES, COMMENT])

        result = aggregate(survey, [])

        assert result.total_responses == 0
        radio, checkbox, text = result.analytics
        assert radio.total_responses == 0
        assert radio.option_counts == {"yes": 0, "no": 0}
        assert checkbox.option_counts == {"a": 0, "b": 0, "c": 0}
        assert text.responses == []

    def test_ignores_responses_of_other_surveys(self):
        survey = make_survey([YES_NO])
        responses = [
            make_response([{"questionId": "q1", "value": "yes"}]),
            make_response([{"questionId": "q1", "value": "no"}], survey_id="other"),
        ]

        result = aggregate(survey, responses)

        assert result.total_responses == 1
        assert result.analytics[0].option_counts == {"yes": 1, "no": 0}

    def test_survey_metadata(self):
        survey = make_survey([YES_NO])

        result = aggregate(survey, [])

        assert result.survey_id == "s1"
        assert result.survey_title == "Survey"
        assert result.analytics[0].question_text == "Happy?"

    def test_is_independent_of_call_order(self):
        survey = make_survey([YES_NO, COMMENT])
        responses = [
            make_response([{"questionId": "q1", "value": "yes"}, {"questionId": "q3", "value": "ok"}]),
            make_response([{"questionId": "q1", "value": "no"}]),
        ]

        first = aggregate(survey, responses)
        aggregate(make_survey([FEATURES]), [])
        second = aggregate(survey, responses)

        assert first == second

    def test_serializes_with_camel_case_keys(self):
        survey = make_survey([YES_NO])
        responses = [make_response([{"questionId": "q1", "value": "yes"}])]

        data = aggregate(survey, responses).model_dump(by_alias=True, exclude_none=True)

        assert data["surveyId"] == "s1"
        assert data["totalResponses"] == 1
        assert data["analytics"][0] == {
            "questionId": "q1",
            "questionText": "Happy?",
            "type": "radio",
            "totalResponses": 1,
            "optionCounts": {"yes": 1, "no": 0},
        }


@pytest.mark.parametrize("question", [YES_NO, FEATURES])
def test_declared_options_always_present(question):
    survey = make_survey([question])
    q = survey.questions[0]

    counts = count_options(q, [])

    assert set(q.option_values) <= set(counts)
    assert all(v == 0 for v in counts.values())
