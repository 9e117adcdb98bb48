import pytest

from prep_scheduler.services.candidate_parser import (
    candidates_from_analysis, extract_json_from_response, parse_analysis
)

ANALYSED = [
    {"title": "Roadmap review", "startTime": "2026-10-19T10:00:00", "preparation": True,
     "duration_estimation": 30, "meeting_preparation_prompt": "Read the Q4 roadmap"},
    {"title": "Coffee", "startTime": "2026-10-19T15:00:00", "preparation": False},
]


class TestExtractJson:
    def test_plain_json(self):
        assert extract_json_from_response('[{"a": 1}]') == [{"a": 1}]

    def test_fenced_block(self):
        response = 'Here is the result:\n```json\n{"events": []}\n```\nLet me know.'
        assert extract_json_from_response(response) == {"events": []}

    def test_fence_without_language(self):
        assert extract_json_from_response('```\n[1, 2]\n```') == [1, 2]

    def test_embedded_array(self):
        assert extract_json_from_response('Result: [{"title": "x"}] done') == [{"title": "x"}]

    def test_embedded_object(self):
        assert extract_json_from_response('Result: {"title": "x"} done') == {"title": "x"}

    def test_no_json(self):
        with pytest.raises(ValueError, match="No valid JSON"):
            extract_json_from_response("Nothing to see here")


class TestCandidatesFromAnalysis:
    def test_keeps_events_needing_preparation(self):
        candidates = candidates_from_analysis(ANALYSED)
        assert [candidate.title for candidate in candidates] == ["Roadmap review"]
        assert candidates[0].duration_estimation == 30
        assert candidates[0].meeting_preparation_prompt == "Read the Q4 roadmap"

    def test_accepts_events_object(self):
        assert len(candidates_from_analysis({"events": ANALYSED})) == 1

    def test_invalid_entries_are_skipped(self):
        events = ANALYSED + [{"title": "No start", "preparation": True}, "not an event"]
        assert [candidate.title for candidate in candidates_from_analysis(events)] == ["Roadmap review"]

    def test_rejects_non_list(self):
        with pytest.raises(ValueError):
            candidates_from_analysis("events")

    def test_parse_analysis_end_to_end(self):
        response = '```json\n{"events": [{"title": "Demo", "startTime": "2026-10-19T16:00:00", "preparation": true}]}\n```'
        candidates = parse_analysis(response)
        assert [candidate.title for candidate in candidates] == ["Demo"]
        assert candidates[0].duration_estimation is None
