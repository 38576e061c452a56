"""
Recommendation Extractor Tests

The model is an unreliable producer: payloads may be delimited, fenced,
surrounded by prose, half-written, or absent. Anything that does not decode
and validate must come back as None, never as an exception.

Run:
----
    pytest readcrew/tests/test_extractor.py -v
"""

from readcrew.services.extractor import (
    REC_END,
    REC_START,
    extract_array,
    extract_object,
    extract_recommendations,
    strip_code_fences,
    strip_hidden_block,
)


class TestDelimitedBlock:

    def test_single_book_block_with_prose(self):
        text = (
            'Here is something you will love!\n'
            '<!--REC_START-->[{"title":"X","author":"Y"}]<!--REC_END-->\n'
            'Enjoy.'
        )
        found = extract_recommendations(text)
        assert found is not None
        assert len(found.payload) == 1
        assert found.payload[0].title == "X"
        assert found.payload[0].author == "Y"
        for leaked in (REC_START, REC_END, "[", '"title"'):
            assert leaked not in found.visible_text
        assert found.visible_text.startswith("Here is something you will love!")
        assert found.visible_text.endswith("Enjoy.")

    def test_fenced_json_inside_block(self):
        text = f'Picks:\n{REC_START}\n```json\n[{{"title": "A", "author": "B"}}]\n```\n{REC_END}'
        found = extract_recommendations(text)
        assert [b.title for b in found.payload] == ["A"]
        assert found.visible_text == "Picks:"

    def test_broken_json_in_block_is_no_payload(self):
        text = f'{REC_START}[{{"title": "A", "author": }}]{REC_END}'
        assert extract_recommendations(text) is None

    def test_empty_array_is_no_payload(self):
        assert extract_recommendations(f"Nothing today {REC_START}[]{REC_END}") is None

    def test_strip_hidden_block_removes_undecodable_block(self):
        text = f"Hello there.\n{REC_START}not json{REC_END}"
        assert strip_hidden_block(text) == "Hello there."


class TestBareJson:

    def test_plain_array(self):
        found = extract_array('[{"title": "A", "author": "B"}, {"title": "C", "author": "D"}]')
        assert len(found.payload) == 2

    def test_array_wrapped_in_fences_and_prose(self):
        text = 'Sure! Here you go:\n```json\n[{"title": "A", "author": "B"}]\n```\nHappy reading.'
        found = extract_recommendations(text)
        assert [b.title for b in found.payload] == ["A"]
        assert "```" not in found.visible_text
        assert "Happy reading." in found.visible_text

    def test_object_extraction(self):
        found = extract_object('Result: {"characterAnalysis": "Brave", "recommendations": []} done')
        assert found.payload["characterAnalysis"] == "Brave"

    def test_object_shape_mismatch(self):
        assert extract_object("[1, 2, 3]") is None
        assert extract_array('{"a": 1}') is None

    def test_no_json_at_all(self):
        assert extract_recommendations("What genres do you enjoy?") is None
        assert extract_recommendations("") is None
        assert extract_recommendations(None) is None

    def test_strip_code_fences_without_fence(self):
        assert strip_code_fences("  [1]  ") == "[1]"


class TestValidation:

    def test_invalid_entries_are_dropped(self):
        text = '[{"title": "Good", "author": "Writer"}, {"title": "No author"}, "junk", 7]'
        found = extract_recommendations(text)
        assert [b.title for b in found.payload] == ["Good"]

    def test_all_invalid_entries_is_no_payload(self):
        assert extract_recommendations('[{"name": "x"}, {"title": ""}]') is None

    def test_loose_numbers_are_coerced_or_dropped(self):
        text = (
            '[{"title": "A", "author": "B", "rating": "4.5", "readers": "12,000",'
            ' "year": "circa 1850", "trendReason": "Viral"}]'
        )
        book = extract_recommendations(text).payload[0]
        assert book.rating == 4.5
        assert book.readers == 12000
        assert book.year is None
        assert book.trend_reason == "Viral"
