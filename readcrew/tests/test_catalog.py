"""
Fallback Catalog Tests

The catalog answers whenever the generative service can't: paging must be
deterministic, wrap around, and never raise for a positive page number.

Run:
----
    pytest readcrew/tests/test_catalog.py -v
"""

import pytest

from readcrew.services.catalog import FALLBACK_BOOKS, FallbackCatalog


class TestPaging:

    def test_first_page_is_first_five_books(self, catalog):
        assert catalog.page(1) == list(FALLBACK_BOOKS[:5])

    def test_every_positive_page_answers(self, catalog):
        for page in range(1, 40):
            books = catalog.page(page)
            assert 0 < len(books) <= 5

    def test_wraps_after_last_page(self, catalog):
        pages = catalog.page_count
        assert catalog.page(pages + 1) == catalog.page(1)
        assert catalog.page(2 * pages + 3) == catalog.page(3)

    def test_last_page_is_short_when_not_a_multiple_of_five(self):
        books = FALLBACK_BOOKS[:7]
        small = FallbackCatalog(books)
        assert small.page_count == 2
        assert small.page(2) == list(books[5:7])
        assert small.page(3) == list(books[:5])

    def test_rejects_page_zero(self, catalog):
        with pytest.raises(ValueError):
            catalog.page(0)

    def test_empty_catalog_returns_empty_page(self):
        assert FallbackCatalog([]).page(3) == []

    def test_full_page_cycles_over_complete_pages_only(self, catalog):
        full_pages = len(FALLBACK_BOOKS) // 5
        for n in range(1, 3 * full_pages):
            assert len(catalog.full_page(n)) == 5
        assert catalog.full_page(full_pages + 1) == catalog.page(1)
        assert catalog.full_page(2) == catalog.page(2)

    def test_full_page_of_small_catalog_is_everything(self):
        books = FALLBACK_BOOKS[:3]
        assert FallbackCatalog(books).full_page(4) == list(books)


class TestLookups:

    def test_find_is_case_insensitive(self, catalog):
        assert catalog.find("  sapiens ").author == "Yuval Noah Harari"
        assert catalog.find("No Such Book") is None

    def test_similar_to_excludes_the_book_itself(self, catalog):
        similar = catalog.similar_to("Atomic Habits")
        assert len(similar) == 5
        assert "Atomic Habits" not in [b.title for b in similar]

    def test_keywords_select_genres(self, catalog):
        books = catalog.match_keywords("Something with FANTASY or a mystery please")
        assert books
        assert {b.genre for b in books} == {"Fantasy", "Mystery"}
        assert len(books) <= 5

    @pytest.mark.parametrize("text", ["any science fiction?", "Sci-Fi please"])
    def test_science_fiction_is_its_own_genre(self, catalog, text):
        assert [b.title for b in catalog.match_keywords(text)] == ["Project Hail Mary"]

    def test_science_and_fiction_still_match_separately(self, catalog):
        genres = {b.genre for b in catalog.match_keywords("popular science and classic fiction")}
        assert genres == {"Science", "Fiction"}

    def test_unmatched_keywords_use_default_set(self, catalog):
        titles = [b.title for b in catalog.match_keywords("cooking")]
        assert titles == ["The Alchemist", "Atomic Habits", "Rich Dad Poor Dad"]

    def test_details_for_known_book(self, catalog):
        details = catalog.details_for("Gone Girl")
        assert details.author == "Gillian Flynn"
        assert details.genre == "Thriller"
        assert "The Girl on the Train" in details.similar_books

    def test_details_for_unknown_book_is_generic(self, catalog):
        details = catalog.details_for("The Unwritten Novel", "A. Writer")
        assert details.description == "The Unwritten Novel is a popular book by A. Writer."
        assert details.genre == "General"
