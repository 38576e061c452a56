"""
Fallback Catalog

Static book table served whenever the generative service is missing, fails,
or answers with something unparseable. Paging is deterministic and wraps
around, so every positive page number gets an answer.
"""

import math
from typing import Dict, List, Optional, Sequence

from ..models import BookDetails, BookRecommendation

PAGE_SIZE = 5


def _book(title, author, genre, description, rating, readers=None, pages=None, year=None):
    return BookRecommendation(
        title=title,
        author=author,
        genre=genre,
        description=description,
        reason="A reader favourite that rarely disappoints",
        trend_reason="Consistently popular with the ReadCrew community",
        rating=rating,
        readers=readers,
        pages=pages,
        year=year,
    )


FALLBACK_BOOKS: Sequence[BookRecommendation] = (
    _book("Atomic Habits", "James Clear", "Self-Help",
          "Tiny changes, remarkable results: a practical system for building good habits.",
          4.8, 15420, 320, 2018),
    _book("The Psychology of Money", "Morgan Housel", "Finance",
          "Short stories about how people actually think about wealth and greed.",
          4.7, 12350, 256, 2020),
    _book("Deep Work", "Cal Newport", "Self-Help",
          "Rules for focused success in a distracted world.",
          4.6, 9870, 304, 2016),
    _book("Sapiens", "Yuval Noah Harari", "History",
          "A brief history of humankind from the Stone Age to the present.",
          4.8, 21500, 464, 2011),
    _book("Project Hail Mary", "Andy Weir", "Science Fiction",
          "A lone astronaut wakes with no memory and the fate of Earth in his hands.",
          4.9, 18700, 496, 2021),
    _book("Harry Potter and the Philosopher's Stone", "J.K. Rowling", "Fantasy",
          "An orphaned boy discovers he is a wizard on his eleventh birthday.",
          4.8, 30200, 223, 1997),
    _book("The Lord of the Rings", "J.R.R. Tolkien", "Fantasy",
          "A hobbit carries a dark ring across Middle-earth to destroy it.",
          4.9, 24100, 1178, 1954),
    _book("The Hound of the Baskervilles", "Arthur Conan Doyle", "Mystery",
          "Sherlock Holmes investigates a family curse on the moors of Devon.",
          4.5, 8300, 256, 1902),
    _book("Murder on the Orient Express", "Agatha Christie", "Mystery",
          "Hercule Poirot untangles a murder aboard a snowbound train.",
          4.6, 11200, 256, 1934),
    _book("A Brief History of Time", "Stephen Hawking", "Science",
          "From the Big Bang to black holes, explained for everyone.",
          4.6, 10400, 212, 1988),
    _book("Cosmos", "Carl Sagan", "Science",
          "A personal voyage through the universe and our place in it.",
          4.7, 7600, 396, 1980),
    _book("To Kill a Mockingbird", "Harper Lee", "Fiction",
          "A child's view of justice and prejudice in the American South.",
          4.8, 26800, 281, 1960),
    _book("1984", "George Orwell", "Fiction",
          "A chilling portrait of surveillance, truth and totalitarian power.",
          4.7, 25300, 328, 1949),
    _book("Pride and Prejudice", "Jane Austen", "Romance",
          "Elizabeth Bennet and Mr. Darcy spar their way toward love.",
          4.7, 19900, 432, 1813),
    _book("The Notebook", "Nicholas Sparks", "Romance",
          "A love story remembered across a lifetime.",
          4.3, 9100, 214, 1996),
    _book("Gone Girl", "Gillian Flynn", "Thriller",
          "A wife vanishes on her fifth anniversary and her husband becomes the suspect.",
          4.4, 17800, 432, 2012),
    _book("The Girl on the Train", "Paula Hawkins", "Thriller",
          "A commuter glimpses something from the train window that changes everything.",
          4.1, 14600, 336, 2015),
    _book("Becoming", "Michelle Obama", "Biography",
          "The former First Lady's memoir of growing up, family and public life.",
          4.8, 16400, 448, 2018),
    _book("Steve Jobs", "Walter Isaacson", "Biography",
          "The authorised biography of Apple's co-founder.",
          4.6, 12900, 656, 2011),
    _book("Charlotte's Web", "E.B. White", "Children",
          "A pig and a spider form an unlikely friendship on a farm.",
          4.7, 8800, 192, 1952),
    _book("The Alchemist", "Paulo Coelho", "Inspirational",
          "A shepherd boy follows his dream across the desert in search of treasure.",
          4.6, 22100, 208, 1988),
    _book("Rich Dad Poor Dad", "Robert Kiyosaki", "Finance",
          "Two fathers, two mindsets about money and what the rich teach their kids.",
          4.4, 13700, 336, 1997),
)

# keyword found in free text -> catalog genre it selects; longer keywords win over the words inside them
KEYWORD_GENRES: Dict[str, str] = {
    "science fiction": "Science Fiction",
    "sci-fi": "Science Fiction",
    "fantasy": "Fantasy",
    "mystery": "Mystery",
    "science": "Science",
    "fiction": "Fiction",
    "self-help": "Self-Help",
    "children": "Children",
    "romance": "Romance",
    "thriller": "Thriller",
    "biography": "Biography",
    "history": "History",
    "finance": "Finance",
}

DEFAULT_KEYWORD_TITLES = ("The Alchemist", "Atomic Habits", "Rich Dad Poor Dad")


class FallbackCatalog:
    """Deterministic, never-failing source of book recommendations."""

    def __init__(self, books: Sequence[BookRecommendation] = FALLBACK_BOOKS, page_size: int = PAGE_SIZE):
        self._books: List[BookRecommendation] = list(books)
        self.page_size = page_size

    def __len__(self) -> int:
        return len(self._books)

    @property
    def page_count(self) -> int:
        return math.ceil(len(self._books) / self.page_size)

    def page(self, page: int) -> List[BookRecommendation]:
        """Return the page-th slice, wrapping past the last page back to the first."""
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if not self._books:
            return []
        start = ((page - 1) % self.page_count) * self.page_size
        return self._books[start:start + self.page_size]

    def full_page(self, n: int) -> List[BookRecommendation]:
        """The n-th complete page, cycling over full pages only so the result always has page_size books."""
        if n < 1:
            raise ValueError(f"n must be >= 1, got {n}")
        full_pages = len(self._books) // self.page_size
        if full_pages == 0:
            return list(self._books)
        start = ((n - 1) % full_pages) * self.page_size
        return self._books[start:start + self.page_size]

    def find(self, title: str) -> Optional[BookRecommendation]:
        key = title.strip().lower()
        for book in self._books:
            if book.title.lower() == key:
                return book
        return None

    def similar_to(self, title: str) -> List[BookRecommendation]:
        """First page-size books, skipping the one asked about."""
        key = title.strip().lower()
        return [b for b in self._books if b.title.lower() != key][:self.page_size]

    def match_keywords(self, keywords: str) -> List[BookRecommendation]:
        """Books whose genre keyword appears in the text; a default trio when nothing matches."""
        text = keywords.lower()
        genres = set()
        for keyword in sorted(KEYWORD_GENRES, key=len, reverse=True):
            if keyword in text:
                genres.add(KEYWORD_GENRES[keyword])
                text = text.replace(keyword, " ")
        matches = [b for b in self._books if b.genre in genres]
        if not matches:
            matches = [b for b in (self.find(t) for t in DEFAULT_KEYWORD_TITLES) if b]
        return matches[:self.page_size]

    def details_for(self, title: str, author: Optional[str] = None) -> BookDetails:
        book = self.find(title)
        if book:
            return BookDetails(
                title=book.title,
                author=book.author,
                description=book.description,
                genre=book.genre,
                rating=book.rating,
                pages=book.pages,
                year=book.year,
                similar_books=[b.title for b in self._books if b.genre == book.genre and b is not book],
            )
        name = title.strip()
        writer = (author or "").strip() or "an acclaimed author"
        return BookDetails(
            title=name,
            author=writer,
            description=f"{name} is a popular book by {writer}.",
            genre="General",
        )
