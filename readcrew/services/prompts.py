"""
Prompt Builder

Instruction text for every generative call. The chat instruction carries the
conversation strategy and the current dialog state; the single-shot prompts
ask for bare JSON so the extractor can find it.
"""

from datetime import date
from typing import Optional

from .extractor import REC_END, REC_START

PERSONA = "Page Turner"

BOOK_FIELDS = '"title", "author", "genre", "description", "reason", "rating"'

WANTS_MORE_NOTE = (
    "The user wants MORE or DIFFERENT books: recommend 5 new titles that were "
    "not mentioned earlier in this conversation."
)


# ============================================================================
# Chat
# ============================================================================

def _stage_note(exchange_count: int, wants_more: bool) -> str:
    if exchange_count <= 1 and not wants_more:
        return ("This is the first exchange. Ask exactly ONE short clarifying question "
                "about genre, mood, or a book they loved recently. Do NOT recommend yet.")
    if exchange_count >= 3:
        return "You have enough to go on. Recommend books now."
    return ("Recommend if you have enough signal about their taste; "
            "otherwise ask ONE more short question.")


def build_chat_instruction(exchange_count: int, has_recommended: bool, wants_more: bool) -> str:
    """System instruction for one chat turn."""
    sections = [
        f"You are {PERSONA}, ReadCrew's warm and knowledgeable AI book guide. "
        "Keep replies short (2-4 sentences) and conversational.",
        "CONVERSATION STRATEGY:\n"
        "- Exchange 1: ask one clarifying question (genre, mood, or a recent favourite). No recommendations.\n"
        "- Exchanges 2-3: recommend when you know enough, otherwise ask one more question.\n"
        "- By exchange 3 you MUST recommend.\n"
        "- If the user asks for more, another, or different books, recommend new titles.",
        "WHEN RECOMMENDING: write a one or two sentence intro, then append exactly 5 books "
        f"as a JSON array between hidden markers, each object with {BOOK_FIELDS}:\n"
        f"{REC_START}\n[ ...5 book objects... ]\n{REC_END}\n"
        "Never mention the markers or the JSON in the visible text.",
        "CURRENT STATE:\n"
        f"- Exchange number: {exchange_count}\n"
        f"- Already recommended this conversation: {'yes' if has_recommended else 'no'}\n"
        f"- {_stage_note(exchange_count, wants_more)}",
    ]
    if wants_more:
        sections.append(WANTS_MORE_NOTE)
    return "\n\n".join(sections)


# ============================================================================
# Single-shot
# ============================================================================

JSON_ONLY = "Reply with valid JSON only: no prose, no markdown fences."


def build_trending_prompt(page: int, today: date, page_size: int = 5) -> tuple:
    """(system, user) for one page of trending books."""
    offset = (page - 1) * page_size
    system = f"You are a book-industry analyst tracking what readers love right now. {JSON_ONLY}"
    user = (
        f"Today is {today.strftime('%B %d, %Y')}. List exactly {page_size} books that are trending "
        f"with readers this month, skipping the {offset} most trending (this is page {page}). "
        f"Return a JSON array of {page_size} objects with "
        '"title", "author", "genre", "description", "trendReason", "rating", "readers".'
    )
    return system, user


def build_recommend_prompt(query: str, page: int, page_size: int = 5) -> tuple:
    offset = (page - 1) * page_size
    system = f"You are {PERSONA}, an expert book recommender. {JSON_ONLY}"
    user = (
        f'A reader is looking for: "{query}". Recommend exactly {page_size} books, '
        f"skipping the {offset} best matches you would list first (this is page {page}). "
        f"Return a JSON array of objects with {BOOK_FIELDS}."
    )
    return system, user


def build_character_prompt(character: str, from_book: Optional[str] = None) -> tuple:
    source = f' from "{from_book}"' if from_book else ""
    system = f"You are {PERSONA}, an expert on fictional characters and the books they live in. {JSON_ONLY}"
    user = (
        f'A reader loves the character "{character}"{source}. Briefly analyse what makes this '
        "character compelling, then recommend 5 books featuring similar characters. Return a JSON "
        f'object: {{"characterAnalysis": "...", "recommendations": [objects with {BOOK_FIELDS}]}}.'
    )
    return system, user


def build_similar_prompt(title: str, author: Optional[str] = None) -> tuple:
    by = f" by {author}" if author else ""
    system = f"You are {PERSONA}, an expert book recommender. {JSON_ONLY}"
    user = (
        f'Recommend exactly 5 books for someone who enjoyed "{title}"{by}. Do not include that '
        f"book itself. Return a JSON array of objects with {BOOK_FIELDS}."
    )
    return system, user


def build_details_prompt(book_name: str, author: Optional[str] = None) -> tuple:
    by = f" by {author}" if author else ""
    system = f"You are a librarian with encyclopaedic book knowledge. {JSON_ONLY}"
    user = (
        f'Describe the book "{book_name}"{by}. Return a JSON object with "title", "author", '
        '"description", "genre", "rating", "pages", "year", "themes" (list of strings) and '
        '"similarBooks" (list of titles).'
    )
    return system, user
