"""Bootstrap questions and suggested categories.

This is the only place sample questions are defined. The memory store seeds
itself from SEED_QUESTIONS at construction and ``scripts/seed.py`` inserts the
same set into an empty database.
"""

DEFAULT_CATEGORY = "general"

# Suggested in the admin UI; any other string is accepted.
SUGGESTED_CATEGORIES = (
    "general",
    "imagination",
    "personal",
    "creativity",
    "growth",
    "gratitude",
    "experiences",
    "reflection",
    "curiosity",
    "fun",
    "childhood",
)

SEED_QUESTIONS: tuple[dict[str, object], ...] = (
    {
        "text": "If you could have any magical power for one day, what would you do with it and why?",
        "category": "imagination",
        "is_active": True,
    },
    {
        "text": "What's a childhood dream you had that you'd love to revisit as an adult?",
        "category": "personal",
        "is_active": True,
    },
    {
        "text": "If you could create a new holiday, what would it celebrate and how would people observe it?",
        "category": "creativity",
        "is_active": True,
    },
    {
        "text": "What's something you've learned recently that completely changed your perspective?",
        "category": "growth",
        "is_active": True,
    },
    {
        "text": "If you could have dinner with any fictional character, who would it be and what would you ask them?",
        "category": "imagination",
        "is_active": True,
    },
    {
        "text": "What's a small act of kindness someone did for you that you'll never forget?",
        "category": "gratitude",
        "is_active": True,
    },
    {
        "text": "If you could master any skill instantly, what would it be and how would you use it?",
        "category": "personal",
        "is_active": True,
    },
    {
        "text": "What's the most beautiful place you've ever been, and what made it special?",
        "category": "experiences",
        "is_active": True,
    },
    {
        "text": "If you could send a message to your past self, what would you say?",
        "category": "reflection",
        "is_active": True,
    },
    {
        "text": "What's something you're curious about that you'd love to explore more?",
        "category": "curiosity",
        "is_active": True,
    },
)
