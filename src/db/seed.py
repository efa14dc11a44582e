"""Sample ideas for a fresh database (used by scripts/01_init_db.py)."""

from typing import List, Tuple

from src.db.idea_store import IdeaStore
from src.log import get_logger

logger = get_logger(__name__)

# (title, description, status)
SAMPLE_IDEAS: List[Tuple[str, str, str]] = [
    ("Eco-Friendly Water Bottle",
     "A smart water bottle that tracks hydration and suggests refill stations.", "Concept"),
    ("AI-Powered Study Buddy",
     "An application that uses AI to create personalized study plans and quizzes.", "In Progress"),
    ("Virtual Reality Fitness App",
     "An immersive VR application for home workouts with real-time coaching.", "On Hold"),
    ("Smart Home Energy Manager",
     "IoT system to optimize home energy consumption and reduce costs.", "Concept"),
    ("Community Garden Platform",
     "A platform connecting people to share gardening spaces and knowledge.", "In Progress"),
]


def seed_sample_ideas(store: IdeaStore) -> int:
    """Insert SAMPLE_IDEAS when the ideas table is empty. Returns rows inserted."""
    existing = store.count()
    if existing:
        logger.info("ideas table already contains %d ideas, skipping seed", existing)
        return 0
    for title, description, status in SAMPLE_IDEAS:
        idea = store.create(title=title, description=description, status=status)
        logger.info("inserted idea: %s (id=%s)", title, idea["id"])
    return len(SAMPLE_IDEAS)
