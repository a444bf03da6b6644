"""
Placement probability domain model.

The score answers: "How ready does my job search look right now?"
It is recomputed from a fresh snapshot on every read and never persisted as truth.
"""

from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class ScoreSnapshot:
    """Counts read from storage at one point in time."""

    application_count: int = 0
    interview_count: int = 0
    resume_present: bool = False
    flashcard_deck_count: int = 0
    streak_count: int = 0
    recent_activity_count: int = 0  # size of a capped sample, not a lifetime total


@dataclass(frozen=True)
class ScoreComponents:
    """Individual contributions to the placement probability, each already capped."""

    applications: int = 0  # 0..20
    interviews: int = 0  # 0..15
    resume: int = 0  # 0 or 10
    flashcard_decks: int = 0  # 0..5
    streak: int = 0  # 0..15
    recent_activity: int = 0  # 0..5

    def validate(self) -> None:
        """Ensure all components are in valid ranges."""
        assert 0 <= self.applications <= 20, f"applications out of range: {self.applications}"
        assert 0 <= self.interviews <= 15, f"interviews out of range: {self.interviews}"
        assert self.resume in (0, 10), f"resume out of range: {self.resume}"
        assert 0 <= self.flashcard_decks <= 5, f"flashcard_decks out of range: {self.flashcard_decks}"
        assert 0 <= self.streak <= 15, f"streak out of range: {self.streak}"
        assert 0 <= self.recent_activity <= 5, f"recent_activity out of range: {self.recent_activity}"

    def total(self) -> int:
        """Sum of all components (before clamping to the ceiling)."""
        return (
            self.applications
            + self.interviews
            + self.resume
            + self.flashcard_decks
            + self.streak
            + self.recent_activity
        )

    def to_dict(self) -> dict:
        """Serialize with camelCase keys for JSON responses."""
        data = asdict(self)
        return {
            "applications": data["applications"],
            "interviews": data["interviews"],
            "resume": data["resume"],
            "flashcardDecks": data["flashcard_decks"],
            "streak": data["streak"],
            "recentActivity": data["recent_activity"],
        }
