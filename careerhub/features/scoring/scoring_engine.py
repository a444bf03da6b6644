"""
Placement Probability Scoring Engine

Pure, deterministic computation of placement probability from a snapshot.
No external calls, no randomness, no side effects.

Scoring rules (fixed business rules, not configuration):
- Applications contribute 4 each, capped at 20
- Interviews contribute 5 each, capped at 15
- A resume on file contributes a flat 10
- Flashcard decks contribute 2 each, capped at 5
- Streak contributes 5 per full week, capped at 15
- Recent activity contributes 1 per entry, capped at 5
- Each term is capped before summing; the total is clamped to 0..95

The ceiling is 95, never 100: the product never claims certainty.
"""

from careerhub.models.score import ScoreComponents, ScoreSnapshot


class PlacementScoringEngine:
    """Pure deterministic placement probability scoring."""

    # Ceiling and floor for the final score
    SCORE_MAX = 95
    SCORE_MIN = 0

    # Per-signal weights and caps
    APPLICATION_WEIGHT = 4
    APPLICATION_MAX = 20
    INTERVIEW_WEIGHT = 5
    INTERVIEW_MAX = 15
    RESUME_BONUS = 10
    FLASHCARD_DECK_WEIGHT = 2
    FLASHCARD_DECK_MAX = 5
    STREAK_WEEK_DAYS = 7
    STREAK_WEEK_WEIGHT = 5
    STREAK_MAX = 15
    RECENT_ACTIVITY_WEIGHT = 1
    RECENT_ACTIVITY_MAX = 5

    @staticmethod
    def score(snapshot: ScoreSnapshot) -> int:
        """
        Compute placement probability for a snapshot.

        Args:
            snapshot: Counts gathered by the stats orchestrator

        Returns:
            Integer score in [0, 95]
        """
        return PlacementScoringEngine.score_components(PlacementScoringEngine.components(snapshot))

    @staticmethod
    def score_components(components: ScoreComponents) -> int:
        """Final score from an already computed breakdown."""
        return PlacementScoringEngine._clamp(components.total())

    @staticmethod
    def components(snapshot: ScoreSnapshot) -> ScoreComponents:
        """Per-signal contributions, each capped independently."""
        components = ScoreComponents(
            applications=PlacementScoringEngine._score_applications(snapshot.application_count),
            interviews=PlacementScoringEngine._score_interviews(snapshot.interview_count),
            resume=PlacementScoringEngine._score_resume(snapshot.resume_present),
            flashcard_decks=PlacementScoringEngine._score_flashcard_decks(snapshot.flashcard_deck_count),
            streak=PlacementScoringEngine._score_streak(snapshot.streak_count),
            recent_activity=PlacementScoringEngine._score_recent_activity(snapshot.recent_activity_count),
        )
        components.validate()
        return components

    @staticmethod
    def _capped(count: int, weight: int, cap: int) -> int:
        return min(max(0, count) * weight, cap)

    @staticmethod
    def _score_applications(count: int) -> int:
        return PlacementScoringEngine._capped(
            count,
            PlacementScoringEngine.APPLICATION_WEIGHT,
            PlacementScoringEngine.APPLICATION_MAX,
        )

    @staticmethod
    def _score_interviews(count: int) -> int:
        return PlacementScoringEngine._capped(
            count,
            PlacementScoringEngine.INTERVIEW_WEIGHT,
            PlacementScoringEngine.INTERVIEW_MAX,
        )

    @staticmethod
    def _score_resume(present: bool) -> int:
        return PlacementScoringEngine.RESUME_BONUS if present else 0

    @staticmethod
    def _score_flashcard_decks(count: int) -> int:
        return PlacementScoringEngine._capped(
            count,
            PlacementScoringEngine.FLASHCARD_DECK_WEIGHT,
            PlacementScoringEngine.FLASHCARD_DECK_MAX,
        )

    @staticmethod
    def _score_streak(streak_count: int) -> int:
        """Only completed weeks count: a 13-day streak earns one week."""
        full_weeks = max(0, streak_count) // PlacementScoringEngine.STREAK_WEEK_DAYS
        return PlacementScoringEngine._capped(
            full_weeks,
            PlacementScoringEngine.STREAK_WEEK_WEIGHT,
            PlacementScoringEngine.STREAK_MAX,
        )

    @staticmethod
    def _score_recent_activity(count: int) -> int:
        return PlacementScoringEngine._capped(
            count,
            PlacementScoringEngine.RECENT_ACTIVITY_WEIGHT,
            PlacementScoringEngine.RECENT_ACTIVITY_MAX,
        )

    @staticmethod
    def _clamp(total: int) -> int:
        return max(PlacementScoringEngine.SCORE_MIN, min(PlacementScoringEngine.SCORE_MAX, total))
