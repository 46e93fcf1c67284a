"""Bundled guided exercises inserted by ``nexus seed``."""

from nexus.storage.schema import Difficulty, Exercise

DEFAULT_EXERCISES = [
    Exercise(
        title="Thought Record",
        description="Track and analyze negative thoughts to identify patterns.",
        category="depression",
        difficulty=Difficulty.BEGINNER,
        duration=15,
        steps=[
            "Identify the triggering situation.",
            "Write down your automatic thoughts.",
            "Note your emotional response.",
            "Look for evidence that supports and challenges these thoughts.",
            "Develop a balanced perspective.",
        ],
        benefits=[
            "Increased awareness of thought patterns.",
            "Better emotional regulation.",
            "Improved problem-solving skills.",
        ],
    ),
    Exercise(
        title="Journaling",
        description="Write down your thoughts and feelings to process emotions.",
        category="sadness",
        difficulty=Difficulty.BEGINNER,
        duration=20,
        steps=[
            "Find a quiet place to write.",
            "Set a timer for 20 minutes.",
            "Write freely about your thoughts and feelings.",
        ],
        benefits=[
            "Helps in processing emotions.",
            "Improves self-awareness.",
            "Can reduce feelings of isolation.",
        ],
    ),
    Exercise(
        title="Mindfulness Meditation",
        description="Practice mindfulness to stay present and reduce anxiety.",
        category="anxiety",
        difficulty=Difficulty.INTERMEDIATE,
        duration=10,
        steps=[
            "Find a comfortable position.",
            "Close your eyes and focus on your breath.",
            "If your mind wanders, gently bring it back to your breath.",
        ],
        benefits=[
            "Reduces stress and anxiety.",
            "Improves focus and concentration.",
            "Enhances emotional regulation.",
        ],
    ),
    Exercise(
        title="Social Connection",
        description="Reach out to a friend or family member to talk.",
        category="loneliness",
        difficulty=Difficulty.BEGINNER,
        duration=30,
        steps=[
            "Identify someone you trust.",
            "Send them a message or call them.",
            "Share your feelings and listen to their perspective.",
        ],
        benefits=[
            "Reduces feelings of loneliness.",
            "Strengthens social bonds.",
            "Provides emotional support.",
        ],
    ),
    Exercise(
        title="Gratitude List",
        description="Write down things you are grateful for to shift focus.",
        category="sadness",
        difficulty=Difficulty.BEGINNER,
        duration=10,
        steps=[
            "Take a piece of paper.",
            "List at least five things you are grateful for.",
            "Reflect on why you are grateful for each item.",
        ],
        benefits=[
            "Improves mood.",
            "Enhances overall well-being.",
            "Encourages positive thinking.",
        ],
    ),
]
