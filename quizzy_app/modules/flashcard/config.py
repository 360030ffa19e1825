# modules/flashcard/config.py


class FlashcardDefaultConfig:
    """Defaults for deriving flashcards from quizzes."""

    # Back-of-card text when a question carries no explanation
    FLASHCARD_EXPLANATION_PLACEHOLDER = "No explanation provided."

    # Generate the batch automatically when a quiz is completed
    FLASHCARD_AUTO_GENERATE = False

    # Prefix for ids of cards derived from questions (fc_<question id>)
    FLASHCARD_ID_PREFIX = "fc_"
