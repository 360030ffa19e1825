# modules/quiz/config.py


class QuizDefaultConfig:
    """
    Default configuration for the Quiz module.
    Copied into ``app.config`` for any key the application does not set.
    """

    # --- Question shape ---
    QUIZ_MCQ_OPTION_COUNT = 4
    QUIZ_TRUE_FALSE_OPTIONS = ("True", "False")

    # --- Multi-select answers ---
    # Selections travel as a single string joined with this separator.
    QUIZ_MULTI_SELECT_SEPARATOR = ";"

    # --- Question marks ---
    QUIZ_DEFAULT_MARKS = 1
