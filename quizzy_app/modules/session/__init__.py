"""Learning session orchestration over the storage and quota collaborators."""

module_metadata = {
    'name': 'Learning Sessions',
    'category': 'Learning',
    'enabled': True
}


def setup_module(app):
    """Bind a learning session service to the app, backed by the in-memory store."""
    from .interface import EXTENSION_KEY
    from .services.session_service import LearningSessionService
    from .stores.memory import InMemoryLearningStore

    service = LearningSessionService.from_config(app.config, store=InMemoryLearningStore())
    app.extensions[EXTENSION_KEY] = service
    app.logger.debug(
        "Learning session service ready (auto flashcards: %s)", service.auto_generate_flashcards
    )
