from app.services.use_cases.vocabulary import VocabularyUseCase

__all__ = ["VocabularyUseCase"]
