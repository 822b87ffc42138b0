from app.nlp.adapter import AlignedToken, LemmatizeResult, Lemmatizer
from app.nlp.errors import (
    AnalyzerError,
    InvalidConfiguration,
    LaunchFailure,
    ProcessTerminatedEarly,
    ProcessUnresponsive,
    ProtocolViolation,
)
from app.nlp.farasa import SubprocessLemmatizer, load_subprocess_lemmatizer

__all__ = [
    "AlignedToken",
    "LemmatizeResult",
    "Lemmatizer",
    "AnalyzerError",
    "InvalidConfiguration",
    "LaunchFailure",
    "ProcessTerminatedEarly",
    "ProcessUnresponsive",
    "ProtocolViolation",
    "SubprocessLemmatizer",
    "load_subprocess_lemmatizer",
]
