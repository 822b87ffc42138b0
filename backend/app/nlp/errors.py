from __future__ import annotations


class AnalyzerError(RuntimeError):
    """Base class for failures talking to the external analyzer process."""


class InvalidConfiguration(AnalyzerError):
    """The analyzer artifact cannot be resolved to an existing file."""


class LaunchFailure(AnalyzerError):
    """The analyzer process could not be spawned."""


class ProcessTerminatedEarly(AnalyzerError):
    """An analyzer stream closed before the expected line arrived."""


class ProcessUnresponsive(AnalyzerError):
    """The analyzer did not answer within the configured timeout."""


class ProtocolViolation(AnalyzerError):
    """The analyzer wrote a line the service cannot accept."""
