"""Sub-generators producing partial opinions for the combiner.

Public API:
- PartialSignalGenerator: Protocol for pluggable async sub-generators
- technical_signal: scores an indicator snapshot
- SimulatedModelGenerator: ML-proxy stand-in
- SentimentSignalGenerator: weighted sentiment opinion over a SentimentSource
"""

from signalcore.generators.protocol import PartialSignalGenerator
from signalcore.generators.technical import technical_score, technical_signal
from signalcore.generators.model import SimulatedModelGenerator
from signalcore.generators.sentiment import (
    RandomSentimentSource,
    SentimentScores,
    SentimentSignalGenerator,
    SentimentSource,
)

__all__ = [
    "PartialSignalGenerator",
    "technical_score",
    "technical_signal",
    "SimulatedModelGenerator",
    "RandomSentimentSource",
    "SentimentScores",
    "SentimentSignalGenerator",
    "SentimentSource",
]
