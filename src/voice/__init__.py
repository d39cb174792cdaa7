"""Voice note synthesis."""

from .synthesizer import VoiceSynthesizer

__all__ = ["VoiceSynthesizer"]
