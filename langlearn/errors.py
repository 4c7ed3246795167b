"""Error kinds raised by the skill, each carrying the sentence spoken to the user."""
from __future__ import annotations


class SkillError(Exception):
    message = "Sorry, something went wrong. Please try again."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(SkillError):
    message = "Sorry, I couldn't understand that request."


class TranslationError(SkillError):
    message = "There was a translation error."


class PersistenceError(SkillError):
    message = "Sorry, I couldn't save your translation."


class SynthesisError(SkillError):
    message = "Sorry, I couldn't turn that translation into speech."


class AudioStorageError(SkillError):
    message = "Sorry, I couldn't store the audio for that translation."


class NoHistoryError(SkillError):
    message = "You don't have any translations to be quizzed on yet."


class NoPendingQuestionError(SkillError):
    message = "There is no quiz question waiting for an answer. Ask me for a quiz first."


class UnknownError(SkillError):
    pass
