"""Voice skill: request handlers, exception handlers and the turn interceptor.

Every turn is routed by the ASK SDK. Handlers read slots through
``ask_sdk_core.utils``, build replies with the response builder, and keep the
quiz state in the session attributes.
"""
from __future__ import annotations
from typing import Any, Dict, Optional
import asyncio
import json

from ask_sdk_core.dispatch_components import (
    AbstractExceptionHandler, AbstractRequestHandler, AbstractRequestInterceptor)
from ask_sdk_core.handler_input import HandlerInput
from ask_sdk_core.serialize import DefaultSerializer
from ask_sdk_core.skill_builder import SkillBuilder
from ask_sdk_core.utils import (
    get_intent_name, get_request_type, get_slot, get_user_id, is_intent_name, is_request_type)
from ask_sdk_model import (
    Intent, IntentConfirmationStatus, RequestEnvelope, Response, Slot, SlotConfirmationStatus)
from ask_sdk_model.dialog import ElicitSlotDirective

from langlearn.errors import SkillError, UnknownError
from langlearn.models import SessionContext
from langlearn.ssml import audio_tag, text
from langlearn.utils.logger import ServiceLogger
from langlearn.utils.metrics import MetricsCollector
from .facts import FactResponder
from .pipeline import TranslationPipeline
from .quiz import QuizEngine

WELCOME = ("Welcome to Language Learning. You can ask me to translate a phrase, "
           "quiz you on phrases you have translated, or tell you a fact about a language.")
HELP = ("To translate, say something like: translate hello there into French. "
        "To practice, say: quiz me in French. "
        "To learn something new, say: tell me a fact about Japanese.")
NOT_UNDERSTOOD = "Sorry, I didn't understand that. You can say help to hear what I can do."
GOODBYE = "Goodbye!"

QUIZ_INTENT = "QuizIntent"
ANSWER_SLOT = "answer"
QUESTION = "What does this mean in English? {audio}"
QUESTION_REPROMPT = "What does that phrase mean in English?"
CORRECT = "That's correct! Well done."
INCORRECT = "Sorry, that's incorrect. The correct answer is: {answer}."

SESSION_KEY = "session"


def slot_value(handler_input: HandlerInput, name: str) -> Optional[str]:
    """Value of slot ``name``, or None when the slot is absent or unfilled."""
    slot = get_slot(handler_input, name)
    return slot.value if slot is not None else None


def user_of(handler_input: HandlerInput) -> str:
    session = handler_input.request_envelope.session
    if session is not None and session.user is not None:
        return session.user.user_id
    return get_user_id(handler_input)


def request_id_of(handler_input: HandlerInput) -> str:
    return handler_input.request_envelope.request.request_id or ""


def session_of(handler_input: HandlerInput) -> SessionContext:
    return handler_input.attributes_manager.request_attributes.setdefault(SESSION_KEY, SessionContext())


def save_session(handler_input: HandlerInput, session: SessionContext) -> None:
    if handler_input.request_envelope.session is not None:
        handler_input.attributes_manager.session_attributes = session.to_attributes()


def tell(handler_input: HandlerInput, speech: str) -> Response:
    return handler_input.response_builder.speak(speech).set_should_end_session(True).response


class TurnInterceptor(AbstractRequestInterceptor):
    """Loads the session context and counts intents before routing."""

    def __init__(self, logger: ServiceLogger, metrics: MetricsCollector):
        self.logger = logger
        self.metrics = metrics

    def process(self, handler_input):
        session = SessionContext()
        if handler_input.request_envelope.session is not None:
            try:
                session = SessionContext.from_attributes(handler_input.attributes_manager.session_attributes)
            except (KeyError, TypeError) as exc:
                self.logger.exception("Discarding malformed session attributes", exc)
        handler_input.attributes_manager.request_attributes[SESSION_KEY] = session

        if is_request_type("IntentRequest")(handler_input):
            name = get_intent_name(handler_input)
            self.metrics.increment(f"intent_{name}")
            self.logger.info(f"Dispatching intent '{name}'", intent=name, user=user_of(handler_input))


class LaunchRequestHandler(AbstractRequestHandler):

    def can_handle(self, handler_input):
        return is_request_type("LaunchRequest")(handler_input)

    def handle(self, handler_input):
        save_session(handler_input, session_of(handler_input))
        return handler_input.response_builder.speak(WELCOME).ask(HELP).response


class TranslateIntentHandler(AbstractRequestHandler):

    def __init__(self, pipeline: TranslationPipeline):
        self.pipeline = pipeline

    def can_handle(self, handler_input):
        return is_intent_name("TranslateIntent")(handler_input)

    def handle(self, handler_input):
        result = asyncio.run(self.pipeline.run(
            slot_value(handler_input, "phrase"),
            slot_value(handler_input, "language"),
            user_of(handler_input),
            request_id_of(handler_input),
        ))
        save_session(handler_input, session_of(handler_input))
        return tell(handler_input, audio_tag(result.audio_url))


class QuizIntentHandler(AbstractRequestHandler):
    """Poses a question, or grades the answer when the answer slot is filled."""

    def __init__(self, quiz: QuizEngine):
        self.quiz = quiz

    def can_handle(self, handler_input):
        return is_intent_name(QUIZ_INTENT)(handler_input)

    def handle(self, handler_input):
        session = session_of(handler_input)
        answer = slot_value(handler_input, ANSWER_SLOT)
        if answer is not None:
            verdict = self.quiz.check(answer, session)
            save_session(handler_input, session)
            if verdict.correct:
                return tell(handler_input, CORRECT)
            return tell(handler_input, INCORRECT.format(answer=text(verdict.expected)))

        question = asyncio.run(self.quiz.ask(
            slot_value(handler_input, "language"),
            user_of(handler_input),
            session,
            request_id_of(handler_input),
        ))
        save_session(handler_input, session)
        updated_intent = Intent(
            name=QUIZ_INTENT,
            confirmation_status=IntentConfirmationStatus.NONE,
            slots={
                "language": Slot(name="language", value=question.language,
                                 confirmation_status=SlotConfirmationStatus.NONE),
                ANSWER_SLOT: Slot(name=ANSWER_SLOT, confirmation_status=SlotConfirmationStatus.NONE),
            },
        )
        return (handler_input.response_builder
                .speak(QUESTION.format(audio=audio_tag(question.audio_url)))
                .ask(QUESTION_REPROMPT)
                .add_directive(ElicitSlotDirective(slot_to_elicit=ANSWER_SLOT, updated_intent=updated_intent))
                .response)


class FactIntentHandler(AbstractRequestHandler):

    def __init__(self, facts: FactResponder):
        self.facts = facts

    def can_handle(self, handler_input):
        return is_intent_name("FactIntent")(handler_input)

    def handle(self, handler_input):
        fact = self.facts.fact_for(slot_value(handler_input, "language"))
        save_session(handler_input, session_of(handler_input))
        return tell(handler_input, text(fact))


class HelpIntentHandler(AbstractRequestHandler):

    def can_handle(self, handler_input):
        return is_intent_name("AMAZON.HelpIntent")(handler_input)

    def handle(self, handler_input):
        save_session(handler_input, session_of(handler_input))
        return handler_input.response_builder.speak(HELP).ask(HELP).response


class ExitIntentHandler(AbstractRequestHandler):

    def can_handle(self, handler_input):
        return (is_intent_name("AMAZON.CancelIntent")(handler_input) or
                is_intent_name("AMAZON.StopIntent")(handler_input))

    def handle(self, handler_input):
        save_session(handler_input, SessionContext())
        return tell(handler_input, GOODBYE)


class SessionEndedRequestHandler(AbstractRequestHandler):

    def __init__(self, logger: ServiceLogger):
        self.logger = logger

    def can_handle(self, handler_input):
        return is_request_type("SessionEndedRequest")(handler_input)

    def handle(self, handler_input):
        self.logger.info("Session ended", user=user_of(handler_input))
        return handler_input.response_builder.response


class FallbackHandler(AbstractRequestHandler):
    """Answers unknown intents and unsupported request types."""

    def __init__(self, logger: ServiceLogger):
        self.logger = logger

    def can_handle(self, handler_input):
        return True

    def handle(self, handler_input):
        if not is_request_type("IntentRequest")(handler_input):
            self.logger.warning(f"Unsupported request type '{get_request_type(handler_input)}'")
        save_session(handler_input, session_of(handler_input))
        return tell(handler_input, NOT_UNDERSTOOD)


class SkillErrorHandler(AbstractExceptionHandler):
    """Speaks the fixed message of a SkillError and ends the session."""

    def __init__(self, logger: ServiceLogger):
        self.logger = logger

    def can_handle(self, handler_input, exception):
        return isinstance(exception, SkillError)

    def handle(self, handler_input, exception):
        self.logger.info(f"Turn ended with {type(exception).__name__}", error=exception.message)
        save_session(handler_input, session_of(handler_input))
        return tell(handler_input, text(exception.message))


class UnexpectedErrorHandler(AbstractExceptionHandler):

    def __init__(self, logger: ServiceLogger, metrics: MetricsCollector):
        self.logger = logger
        self.metrics = metrics

    def can_handle(self, handler_input, exception):
        return True

    def handle(self, handler_input, exception):
        self.metrics.increment("unknown_errors")
        self.logger.exception("Unhandled failure while handling the turn", exception)
        save_session(handler_input, session_of(handler_input))
        return tell(handler_input, UnknownError().message)


class LanguageSkill:
    """The built skill plus the serializer that moves envelopes in and out of it."""

    def __init__(self, pipeline: TranslationPipeline, quiz: QuizEngine, facts: FactResponder,
                 logger: ServiceLogger, metrics: MetricsCollector, skill_id: Optional[str] = None):
        sb = SkillBuilder()
        sb.skill_id = skill_id or None

        sb.add_global_request_interceptor(TurnInterceptor(logger, metrics))
        sb.add_request_handler(LaunchRequestHandler())
        sb.add_request_handler(TranslateIntentHandler(pipeline))
        sb.add_request_handler(QuizIntentHandler(quiz))
        sb.add_request_handler(FactIntentHandler(facts))
        sb.add_request_handler(HelpIntentHandler())
        sb.add_request_handler(ExitIntentHandler())
        sb.add_request_handler(SessionEndedRequestHandler(logger))
        # Must stay last, it accepts every request
        sb.add_request_handler(FallbackHandler(logger))
        sb.add_exception_handler(SkillErrorHandler(logger))
        sb.add_exception_handler(UnexpectedErrorHandler(logger, metrics))

        self.skill = sb.create()
        self.serializer = DefaultSerializer()

    def invoke(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Run one turn on a JSON request envelope and return the JSON response envelope.

        Raises ``AskSdkException`` when the envelope is for another skill id,
        ``SerializationException`` when it cannot be read.
        """
        envelope = self.serializer.deserialize(json.dumps(body), RequestEnvelope)
        response_envelope = self.skill.invoke(request_envelope=envelope, context=None)
        return self.serializer.serialize(response_envelope)
