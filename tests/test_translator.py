"""Tests for LogEvent -> RemoteEvent translation.

Tests use the AAA pattern (Arrange-Act-Assert) for clarity.
"""

import pytest

from conftest import make_event
from sentry_logging.constants import RAW_STACK_TRACE_KEY, SERVICE_NAME_KEY
from sentry_logging.exceptions import TranslationError, UnmappedSeverityError
from sentry_logging.models.log_event import LogLevel
from sentry_logging.models.remote_event import ErrorLevel, ExceptionEvent, MessageEvent
from sentry_logging.translator import LEVEL_MAP, EventTranslator, map_level


def _raised(exc: BaseException) -> BaseException:
    try:
        raise exc
    except BaseException as caught:
        return caught


# ============================================================================
# Tests: Severity Mapping
# ============================================================================


class TestLevelMapping:
    """The level map is total and fixed."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            (LogLevel.DEBUG, ErrorLevel.DEBUG),
            (LogLevel.TRACE, ErrorLevel.DEBUG),
            (LogLevel.INFO, ErrorLevel.INFO),
            (LogLevel.WARN, ErrorLevel.WARNING),
            (LogLevel.ERROR, ErrorLevel.ERROR),
            (LogLevel.FATAL, ErrorLevel.FATAL),
        ],
    )
    def test_maps_every_level(self, level: LogLevel, expected: ErrorLevel):
        assert map_level(level) is expected

    def test_map_covers_every_log_level(self):
        assert set(LEVEL_MAP) == set(LogLevel)

    def test_map_is_read_only(self):
        with pytest.raises(TypeError):
            LEVEL_MAP[LogLevel.INFO] = ErrorLevel.ERROR  # type: ignore[index]

    def test_unknown_level_raises(self):
        # Act & Assert
        with pytest.raises(UnmappedSeverityError) as exc_info:
            map_level(99)  # type: ignore[arg-type]

        assert exc_info.value.level == 99


# ============================================================================
# Tests: Message Events
# ============================================================================


class TestMessageEvents:
    """Events without an exception."""

    def test_startup_scenario(self):
        # Arrange
        translator = EventTranslator("billing-api")
        event = make_event(level=LogLevel.INFO, message="startup", logger_name="App.Main", call_site=None)

        # Act
        result = translator.translate(event)

        # Assert
        assert isinstance(result, MessageEvent)
        assert result.kind == "message"
        assert result.level is ErrorLevel.INFO
        assert result.fingerprint == ("startup", None, "App.Main")
        assert result.tags == {SERVICE_NAME_KEY: "billing-api"}

    def test_ignored_when_no_exception_and_suppressed(self):
        # Arrange
        translator = EventTranslator("billing-api", ignore_events_with_no_exception=True)

        # Act
        result = translator.translate(make_event())

        # Assert
        assert result is None

    def test_message_uses_layout(self):
        # Arrange
        translator = EventTranslator(layout=lambda e: f"[{e.logger_name}] {e.formatted_message}")
        event = make_event(message="user %s", formatted_message="user 7")

        # Act
        result = translator.translate(event)

        # Assert
        assert result is not None
        assert result.message == "[App.Main] user 7"

    def test_default_layout_is_formatted_message(self):
        # Arrange
        event = make_event(message="user %s", formatted_message="user 7")

        # Act
        result = EventTranslator().translate(event)

        # Assert
        assert result is not None
        assert result.message == "user 7"
        assert result.fingerprint[0] == "user %s"

    def test_properties_copied_to_extra_as_strings(self):
        # Arrange
        event = make_event(properties={"order_id": 17, "retry": True, "ratio": 0.5})

        # Act
        result = EventTranslator().translate(event)

        # Assert
        assert result is not None
        assert result.extra == {"order_id": "17", "retry": "True", "ratio": "0.5"}

    def test_non_string_property_keys_coerced(self):
        # Arrange
        event = make_event(properties={1: "x", ("a", "b"): 2})

        # Act
        result = EventTranslator().translate(event)

        # Assert
        assert result is not None
        assert result.extra == {"1": "x", "('a', 'b')": "2"}

    def test_tags_mode_omits_extra(self):
        # Arrange
        translator = EventTranslator("billing-api", send_properties_as_tags=True)
        event = make_event(properties={"order_id": 17})

        # Act
        result = translator.translate(event)

        # Assert - properties are not routed into tags either
        assert result is not None
        assert result.extra is None
        assert result.tags == {SERVICE_NAME_KEY: "billing-api"}

    def test_service_name_tag_present_when_unset(self):
        result = EventTranslator().translate(make_event())

        assert result is not None
        assert result.tags == {SERVICE_NAME_KEY: None}

    def test_unprintable_property_raises_translation_error(self):
        # Arrange
        class Unprintable:
            def __str__(self) -> str:
                raise RuntimeError("no repr")

        event = make_event(properties={"bad": Unprintable()})

        # Act & Assert
        with pytest.raises(TranslationError, match="no repr"):
            EventTranslator().translate(event)

    def test_each_call_builds_a_new_event(self):
        # Arrange
        translator = EventTranslator()
        event = make_event()

        # Act
        first = translator.translate(event)
        second = translator.translate(event)

        # Assert
        assert first is not second
        assert first is not None and second is not None
        assert first.event_id != second.event_id


# ============================================================================
# Tests: Exception Events
# ============================================================================


class TestExceptionEvents:
    """Events carrying an exception."""

    def test_disk_full_scenario(self):
        # Arrange
        exc = _raised(OSError("no space"))
        event = make_event(
            level=LogLevel.ERROR,
            message="disk full",
            formatted_message="disk full",
            exception=exc,
            logger_name="App.Writer",
            call_site="Writer.Flush",
        )

        # Act
        result = EventTranslator("billing-api").translate(event)

        # Assert
        assert isinstance(result, ExceptionEvent)
        assert result.kind == "exception"
        assert result.exception is exc
        assert result.level is ErrorLevel.ERROR
        assert result.message == "disk full"
        assert result.fingerprint == ("disk full", "Writer.Flush", "App.Writer")
        assert RAW_STACK_TRACE_KEY in result.extra
        assert result.tags == {SERVICE_NAME_KEY: "billing-api"}

    def test_raw_stack_trace_is_verbatim(self):
        # Arrange
        event = make_event(exception=ValueError("boom"), stack_trace="Traceback (custom)\n  frame\n")

        # Act
        result = EventTranslator().translate(event)

        # Assert
        assert result is not None
        assert result.extra == {RAW_STACK_TRACE_KEY: "Traceback (custom)\n  frame\n"}

    @pytest.mark.parametrize("ignore", [True, False])
    def test_exception_event_regardless_of_suppression(self, ignore: bool):
        translator = EventTranslator(ignore_events_with_no_exception=ignore)

        result = translator.translate(make_event(exception=ValueError("boom")))

        assert isinstance(result, ExceptionEvent)

    def test_tags_mode_keeps_raw_stack_trace(self):
        # Arrange
        translator = EventTranslator(send_properties_as_tags=True)
        event = make_event(exception=ValueError("boom"), properties={"order_id": 1})

        # Act
        result = translator.translate(event)

        # Assert
        assert result is not None
        assert list(result.extra) == [RAW_STACK_TRACE_KEY]

    def test_uses_formatted_message_not_layout(self):
        # Arrange
        translator = EventTranslator(layout=lambda e: "LAYOUT")
        event = make_event(formatted_message="write failed for 3", exception=ValueError("boom"))

        # Act
        result = translator.translate(event)

        # Assert
        assert result is not None
        assert result.message == "write failed for 3"
