"""
Tests for lifecycle event domain models.
"""

import pytest
from dataclasses import FrozenInstanceError

from bootcast.core.domain.events import (
    ApplicationContextInitializedEvent,
    ApplicationEnvironmentPreparedEvent,
    ApplicationEvent,
    ApplicationFailedEvent,
    ApplicationPreparedEvent,
    ApplicationReadyEvent,
    ApplicationStartedEvent,
    ApplicationStartingEvent,
    LifecyclePhase,
)
from bootcast.core.domain.exceptions import (
    ApplicationLifecycleFailure,
    BootcastError,
    ListenerDeliveryError,
    ListenerLoadError,
)


class TestLifecyclePhase:
    """Test the phase enumeration."""

    def test_ordered_phases(self) -> None:
        """Successful startups publish six phases in a fixed order."""
        assert [phase.value for phase in LifecyclePhase.ordered()] == [
            "starting",
            "environment_prepared",
            "context_prepared",
            "context_loaded",
            "started",
            "running",
        ]

    def test_context_dispatch_phases(self) -> None:
        """Only started and running use context dispatch unconditionally."""
        context_phases = [p for p in LifecyclePhase if p.uses_context_dispatch]
        assert context_phases == [LifecyclePhase.STARTED, LifecyclePhase.RUNNING]


class TestApplicationEvents:
    """Test event creation and validation."""

    def test_each_event_kind_fixes_its_phase(self) -> None:
        """Per-phase classes carry the matching phase."""
        app = object()
        context = object()
        events = [
            ApplicationStartingEvent(application=app),
            ApplicationEnvironmentPreparedEvent(application=app, environment=object()),
            ApplicationContextInitializedEvent(application=app, context=context),
            ApplicationPreparedEvent(application=app, context=context),
            ApplicationStartedEvent(application=app, context=context),
            ApplicationReadyEvent(application=app, context=context),
            ApplicationFailedEvent(application=app, exception=RuntimeError("x")),
        ]

        assert [e.phase for e in events] == list(LifecyclePhase)

    def test_phase_cannot_be_overridden_on_kinds(self) -> None:
        """The phase of a specific kind is not a constructor argument."""
        with pytest.raises(TypeError):
            ApplicationStartingEvent(application="app", phase=LifecyclePhase.RUNNING)  # type: ignore[call-arg]

    def test_events_are_immutable(self) -> None:
        """Events cannot be modified after creation."""
        event = ApplicationStartingEvent(application="app")

        with pytest.raises(FrozenInstanceError):
            event.args = ("changed",)  # type: ignore[misc]

    def test_args_are_stored_as_tuple(self) -> None:
        """List arguments are frozen into a tuple."""
        event = ApplicationStartingEvent(application="app", args=["a", "b"])  # type: ignore[arg-type]

        assert event.args == ("a", "b")

    def test_application_is_required(self) -> None:
        """Events without an application are rejected."""
        with pytest.raises(ValueError):
            ApplicationStartingEvent()

    @pytest.mark.parametrize("event_class", [
        ApplicationContextInitializedEvent,
        ApplicationPreparedEvent,
        ApplicationStartedEvent,
        ApplicationReadyEvent,
    ])
    def test_context_phases_require_context(self, event_class: type) -> None:
        """Phases after context creation require the context."""
        with pytest.raises(ValueError):
            event_class(application="app")

    def test_environment_prepared_requires_environment(self) -> None:
        with pytest.raises(ValueError):
            ApplicationEnvironmentPreparedEvent(application="app")

    def test_failed_event_requires_exception_but_not_context(self) -> None:
        """Failures may happen before a context exists."""
        cause = RuntimeError("boom")
        event = ApplicationFailedEvent(application="app", exception=cause)

        assert event.context is None
        assert event.exception is cause
        with pytest.raises(ValueError):
            ApplicationFailedEvent(application="app")

    def test_base_event_rejects_invalid_phase(self) -> None:
        with pytest.raises(ValueError):
            ApplicationEvent(phase="starting", application="app")  # type: ignore[arg-type]

    def test_name_and_to_dict(self) -> None:
        """Names and dictionaries describe the event."""
        event = ApplicationFailedEvent(application="app", args=("x",),
                                       exception=RuntimeError("boom"))
        data = event.to_dict()

        assert event.name == "application.failed"
        assert data['phase'] == "failed"
        assert data['args'] == ["x"]
        assert data['context'] is None
        assert "boom" in data['exception']
        assert data['event_id'] == event.event_id


class TestExceptions:
    """Test the exception hierarchy."""

    def test_all_errors_share_a_base(self) -> None:
        event = ApplicationStartingEvent(application="app")
        errors = [
            ListenerDeliveryError("listener", event),
            ApplicationLifecycleFailure("failed", phase=LifecyclePhase.STARTED),
            ListenerLoadError("a.b:C", "missing"),
        ]

        assert all(isinstance(error, BootcastError) for error in errors)

    def test_delivery_error_message_names_event(self) -> None:
        event = ApplicationStartingEvent(application="app")
        error = ListenerDeliveryError("my-listener", event)

        assert "application.starting" in str(error)
        assert error.listener == "my-listener"

    def test_lifecycle_failure_keeps_phase(self) -> None:
        error = ApplicationLifecycleFailure("failed", phase=LifecyclePhase.CONTEXT_LOADED)

        assert error.phase is LifecyclePhase.CONTEXT_LOADED

    def test_listener_load_error_keeps_path(self) -> None:
        error = ListenerLoadError("a.b:C", "missing")

        assert error.path == "a.b:C"
        assert "a.b:C" in str(error)
