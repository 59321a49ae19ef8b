"""Tests for the ApplyStack orchestration use case."""

import logging
from unittest.mock import MagicMock

import pytest

from cloudformer.application.dtos.stack_dtos import ApplyRequest
from cloudformer.application.orchestration.stack_poller import StackPoller
from cloudformer.application.use_cases.apply_stack import (
    DEPLOY_FAILED_MESSAGE,
    ApplyStack,
)
from cloudformer.application.use_cases.validate_template import ValidateTemplate
from cloudformer.domain.entities.deployment import DeployOutcome, OperationResult
from cloudformer.domain.entities.stack import StackHandle
from cloudformer.domain.value_objects.template import ValidationResult
from tests.fakes import (
    T0,
    FakeProvisioning,
    FakeTemplateSource,
    RecordingProgress,
    RecordingSleep,
    make_event,
)


def _apply_stack(provisioning, template_source=None, telemetry=None):
    progress = RecordingProgress()
    sleep = RecordingSleep()
    template_source = template_source or FakeTemplateSource()
    stack = StackHandle("web", provisioning)
    poller = StackPoller(stack, progress, interval_seconds=30, sleep=sleep)
    use_case = ApplyStack(
        stack,
        provisioning,
        template_source,
        ValidateTemplate(provisioning, template_source, progress),
        poller,
        progress,
        settle_seconds=10,
        sleep=sleep,
        now=lambda: T0,
        telemetry=telemetry,
    )
    return use_case, progress, sleep


REQUEST = ApplyRequest(
    template_ref="template.json",
    parameters={"Env": "prod"},
    disable_rollback=True,
    capabilities=("CAPABILITY_IAM",),
    notify=("arn:aws:sns:us-east-1:123456789012:alerts",),
    tags={"team": "platform"},
)


class TestApplyCreate:
    def test_create_then_poll_succeeds(self):
        provisioning = FakeProvisioning(
            exists=False,
            statuses=["CREATE_IN_PROGRESS", "CREATE_IN_PROGRESS", "CREATE_COMPLETE"],
        )
        use_case, progress, sleep = _apply_stack(provisioning)

        outcome = use_case.execute(REQUEST)

        assert outcome is DeployOutcome.SUCCEEDED
        assert len(provisioning.create_calls) == 1
        assert provisioning.update_calls == []
        # settle delay, then exactly two non-terminal polls
        assert sleep.calls == [10, 30, 30]
        assert "Initializing stack creation..." in progress.lines

    def test_create_passes_every_option(self):
        provisioning = FakeProvisioning(exists=False, statuses=["CREATE_COMPLETE"])
        use_case, _, _ = _apply_stack(provisioning)

        use_case.execute(REQUEST)

        call = provisioning.create_calls[0]
        assert call["stack_name"] == "web"
        assert call["parameters"] == {"Env": "prod"}
        assert call["disable_rollback"] is True
        assert call["capabilities"] == ("CAPABILITY_IAM",)
        assert call["notify"] == ("arn:aws:sns:us-east-1:123456789012:alerts",)
        assert call["tags"] == {"team": "platform"}

    def test_create_rollback_fails(self):
        provisioning = FakeProvisioning(
            exists=False, statuses=["CREATE_IN_PROGRESS", "ROLLBACK_COMPLETE"]
        )
        use_case, progress, _ = _apply_stack(provisioning)

        assert use_case.execute(REQUEST) is DeployOutcome.FAILED
        assert progress.lines[-1] == DEPLOY_FAILED_MESSAGE

    def test_create_rejected_skips_poll(self):
        provisioning = FakeProvisioning(
            exists=False,
            create_result=OperationResult.rejected("Requires capabilities : [CAPABILITY_IAM]"),
        )
        use_case, progress, sleep = _apply_stack(provisioning)

        assert use_case.execute(REQUEST) is DeployOutcome.FAILED
        assert provisioning.status_calls == 0
        assert sleep.calls == []
        assert "Requires capabilities : [CAPABILITY_IAM]" in progress.lines

    def test_stack_vanishing_after_create_fails(self):
        provisioning = FakeProvisioning(
            exists=False, statuses=["CREATE_IN_PROGRESS", "GONE"]
        )
        use_case, progress, _ = _apply_stack(provisioning)

        assert use_case.execute(REQUEST) is DeployOutcome.FAILED
        assert "Stack not up." in progress.lines


class TestApplyUpdate:
    def test_update_submitted_once(self):
        provisioning = FakeProvisioning(
            exists=True, statuses=["UPDATE_IN_PROGRESS", "UPDATE_COMPLETE"]
        )
        use_case, _, sleep = _apply_stack(provisioning)

        assert use_case.execute(REQUEST) is DeployOutcome.SUCCEEDED
        assert len(provisioning.update_calls) == 1
        assert provisioning.create_calls == []
        assert sleep.calls == [30]

    def test_update_passes_template_params_capabilities(self):
        provisioning = FakeProvisioning(exists=True, statuses=["UPDATE_COMPLETE"])
        source = FakeTemplateSource()
        use_case, _, _ = _apply_stack(provisioning, template_source=source)

        use_case.execute(REQUEST)

        call = provisioning.update_calls[0]
        assert call["template"] == source.template
        assert call["parameters"] == {"Env": "prod"}
        assert call["capabilities"] == ("CAPABILITY_IAM",)

    def test_update_rolled_back_fails(self):
        provisioning = FakeProvisioning(
            exists=True, statuses=["UPDATE_IN_PROGRESS", "UPDATE_ROLLBACK_COMPLETE"]
        )
        use_case, _, _ = _apply_stack(provisioning)

        assert use_case.execute(REQUEST) is DeployOutcome.FAILED

    def test_no_changes_is_not_a_failure(self):
        provisioning = FakeProvisioning(
            exists=True,
            update_result=OperationResult.no_changes("No updates are to be performed."),
        )
        use_case, progress, sleep = _apply_stack(provisioning)

        assert use_case.execute(REQUEST) is DeployOutcome.NO_UPDATES
        assert provisioning.status_calls == 0
        assert provisioning.event_calls == 0
        assert sleep.calls == []
        assert "No updates are to be performed." in progress.lines

    def test_repeated_apply_is_idempotent(self):
        provisioning = FakeProvisioning(
            exists=True, update_result=OperationResult.no_changes()
        )
        use_case, _, _ = _apply_stack(provisioning)

        assert use_case.execute(REQUEST) is DeployOutcome.NO_UPDATES
        assert use_case.execute(REQUEST) is DeployOutcome.NO_UPDATES
        assert provisioning.create_calls == []
        assert provisioning.event_calls == 0

    def test_update_rejected_skips_poll(self):
        provisioning = FakeProvisioning(
            exists=True,
            update_result=OperationResult.rejected("Stack is in UPDATE_IN_PROGRESS state"),
        )
        use_case, _, _ = _apply_stack(provisioning)

        assert use_case.execute(REQUEST) is DeployOutcome.FAILED
        assert provisioning.status_calls == 0


class TestApplyPreconditions:
    def test_invalid_template_makes_no_submissions(self):
        provisioning = FakeProvisioning(
            exists=False,
            validation=ValidationResult.invalid("InvalidTemplate", "Unresolved resource"),
        )
        use_case, progress, _ = _apply_stack(provisioning)

        assert use_case.execute(REQUEST) is DeployOutcome.FAILED
        assert provisioning.create_calls == []
        assert provisioning.update_calls == []
        assert "Unable to update - InvalidTemplate - Unresolved resource" in progress.lines

    def test_unresolvable_template_makes_no_remote_calls(self):
        provisioning = FakeProvisioning(exists=True)
        source = FakeTemplateSource(error="HTTPError, 404")
        use_case, progress, _ = _apply_stack(provisioning, template_source=source)

        assert use_case.execute(REQUEST) is DeployOutcome.FAILED
        assert provisioning.validated == []
        assert provisioning.update_calls == []
        assert "template.json" in progress.lines[0]

    def test_operation_is_framed_once(self):
        provisioning = FakeProvisioning(exists=True, statuses=["UPDATE_COMPLETE"])
        use_case, progress, _ = _apply_stack(provisioning)

        use_case.execute(REQUEST)

        assert progress.scopes_opened == 1
        assert progress.depth == 0

    def test_reports_events_of_this_operation(self):
        event = make_event("u1", 5, status="UPDATE_COMPLETE", resource_type="AWS::CloudFormation::Stack")
        provisioning = FakeProvisioning(
            exists=True, statuses=["UPDATE_COMPLETE"], event_batches=[[event]]
        )
        use_case, progress, _ = _apply_stack(provisioning)

        use_case.execute(REQUEST)

        assert event.progress_line() in progress.lines

    def test_unexpected_provider_fault_propagates(self):
        provisioning = FakeProvisioning(exists=True)
        provisioning.update_stack = MagicMock(side_effect=RuntimeError("endpoint down"))
        use_case, _, _ = _apply_stack(provisioning)

        with pytest.raises(RuntimeError, match="endpoint down"):
            use_case.execute(REQUEST)


class TestApplyTelemetry:
    def test_records_operation(self):
        telemetry = MagicMock()
        provisioning = FakeProvisioning(exists=True, statuses=["UPDATE_COMPLETE"])
        use_case, _, _ = _apply_stack(provisioning, telemetry=telemetry)

        use_case.execute(REQUEST)

        telemetry.start_span.assert_called_once_with("cloudformer.apply", {"stack": "web"})
        telemetry.end_span.assert_called_once()
        args = telemetry.record_operation.call_args.args
        assert args[:3] == ("apply", "web", "Succeeded")


class TestApplyLogContext:
    def test_finish_record_carries_stack_and_operation(self, caplog):
        provisioning = FakeProvisioning(exists=False, statuses=["CREATE_COMPLETE"])
        use_case, _, _ = _apply_stack(provisioning)

        with caplog.at_level(logging.INFO, logger="cloudformer"):
            use_case.execute(REQUEST)

        finished = [r for r in caplog.records if "finished" in r.getMessage()]
        assert len(finished) == 1
        assert finished[0].stack == "web"
        assert finished[0].operation == "apply"
