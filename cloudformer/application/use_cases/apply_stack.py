"""
Apply Stack Use Case

Architectural Intent:
- The deployment orchestration state machine: resolve, validate, decide
  create vs. update, submit, poll to a terminal state, classify
- Every failure mode resolves locally to a DeployOutcome; only unexpected
  client faults propagate to the caller

Flow:
    resolve ──fail──> FAILED
      │
    validate ──invalid──> FAILED
      │
    exists? ──yes──> update ──no changes──> NO_UPDATES
      │                 └──rejected──> FAILED
      no
      └──> create ──rejected──> FAILED
             └──> settle
    poll ──> SUCCEEDED | FAILED
"""

import logging
import time
from datetime import datetime, UTC
from typing import Callable, Optional

from cloudformer.application.dtos.stack_dtos import ApplyRequest
from cloudformer.application.orchestration.stack_poller import PollState, StackPoller
from cloudformer.application.reporting import reported
from cloudformer.application.use_cases.validate_template import ValidateTemplate
from cloudformer.domain.entities.deployment import (
    DeployOutcome,
    OperationResult,
    OperationResultKind,
)
from cloudformer.domain.entities.stack import StackHandle
from cloudformer.domain.ports.progress_port import ProgressPort
from cloudformer.domain.ports.provisioning_port import ProvisioningPort
from cloudformer.domain.ports.telemetry_port import TelemetryPort
from cloudformer.domain.ports.template_source_port import (
    TemplateResolutionError,
    TemplateSourcePort,
)
from cloudformer.domain.value_objects.template import TemplateBody

logger = logging.getLogger(__name__)

DEFAULT_SETTLE_SECONDS = 10
DEPLOY_FAILED_MESSAGE = "Unable to deploy template. Check log for more information."


def utcnow() -> datetime:
    return datetime.now(UTC)


class ApplyStack:
    def __init__(
        self,
        stack: StackHandle,
        provisioning: ProvisioningPort,
        template_source: TemplateSourcePort,
        validator: ValidateTemplate,
        poller: StackPoller,
        progress: ProgressPort,
        settle_seconds: float = DEFAULT_SETTLE_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        now: Callable[[], datetime] = utcnow,
        telemetry: Optional[TelemetryPort] = None,
    ):
        self.stack = stack
        self.provisioning = provisioning
        self.template_source = template_source
        self.validator = validator
        self.poller = poller
        self.progress = progress
        self.settle_seconds = settle_seconds
        self._sleep = sleep
        self._now = now
        self.telemetry = telemetry

    @reported
    def execute(self, request: ApplyRequest) -> DeployOutcome:
        span = None
        if self.telemetry:
            span = self.telemetry.start_span(
                "cloudformer.apply", {"stack": self.stack.name}
            )
        started = time.monotonic()
        try:
            outcome = self._apply(request)
        finally:
            if self.telemetry:
                self.telemetry.end_span(span)

        logger.info(
            "Apply of stack %s finished: %s",
            self.stack.name,
            outcome.value,
            extra={"stack": self.stack.name, "operation": "apply"},
        )
        if self.telemetry:
            self.telemetry.record_operation(
                "apply", self.stack.name, outcome.value, time.monotonic() - started
            )
        return outcome

    def _apply(self, request: ApplyRequest) -> DeployOutcome:
        try:
            template = self.template_source.resolve(request.template_ref)
        except TemplateResolutionError as e:
            logger.error("Template resolution failed: %s", e)
            self.progress.line(str(e))
            return DeployOutcome.FAILED

        validation = self.validator.check(template)
        if not validation.valid:
            self.progress.line(
                f"Unable to update - {validation.diagnostic_code} - "
                f"{validation.diagnostic_message}"
            )
            return DeployOutcome.FAILED

        since = self._now()
        if self.stack.exists():
            result = self._update(template, request)
        else:
            result = self._create(template, request)

        if result.kind is OperationResultKind.NO_CHANGES:
            self.progress.line(result.reason or "No updates are to be performed.")
            return DeployOutcome.NO_UPDATES
        if result.kind is OperationResultKind.REJECTED:
            logger.error(
                "Stack %s operation rejected: %s",
                self.stack.name,
                result.reason,
                extra={"stack": self.stack.name, "operation": "apply"},
            )
            self.progress.line(result.reason)
            return DeployOutcome.FAILED

        poll = self.poller.wait(since)
        if poll.state is not PollState.TERMINAL:
            return DeployOutcome.FAILED
        if poll.succeeded:
            return DeployOutcome.SUCCEEDED
        self.progress.line(DEPLOY_FAILED_MESSAGE)
        return DeployOutcome.FAILED

    def _update(self, template: TemplateBody, request: ApplyRequest) -> OperationResult:
        logger.info(
            "Updating stack %s from %s",
            self.stack.name,
            template,
            extra={"stack": self.stack.name, "operation": "update"},
        )
        return self.provisioning.update_stack(
            self.stack.name,
            template,
            request.parameters,
            capabilities=request.capabilities,
        )

    def _create(self, template: TemplateBody, request: ApplyRequest) -> OperationResult:
        self.progress.line("Initializing stack creation...")
        logger.info(
            "Creating stack %s from %s",
            self.stack.name,
            template,
            extra={"stack": self.stack.name, "operation": "create"},
        )
        result = self.provisioning.create_stack(
            self.stack.name,
            template,
            request.parameters,
            disable_rollback=request.disable_rollback,
            capabilities=request.capabilities,
            notify=request.notify,
            tags=request.tags,
        )
        if result.is_applied and self.settle_seconds > 0:
            # the provider needs a moment before a new stack is queryable
            self._sleep(self.settle_seconds)
        return result
