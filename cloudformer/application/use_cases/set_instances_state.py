"""
Set Instances State Use Case

Architectural Intent:
- Starts or stops every compute instance that belongs to the stack
- Best-effort, not transactional: each instance is attempted independently and
  its result recorded in an InstanceActionReport
"""

import logging
from typing import Callable

from cloudformer.application.reporting import reported
from cloudformer.domain.entities.deployment import InstanceAction, InstanceActionReport
from cloudformer.domain.entities.stack import StackHandle
from cloudformer.domain.ports.instance_control_port import (
    InstanceControlError,
    InstanceControlPort,
)
from cloudformer.domain.ports.progress_port import ProgressPort
from cloudformer.domain.ports.provisioning_port import StackNotFoundError

logger = logging.getLogger(__name__)

EC2_INSTANCE_TYPE = "AWS::EC2::Instance"


class SetInstancesState:
    def __init__(
        self,
        stack: StackHandle,
        instance_control: InstanceControlPort,
        progress: ProgressPort,
    ):
        self.stack = stack
        self.instance_control = instance_control
        self.progress = progress

    def _action_for(self, action: InstanceAction) -> Callable[[str], None]:
        if action is InstanceAction.START:
            return self.instance_control.start_instance
        return self.instance_control.stop_instance

    @reported
    def execute(self, action: InstanceAction) -> InstanceActionReport:
        self.progress.line(
            f"Attempting to {action.value} all ec2 instances in the stack {self.stack.name}"
        )
        if not self.stack.exists():
            self.progress.line("Stack not up.")
            return InstanceActionReport.not_deployed(action)

        try:
            resources = self.stack.resources()
        except StackNotFoundError:
            self.progress.line("Stack not up.")
            return InstanceActionReport.not_deployed(action)

        perform = self._action_for(action)
        successes: list[str] = []
        failures: list[tuple[str, str]] = []
        for resource in resources:
            if resource.resource_type != EC2_INSTANCE_TYPE:
                continue
            instance_id = resource.physical_id
            self.progress.line(
                f"Attempting to {action.value} Instance with physical_resource_id: {instance_id}"
            )
            try:
                perform(instance_id)
            except InstanceControlError as e:
                logger.warning("Failed to %s instance %s: %s", action.value, instance_id, e.reason)
                self.progress.line(f"Unable to {action.value} {instance_id} - {e.reason}")
                failures.append((instance_id, e.reason))
            else:
                successes.append(instance_id)

        report = InstanceActionReport(
            action=action,
            successes=tuple(successes),
            failures=tuple(failures),
        )
        logger.info("Instances of stack %s: %s", self.stack.name, report)
        return report
