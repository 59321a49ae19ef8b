"""Tests for SetInstancesState use case."""

from cloudformer.application.use_cases.set_instances_state import SetInstancesState
from cloudformer.domain.entities.deployment import InstanceAction
from cloudformer.domain.entities.stack import StackHandle
from cloudformer.domain.value_objects.stack_event import StackResource
from tests.fakes import FakeInstanceControl, FakeProvisioning, RecordingProgress

RESOURCES = [
    StackResource("Web1", "i-0aaa", "AWS::EC2::Instance", "CREATE_COMPLETE"),
    StackResource("Bucket", "web-assets", "AWS::S3::Bucket", "CREATE_COMPLETE"),
    StackResource("Web2", "i-0bbb", "AWS::EC2::Instance", "CREATE_COMPLETE"),
]


def _use_case(provisioning, control):
    progress = RecordingProgress()
    return SetInstancesState(StackHandle("web", provisioning), control, progress), progress


class TestSetInstancesState:
    def test_stop_only_instances(self):
        control = FakeInstanceControl()
        use_case, _ = _use_case(FakeProvisioning(exists=True, resources=RESOURCES), control)

        report = use_case.execute(InstanceAction.STOP)

        assert control.calls == [("stop", "i-0aaa"), ("stop", "i-0bbb")]
        assert report.successes == ("i-0aaa", "i-0bbb")
        assert report.failures == ()
        assert report.ok

    def test_start(self):
        control = FakeInstanceControl()
        use_case, progress = _use_case(
            FakeProvisioning(exists=True, resources=RESOURCES), control
        )

        use_case.execute(InstanceAction.START)

        assert control.calls == [("start", "i-0aaa"), ("start", "i-0bbb")]
        assert progress.lines[0] == "Attempting to start all ec2 instances in the stack web"

    def test_one_failure_does_not_abort_batch(self):
        control = FakeInstanceControl(failing={"i-0aaa": "IncorrectInstanceState"})
        use_case, progress = _use_case(
            FakeProvisioning(exists=True, resources=RESOURCES), control
        )

        report = use_case.execute(InstanceAction.STOP)

        assert control.calls == [("stop", "i-0aaa"), ("stop", "i-0bbb")]
        assert report.successes == ("i-0bbb",)
        assert report.failures == (("i-0aaa", "IncorrectInstanceState"),)
        assert report.deployed
        assert any("Unable to stop i-0aaa" in line for line in progress.lines)

    def test_stack_not_up(self):
        control = FakeInstanceControl()
        use_case, progress = _use_case(FakeProvisioning(exists=False), control)

        report = use_case.execute(InstanceAction.STOP)

        assert report.deployed is False
        assert control.calls == []
        assert progress.lines[-1] == "Stack not up."

    def test_stack_without_instances(self):
        control = FakeInstanceControl()
        use_case, _ = _use_case(
            FakeProvisioning(exists=True, resources=[RESOURCES[1]]), control
        )

        report = use_case.execute(InstanceAction.START)

        assert control.calls == []
        assert report.ok
