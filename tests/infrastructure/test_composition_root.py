"""Tests for the composition root."""

import boto3

from cloudformer.application.use_cases.apply_stack import ApplyStack
from cloudformer.application.use_cases.delete_stack import DeleteStack
from cloudformer.application.use_cases.describe_stack import DescribeStack
from cloudformer.application.use_cases.set_instances_state import SetInstancesState
from cloudformer.application.use_cases.validate_template import ValidateTemplate
from cloudformer.composition_root import CloudformerContainer, create_container
from cloudformer.infrastructure.adapters.cloudformation_adapter import (
    CloudFormationAdapter,
)
from cloudformer.infrastructure.adapters.ec2_adapter import EC2Adapter
from cloudformer.infrastructure.config import CloudformerConfig, PollingConfig


def _session():
    return boto3.Session(
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        region_name="us-east-1",
    )


class TestCreateContainer:
    def test_wires_everything(self):
        container = create_container("web", session=_session())

        assert isinstance(container, CloudformerContainer)
        assert container.stack.name == "web"
        assert isinstance(container.cloudformation, CloudFormationAdapter)
        assert isinstance(container.ec2, EC2Adapter)
        assert isinstance(container.validate_template, ValidateTemplate)
        assert isinstance(container.apply_stack, ApplyStack)
        assert isinstance(container.delete_stack, DeleteStack)
        assert isinstance(container.describe_stack, DescribeStack)
        assert isinstance(container.set_instances_state, SetInstancesState)

    def test_no_telemetry_without_endpoint(self):
        container = create_container("web", session=_session())
        assert container.telemetry is None

    def test_polling_config_reaches_use_cases(self):
        config = CloudformerConfig(
            polling=PollingConfig(interval_seconds=5, settle_seconds=2, max_wait_seconds=60)
        )

        container = create_container("web", config=config, session=_session())

        poller = container.apply_stack.poller
        assert poller.interval_seconds == 5
        assert poller.max_wait_seconds == 60
        assert container.apply_stack.settle_seconds == 2
        assert container.delete_stack.poller is poller

    def test_session_built_from_config(self):
        config = CloudformerConfig()
        container = create_container("web", config=config)
        assert container.stack.name == "web"
