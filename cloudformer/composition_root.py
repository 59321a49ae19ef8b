"""
Composition Root

Architectural Intent:
- Dependency injection composition root for the Cloudformer application
- Single place where all adapters and use cases are wired together
- No adapter instantiation should occur outside this module

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- One boto3 Session per container, shared by the CloudFormation and EC2
  clients; clients are released with the container
- Telemetry is only created when an endpoint is configured
"""

from dataclasses import dataclass
from typing import Optional

import boto3

from cloudformer.application.orchestration.stack_poller import StackPoller
from cloudformer.application.use_cases.apply_stack import ApplyStack
from cloudformer.application.use_cases.delete_stack import DeleteStack
from cloudformer.application.use_cases.describe_stack import DescribeStack
from cloudformer.application.use_cases.set_instances_state import SetInstancesState
from cloudformer.application.use_cases.validate_template import ValidateTemplate
from cloudformer.domain.entities.stack import StackHandle
from cloudformer.infrastructure.adapters.cloudformation_adapter import (
    CloudFormationAdapter,
)
from cloudformer.infrastructure.adapters.ec2_adapter import EC2Adapter
from cloudformer.infrastructure.adapters.template_resolver import TemplateResolver
from cloudformer.infrastructure.config import CloudformerConfig
from cloudformer.infrastructure.console import ConsoleReporter
from cloudformer.infrastructure.telemetry.otel_exporter import (
    OTELExporter,
    create_exporter,
)


@dataclass
class CloudformerContainer:
    """DI container holding all wired dependencies."""

    stack: StackHandle
    cloudformation: CloudFormationAdapter
    ec2: EC2Adapter
    template_resolver: TemplateResolver
    console: ConsoleReporter
    telemetry: Optional[OTELExporter]
    validate_template: ValidateTemplate
    apply_stack: ApplyStack
    delete_stack: DeleteStack
    describe_stack: DescribeStack
    set_instances_state: SetInstancesState


def create_container(
    stack_name: str,
    config: Optional[CloudformerConfig] = None,
    session: Optional[boto3.session.Session] = None,
) -> CloudformerContainer:
    """Create and wire all dependencies for one stack."""
    config = config or CloudformerConfig()
    if session is None:
        session = boto3.Session(
            region_name=config.aws.region or None,
            profile_name=config.aws.profile or None,
        )

    cloudformation = CloudFormationAdapter(session=session)
    ec2 = EC2Adapter(session=session)
    template_resolver = TemplateResolver()
    console = ConsoleReporter()
    telemetry = None
    if config.telemetry.endpoint:
        telemetry = create_exporter(
            endpoint=config.telemetry.endpoint,
            insecure=config.telemetry.insecure,
        )

    stack = StackHandle(stack_name, cloudformation)
    poller = StackPoller(
        stack,
        console,
        interval_seconds=config.polling.interval_seconds,
        max_wait_seconds=config.polling.max_wait_seconds,
    )
    validate_template = ValidateTemplate(cloudformation, template_resolver, console)
    apply_stack = ApplyStack(
        stack,
        cloudformation,
        template_resolver,
        validate_template,
        poller,
        console,
        settle_seconds=config.polling.settle_seconds,
        telemetry=telemetry,
    )
    delete_stack = DeleteStack(stack, cloudformation, poller, console, telemetry=telemetry)
    describe_stack = DescribeStack(stack, console)
    set_instances_state = SetInstancesState(stack, ec2, console)

    return CloudformerContainer(
        stack=stack,
        cloudformation=cloudformation,
        ec2=ec2,
        template_resolver=template_resolver,
        console=console,
        telemetry=telemetry,
        validate_template=validate_template,
        apply_stack=apply_stack,
        delete_stack=delete_stack,
        describe_stack=describe_stack,
        set_instances_state=set_instances_state,
    )
