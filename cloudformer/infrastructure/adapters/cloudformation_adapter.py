"""
AWS CloudFormation Provisioning Adapter

Architectural Intent:
- Implements ProvisioningPort on top of boto3's CloudFormation client
- Translates botocore responses into domain value objects and botocore
  ClientErrors into typed results (ValidationResult, OperationResult,
  StackNotFoundError)

Design Decisions:
- __init__ accepts an explicit client for tests, otherwise builds one from a
  boto3 Session (region/profile)
- No caching: every call is a fresh API request
- The only place that inspects provider error text: "does not exist" for
  unknown stacks and "No updates are to be performed." for no-op updates
- ClientErrors on create/update are provider rejections and become
  OperationResult.rejected; BotoCoreErrors (credentials, endpoints, network)
  propagate as fatal
"""

import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import ClientError

from cloudformer.domain.entities.deployment import OperationResult
from cloudformer.domain.ports.provisioning_port import StackNotFoundError
from cloudformer.domain.value_objects.stack_event import (
    StackEvent,
    StackOutput,
    StackResource,
)
from cloudformer.domain.value_objects.template import TemplateBody, ValidationResult

logger = logging.getLogger(__name__)

NO_UPDATES_MESSAGE = "No updates are to be performed."


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


def _error_message(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Message", str(error))


def _is_missing_stack(error: ClientError) -> bool:
    return _error_code(error) == "ValidationError" and "does not exist" in _error_message(error)


def _parameters(parameters: dict[str, str]) -> list[dict[str, str]]:
    return [
        {"ParameterKey": key, "ParameterValue": value}
        for key, value in parameters.items()
    ]


def _tags(tags: dict[str, str]) -> list[dict[str, str]]:
    return [{"Key": key, "Value": value} for key, value in tags.items()]


class CloudFormationAdapter:
    """
    CloudFormation provisioning adapter.

    Configuration parameters
    ------------------------
    client : botocore client | None
        Pre-built ``cloudformation`` client. When omitted one is created from
        ``session`` or from a new boto3 Session.
    session : boto3.session.Session | None
        Session to build the client from.
    region : str | None
        Region for a newly created Session.
    profile : str | None
        Credentials profile for a newly created Session.
    """

    def __init__(
        self,
        client: Any = None,
        session: Optional[boto3.session.Session] = None,
        region: Optional[str] = None,
        profile: Optional[str] = None,
    ) -> None:
        if client is None:
            session = session or boto3.Session(region_name=region, profile_name=profile)
            client = session.client("cloudformation")
        self._client = client
        logger.debug("CloudFormationAdapter initialised (region=%s)", region)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def validate_template(self, template: TemplateBody) -> ValidationResult:
        try:
            self._client.validate_template(**template.as_api_kwargs())
        except ClientError as e:
            logger.debug("validate_template rejected %s: %s", template, e)
            return ValidationResult.invalid(_error_code(e), _error_message(e))
        return ValidationResult.ok()

    def _describe(self, stack_name: str) -> dict[str, Any]:
        try:
            response = self._client.describe_stacks(StackName=stack_name)
        except ClientError as e:
            if _is_missing_stack(e):
                raise StackNotFoundError(stack_name) from e
            raise
        stacks = response.get("Stacks") or []
        if not stacks:
            raise StackNotFoundError(stack_name)
        return stacks[0]

    def stack_exists(self, stack_name: str) -> bool:
        try:
            self._describe(stack_name)
        except StackNotFoundError:
            return False
        return True

    def get_stack_status(self, stack_name: str) -> str:
        return self._describe(stack_name)["StackStatus"]

    def get_stack_status_reason(self, stack_name: str) -> str:
        return self._describe(stack_name).get("StackStatusReason", "")

    def list_events(self, stack_name: str) -> list[StackEvent]:
        paginator = self._client.get_paginator("describe_stack_events")
        events: list[StackEvent] = []
        try:
            for page in paginator.paginate(StackName=stack_name):
                for raw in page.get("StackEvents", []):
                    events.append(
                        StackEvent(
                            event_id=raw["EventId"],
                            timestamp=raw["Timestamp"],
                            logical_id=raw.get("LogicalResourceId", ""),
                            physical_id=raw.get("PhysicalResourceId", ""),
                            resource_type=raw.get("ResourceType", ""),
                            status=raw.get("ResourceStatus", ""),
                            status_reason=raw.get("ResourceStatusReason", ""),
                        )
                    )
        except ClientError as e:
            if _is_missing_stack(e):
                raise StackNotFoundError(stack_name) from e
            raise
        logger.debug("describe_stack_events returned %d event(s)", len(events))
        return events

    def list_resources(self, stack_name: str) -> list[StackResource]:
        paginator = self._client.get_paginator("list_stack_resources")
        resources: list[StackResource] = []
        try:
            for page in paginator.paginate(StackName=stack_name):
                for raw in page.get("StackResourceSummaries", []):
                    resources.append(
                        StackResource(
                            logical_id=raw.get("LogicalResourceId", ""),
                            physical_id=raw.get("PhysicalResourceId", ""),
                            resource_type=raw.get("ResourceType", ""),
                            status=raw.get("ResourceStatus", ""),
                        )
                    )
        except ClientError as e:
            if _is_missing_stack(e):
                raise StackNotFoundError(stack_name) from e
            raise
        return resources

    def list_outputs(self, stack_name: str) -> list[StackOutput]:
        return [
            StackOutput(
                key=raw.get("OutputKey", ""),
                value=raw.get("OutputValue", ""),
                description=raw.get("Description", ""),
            )
            for raw in self._describe(stack_name).get("Outputs", [])
        ]

    # ------------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------------

    def create_stack(
        self,
        stack_name: str,
        template: TemplateBody,
        parameters: dict[str, str],
        disable_rollback: bool = False,
        capabilities: tuple[str, ...] = (),
        notify: tuple[str, ...] = (),
        tags: Optional[dict[str, str]] = None,
    ) -> OperationResult:
        logger.info(
            "CloudFormation create_stack: name=%s params=%d capabilities=%s",
            stack_name,
            len(parameters),
            list(capabilities),
        )
        try:
            response = self._client.create_stack(
                StackName=stack_name,
                Parameters=_parameters(parameters),
                DisableRollback=disable_rollback,
                Capabilities=list(capabilities),
                NotificationARNs=list(notify),
                Tags=_tags(tags or {}),
                **template.as_api_kwargs(),
            )
        except ClientError as e:
            logger.debug("create_stack rejected: %s", e)
            return OperationResult.rejected(_error_message(e))
        logger.debug("Stack creation initiated with ID: %s", response.get("StackId"))
        return OperationResult.applied()

    def update_stack(
        self,
        stack_name: str,
        template: TemplateBody,
        parameters: dict[str, str],
        capabilities: tuple[str, ...] = (),
    ) -> OperationResult:
        logger.info(
            "CloudFormation update_stack: name=%s params=%d capabilities=%s",
            stack_name,
            len(parameters),
            list(capabilities),
        )
        try:
            self._client.update_stack(
                StackName=stack_name,
                Parameters=_parameters(parameters),
                Capabilities=list(capabilities),
                **template.as_api_kwargs(),
            )
        except ClientError as e:
            message = _error_message(e)
            if _error_code(e) == "ValidationError" and message == NO_UPDATES_MESSAGE:
                return OperationResult.no_changes(message)
            logger.debug("update_stack rejected: %s", e)
            return OperationResult.rejected(message)
        return OperationResult.applied()

    def delete_stack(self, stack_name: str) -> None:
        logger.info("CloudFormation delete_stack: name=%s", stack_name)
        self._client.delete_stack(StackName=stack_name)
