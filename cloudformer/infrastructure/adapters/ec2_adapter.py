"""
AWS EC2 Instance Control Adapter

Architectural Intent:
- Implements InstanceControlPort with boto3's EC2 client
- Each call acts on exactly one instance so failures stay per-instance
- botocore errors are wrapped in InstanceControlError
"""

import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from cloudformer.domain.ports.instance_control_port import (
    InstanceControlError,
    InstanceControlPort,
)

logger = logging.getLogger(__name__)


class EC2Adapter(InstanceControlPort):
    def __init__(
        self,
        client: Any = None,
        session: Optional[boto3.session.Session] = None,
        region: Optional[str] = None,
        profile: Optional[str] = None,
    ) -> None:
        if client is None:
            session = session or boto3.Session(region_name=region, profile_name=profile)
            client = session.client("ec2")
        self._client = client

    def start_instance(self, instance_id: str) -> None:
        logger.info("AWS EC2 start_instances: instance_id=%s", instance_id)
        try:
            self._client.start_instances(InstanceIds=[instance_id])
        except ClientError as e:
            raise InstanceControlError(
                instance_id, e.response.get("Error", {}).get("Message", str(e))
            ) from e
        except BotoCoreError as e:
            raise InstanceControlError(instance_id, str(e)) from e

    def stop_instance(self, instance_id: str) -> None:
        logger.info("AWS EC2 stop_instances: instance_id=%s", instance_id)
        try:
            self._client.stop_instances(InstanceIds=[instance_id])
        except ClientError as e:
            raise InstanceControlError(
                instance_id, e.response.get("Error", {}).get("Message", str(e))
            ) from e
        except BotoCoreError as e:
            raise InstanceControlError(instance_id, str(e)) from e
