"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from cloudformer.domain.ports.provisioning_port import (
    ProvisioningPort,
    StackNotFoundError,
)
from cloudformer.domain.ports.instance_control_port import (
    InstanceControlPort,
    InstanceControlError,
)
from cloudformer.domain.ports.template_source_port import (
    TemplateSourcePort,
    TemplateResolutionError,
)
from cloudformer.domain.ports.progress_port import ProgressPort

__all__ = [
    "ProvisioningPort",
    "StackNotFoundError",
    "InstanceControlPort",
    "InstanceControlError",
    "TemplateSourcePort",
    "TemplateResolutionError",
    "ProgressPort",
]
