"""
Validate Template Use Case

Architectural Intent:
- Submits a template to the provisioning service and returns a structured
  verdict; never mutates remote state
- check() is the Validator step reused by ApplyStack
"""

import logging
from cloudformer.application.reporting import reported
from cloudformer.domain.ports.progress_port import ProgressPort
from cloudformer.domain.ports.provisioning_port import ProvisioningPort
from cloudformer.domain.ports.template_source_port import (
    TemplateResolutionError,
    TemplateSourcePort,
)
from cloudformer.domain.value_objects.template import TemplateBody, ValidationResult

logger = logging.getLogger(__name__)


class ValidateTemplate:
    def __init__(
        self,
        provisioning: ProvisioningPort,
        template_source: TemplateSourcePort,
        progress: ProgressPort,
    ):
        self.provisioning = provisioning
        self.template_source = template_source
        self.progress = progress

    def check(self, template: TemplateBody) -> ValidationResult:
        result = self.provisioning.validate_template(template)
        if result.valid:
            logger.debug("Template %s is valid", template)
        else:
            logger.error(
                "Template validation failed: %s - %s",
                result.diagnostic_code,
                result.diagnostic_message,
            )
        return result

    @reported
    def execute(self, template_ref: str) -> ValidationResult:
        try:
            template = self.template_source.resolve(template_ref)
        except TemplateResolutionError as e:
            logger.error("%s", e)
            self.progress.line(str(e))
            return ValidationResult.invalid("TemplateResolutionError", e.reason)

        result = self.check(template)
        if result.valid:
            self.progress.line(f"Template {template_ref} is valid.")
        else:
            self.progress.line(
                f"Invalid template - {result.diagnostic_code} - {result.diagnostic_message}"
            )
        return result
