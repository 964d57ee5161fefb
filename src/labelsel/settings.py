"""Pydantic settings for consumers that derive selectors from a service name.

Discovery code queries an inventory for entities labelled as belonging to a
service. The selector for that query comes from a template with a positional
``{0}`` placeholder, e.g. ``app={0}`` -> ``app=my-service``.

Defaults are baked here. Reading them from files or the environment is the
caller's concern; build with keyword arguments or ``model_validate``.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from labelsel.selector import Selector, parse

_PROBE_SERVICE_NAME = "service"


def _format_template(template: str, service_name: str) -> str:
    try:
        return template.format(service_name)
    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
        raise ValueError(f"invalid selector template {template!r}: {e}") from e


class SelectorSettings(BaseModel):
    """Selector-related settings, frozen after construction."""

    model_config = {"frozen": True}

    pod_label_selector: str = "app={0}"

    @field_validator("pod_label_selector")
    @classmethod
    def _check_template(cls, value: str) -> str:
        # SelectorSyntaxError is a ValueError, so pydantic reports it as a validation error
        parse(_format_template(value, _PROBE_SERVICE_NAME))
        return value

    def pod_label_selector_for(self, service_name: str) -> str:
        return _format_template(self.pod_label_selector, service_name)

    def selector_for(self, service_name: str) -> Selector:
        return parse(self.pod_label_selector_for(service_name))
