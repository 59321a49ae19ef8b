"""
Stack DTOs

Architectural Intent:
- Data Transfer Objects for stack use case boundaries
- Input validation at the application boundary
- Decouples CLI/caller representation from the provider API shapes
"""

from dataclasses import dataclass, field


def parse_key_values(pairs: list[str], what: str = "parameter") -> dict[str, str]:
    """Parse ``KEY=VALUE`` strings into a dict, rejecting duplicate keys."""
    result: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Invalid {what} {pair!r}, expected KEY=VALUE")
        if key in result:
            raise ValueError(f"Duplicate {what} key: {key}")
        result[key] = value
    return result


@dataclass(frozen=True)
class ApplyRequest:
    template_ref: str
    parameters: dict[str, str] = field(default_factory=dict)
    disable_rollback: bool = False
    capabilities: tuple[str, ...] = ()
    notify: tuple[str, ...] = ()
    tags: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.template_ref:
            raise ValueError("template_ref cannot be empty")
        for key in self.parameters:
            if not key:
                raise ValueError("parameter keys cannot be empty")
        for key in self.tags:
            if not key:
                raise ValueError("tag keys cannot be empty")
