from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DEFAULT_CHECKERS = [
    "invalid_uri",
    "erroneous_span",
    "overlapping",
    "combined_tagging",
    "long_description",
]


@dataclass
class ComponentConfig:
    """Generic component configuration."""

    name: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CheckerConfig:
    """Top-level checking run configuration."""

    loader: ComponentConfig
    checkers: List[ComponentConfig]
    uri_checker: Optional[ComponentConfig] = None
    preprocess: bool = True
    language: str = "en"

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "CheckerConfig":
        def build(entry: Any) -> ComponentConfig:
            if isinstance(entry, str):
                return ComponentConfig(name=entry)
            if not isinstance(entry, dict) or "name" not in entry:
                raise ValueError(f"Invalid component entry: {entry!r}")
            return ComponentConfig(name=entry["name"], params=entry.get("params", {}))

        loader = build(data["loader"]) if data.get("loader") else ComponentConfig(name="jsonl")
        checkers = [build(c) for c in data.get("checkers", DEFAULT_CHECKERS)]
        if data.get("uri_checker"):
            uri_checker = build(data["uri_checker"])
        elif any(c.name == "invalid_uri" for c in checkers):
            uri_checker = ComponentConfig(name="http")
        else:
            uri_checker = None

        return CheckerConfig(
            loader=loader,
            checkers=checkers,
            uri_checker=uri_checker,
            preprocess=data.get("preprocess", True),
            language=data.get("language", "en"),
        )
