"""
Job configuration for distributed split planning and execution.

A JobConfig carries the query text and its positional parameters from the
process that plans the splits to every worker that executes one. Parameters
are zero-based and string typed: the query preparer converts them.

Workers usually receive configuration as a flat string map, so a JobConfig
converts to and from properties:

    rangesplit.query    = "select sum(impressions) from cube where ..."
    rangesplit.paramno  = "2"
    rangesplit.param.0  = "2024-01-01"
    rangesplit.param.1  = "US"
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from rangesplit.constants import PROP_PARAM, PROP_PARAM_NO, PROP_QUERY


@dataclass
class JobConfig:
    query_text: str
    parameters: Dict[int, str] = field(default_factory=dict)

    def set_param(self, index: int, value: str) -> None:
        """Set the query parameter at zero-based ``index``."""
        if index < 0:
            raise ValueError(f"Parameter index must be >= 0, got {index}")
        if not isinstance(value, str):
            raise TypeError(
                f"Parameter {index} must be a string, got {type(value).__name__}"
            )
        self.parameters[index] = value

    def get_param(self, index: int) -> Optional[str]:
        return self.parameters.get(index)

    @property
    def param_count(self) -> int:
        return max(self.parameters) + 1 if self.parameters else 0

    def ordered_parameters(self) -> List[Optional[str]]:
        """Parameters by index, with None for indexes never set."""
        return [self.parameters.get(i) for i in range(self.param_count)]

    def to_properties(self) -> Dict[str, str]:
        props = {
            PROP_QUERY: self.query_text,
            PROP_PARAM_NO: str(self.param_count),
        }
        for index, value in sorted(self.parameters.items()):
            props[f"{PROP_PARAM}{index}"] = value
        return props

    @classmethod
    def from_properties(cls, props: Mapping[str, str]) -> "JobConfig":
        query_text = props.get(PROP_QUERY)
        if query_text is None:
            raise ValueError(f"Missing required property {PROP_QUERY!r}")

        config = cls(query_text=query_text)
        param_count = int(props.get(PROP_PARAM_NO, "0"))
        for index in range(param_count):
            value = props.get(f"{PROP_PARAM}{index}")
            if value is not None:
                config.set_param(index, value)
        return config
