"""
Filter pipelines.

A pipeline is an ordered chain of filters; each enabled stage reads the
previous stage's result. Pipelines round-trip through plain dicts so hosts
can persist them as JSON. Loading is strict: unknown filters, unknown
parameters and invalid values (including malformed kernels) raise
FilterParameterError instead of being dropped.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List

from ..core import FilterParameterError
from .filters import ImageFilter, create_filter


@dataclass
class FilterPipeline:
    """Ordered chain of image filters."""

    filters: List[ImageFilter] = field(default_factory=list)
    enabled: bool = True

    @classmethod
    def of(cls, *filters: ImageFilter) -> "FilterPipeline":
        pipeline = cls()
        for image_filter in filters:
            pipeline.add_filter(image_filter)
        return pipeline

    def add_filter(self, image_filter: ImageFilter) -> "FilterPipeline":
        """Append a stage. Returns self so calls can be chained."""
        image_filter.order = len(self.filters)
        self.filters.append(image_filter)
        return self

    def remove_filter(self, index: int) -> ImageFilter:
        """Remove and return the stage at index. Raises IndexError."""
        removed = self.filters.pop(index)
        for order, image_filter in enumerate(self.filters):
            image_filter.order = order
        return removed

    def stages(self) -> List[ImageFilter]:
        """Filters that will actually run, in order."""
        if not self.enabled:
            return []
        return [f for f in self.filters if f.enabled]

    def validate(self) -> tuple[bool, List[str]]:
        """Check parameters of the stages that will run. Disabled filters are ignored."""
        errors = []
        for image_filter in self.stages():
            is_valid, filter_errors = image_filter.validate_parameters()
            if not is_valid:
                errors.extend(
                    f"Stage {image_filter.order} ({image_filter.name}): {error}"
                    for error in filter_errors
                )
        return len(errors) == 0, errors

    def __len__(self) -> int:
        return len(self.filters)

    def __getitem__(self, index: int) -> ImageFilter:
        return self.filters[index]

    def __iter__(self) -> Iterator[ImageFilter]:
        return iter(self.filters)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form. Matrix kernels are stored as nested lists."""
        return {
            "enabled": self.enabled,
            "filters": [
                {
                    "filter_id": f.filter_id,
                    "enabled": f.enabled,
                    "parameters": {name: param.value for name, param in f.parameters.items()},
                }
                for f in self.filters
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FilterPipeline":
        """Rebuild a pipeline. Raises FilterParameterError on any bad entry."""
        pipeline = cls(enabled=bool(data.get("enabled", True)))
        for index, entry in enumerate(data.get("filters", [])):
            pipeline.add_filter(_load_stage(index, entry))
        return pipeline


def _load_stage(index: int, entry: Dict[str, Any]) -> ImageFilter:
    filter_id = entry.get("filter_id")
    image_filter = create_filter(filter_id) if filter_id else None
    if image_filter is None:
        raise FilterParameterError(f"Stage {index}: unknown filter {filter_id!r}")

    for name, value in entry.get("parameters", {}).items():
        param = image_filter.get_parameter(name)
        if param is None:
            raise FilterParameterError(
                f"Stage {index} ({image_filter.name}): unknown parameter {name!r}"
            )
        # set_parameter rebuilds kernels, so a malformed matrix fails here
        if not image_filter.set_parameter(name, value):
            _, error = param.validate()
            raise FilterParameterError(f"Stage {index} ({image_filter.name}): {error}")

    image_filter.enabled = bool(entry.get("enabled", True))
    return image_filter
