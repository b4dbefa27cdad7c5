"""Chart file loading: YAML -> tasks and dependency edges."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError
from .logger import get_logger
from .models import Dependency, Task
from .schemas import ChartSchema


@dataclass
class Chart:
    """Tasks in row order plus their finish-to-start edges."""

    tasks: list[Task] = field(default_factory=list)
    dependencies: list[Dependency] = field(default_factory=list)

    def get_task(self, task_id: str) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None


def parse_chart(data: dict[str, Any]) -> Chart:
    """Build a Chart from already-loaded YAML data.

    Task order follows the mapping order in the file.

    Raises:
        ParseError: If the structure is invalid or a task requires an unknown task
    """
    try:
        schema = ChartSchema(**data)
    except PydanticValidationError as e:
        raise ParseError(f"Invalid chart structure: {e}") from e

    tasks: list[Task] = []
    dependencies: list[Dependency] = []
    for order, (task_id, entry) in enumerate(schema.tasks.items()):
        tasks.append(
            Task(
                id=task_id,
                start_date=entry.start,
                end_date=entry.end,
                type=entry.type,
                order=order,
                parent=entry.parent,
                name=entry.name or task_id,
            )
        )
        for required in entry.requires:
            if required not in schema.tasks:
                raise ParseError(f"Task '{task_id}' requires unknown task '{required}'")
            dependencies.append(Dependency(from_task_id=required, to_task_id=task_id))

    get_logger().checks("Loaded %d tasks and %d dependencies", len(tasks), len(dependencies))
    return Chart(tasks=tasks, dependencies=dependencies)


def load_chart(path: Path | str) -> Chart:
    """Load a chart YAML file.

    Raises:
        ParseError: If the file is missing, is not valid YAML, or does not
            match the chart schema
    """
    path = Path(path)
    if not path.exists():
        raise ParseError(f"File not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ParseError("YAML must contain a dictionary at the root level")

    return parse_chart(data)  # type: ignore[arg-type]
