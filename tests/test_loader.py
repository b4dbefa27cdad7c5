"""Tests for chart file loading."""

from pathlib import Path

import pytest

from gantry.exceptions import ParseError
from gantry.loader import load_chart, parse_chart
from gantry.models import Dependency, TaskType

CHART_YAML = """
tasks:
  design:
    name: Design review
    start: 2025-01-06
    end: 2025-01-10
  build:
    start: "2025-01-13"
    end: "2025-01-24"
    requires: [design]
  release:
    type: milestone
    start: 2025-01-27
    requires: build
  phase:
    type: summary
"""


def write_chart(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "chart.yaml"
    path.write_text(text)
    return path


class TestLoadChart:
    """Test loading chart files from disk."""

    def test_valid_file(self, tmp_path: Path) -> None:
        """Test tasks, order and dependencies are loaded."""
        chart = load_chart(write_chart(tmp_path, CHART_YAML))

        assert [t.id for t in chart.tasks] == ["design", "build", "release", "phase"]
        assert [t.order for t in chart.tasks] == [0, 1, 2, 3]
        assert chart.dependencies == [
            Dependency("design", "build"),
            Dependency("build", "release"),
        ]

    def test_unquoted_dates_become_strings(self, tmp_path: Path) -> None:
        """Test YAML dates are kept as YYYY-MM-DD strings."""
        chart = load_chart(write_chart(tmp_path, CHART_YAML))

        design = chart.get_task("design")
        assert design is not None
        assert design.start_date == "2025-01-06"
        assert design.end_date == "2025-01-10"

    def test_names_and_types(self, tmp_path: Path) -> None:
        """Test the name defaults to the task id."""
        chart = load_chart(write_chart(tmp_path, CHART_YAML))

        assert chart.get_task("design").name == "Design review"  # type: ignore[union-attr]
        release = chart.get_task("release")
        assert release is not None
        assert release.name == "release"
        assert release.type == TaskType.MILESTONE
        assert release.end_date is None
        phase = chart.get_task("phase")
        assert phase is not None
        assert phase.start_date is None

    def test_get_task_missing(self, tmp_path: Path) -> None:
        """Test looking up an unknown id."""
        assert load_chart(write_chart(tmp_path, CHART_YAML)).get_task("nope") is None

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test an empty file is an empty chart."""
        chart = load_chart(write_chart(tmp_path, ""))
        assert chart.tasks == []
        assert chart.dependencies == []

    def test_empty_tasks_key(self, tmp_path: Path) -> None:
        """Test a bare `tasks:` key is an empty chart."""
        assert load_chart(write_chart(tmp_path, "tasks:\n")).tasks == []

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises ParseError."""
        with pytest.raises(ParseError, match="File not found"):
            load_chart(tmp_path / "missing.yaml")

    @pytest.mark.parametrize(
        "text",
        [
            "tasks: [unclosed\n",
            "- a\n- b\n",
            "tasks:\n  a:\n    type: epic\n",
            "tasks:\n  a:\n    requires: [ghost]\n",
        ],
        ids=["bad-yaml", "not-a-mapping", "unknown-type", "unknown-dependency"],
    )
    def test_invalid(self, tmp_path: Path, text: str) -> None:
        """Test malformed charts raise ParseError."""
        with pytest.raises(ParseError):
            load_chart(write_chart(tmp_path, text))


class TestParseChart:
    """Test building charts from loaded data."""

    def test_dependency_on_later_task(self) -> None:
        """Test requires may name a task defined further down."""
        chart = parse_chart(
            {
                "tasks": {
                    "a": {"start": "2025-01-01", "requires": ["b"]},
                    "b": {"start": "2025-01-02"},
                }
            }
        )
        assert chart.dependencies == [Dependency("b", "a")]

    def test_unknown_dependency_message(self) -> None:
        """Test the error names both tasks."""
        with pytest.raises(ParseError, match="'a' requires unknown task 'ghost'"):
            parse_chart({"tasks": {"a": {"requires": "ghost"}}})
