"""Tests for the flask chart CLI commands."""

import pytest

from emergency_network.services.chart_service import move_and_save
from emergency_network.services.layout_store import get_layout
from emergency_network.services.school_store import create_school
from emergency_network.services.staff_store import replace_staff


@pytest.fixture
def school_id(db_session):
    school = create_school("Hanbit Middle School", "Park")
    replace_staff(school.id, [
        {"id": "p", "name": "Park", "department": "Office", "position": "principal", "contact": "010-1"},
        {"id": "h", "name": "Kim", "department": "Math", "position": "department_head", "contact": "010-2"},
        {"id": "s", "name": "Lee", "department": "Math", "position": "staff", "contact": "010-3"},
        {"id": "o", "name": "Jung", "department": "Music", "position": "staff", "contact": "010-4"},
    ])
    return school.id


class TestChartShow:
    """Tests for flask chart show."""

    def test_prints_outline(self, runner, school_id):
        result = runner.invoke(args=["chart", "show", "--school", school_id])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "Source: derived"
        assert lines[1] == "- Park [Principal] Office / 010-1"
        assert lines[2] == "  - Kim [Department Head] Math / 010-2"
        assert lines[3] == "    - Lee [Staff] Math / 010-3"
        assert "Not placed (no matching department head):" in result.output
        assert "  - Jung (Music)" in result.output

    def test_shows_saved_layout(self, runner, school_id):
        move_and_save(school_id, "s", "h", 0, "root", 1)

        result = runner.invoke(args=["chart", "show", "--school", school_id])

        assert result.output.splitlines()[0] == "Source: layout"
        assert "- Lee [Staff] Math / 010-3" in result.output.splitlines()

    def test_unknown_school(self, runner, db_session):
        result = runner.invoke(args=["chart", "show", "--school", "missing"])

        assert result.exit_code == 1
        assert "Error:" in result.output


class TestChartResetLayout:
    """Tests for flask chart reset-layout."""

    def test_reset(self, runner, school_id):
        move_and_save(school_id, "s", "h", 0, "root", 1)

        result = runner.invoke(args=["chart", "reset-layout", "--school", school_id])

        assert result.exit_code == 0
        assert get_layout(school_id) is None
