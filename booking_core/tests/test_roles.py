"""Tests for guide role requirements and template matching."""

from booking_core.roles import match_shift_template, required_roles_for_shift


class TestRequiredRoles:
    def test_single_tour_lead_only(self):
        assert required_roles_for_shift(1) == ["Lead Guide"]

    def test_multi_tour_adds_sweep(self):
        assert required_roles_for_shift(2) == ["Lead Guide", "Sweep Guide"]
        assert required_roles_for_shift(3) == ["Lead Guide", "Sweep Guide"]

    def test_configured_roles_capped_at_two(self):
        assert required_roles_for_shift(3, ("Lead", "Sweep", "Trainee")) == ["Lead", "Sweep"]

    def test_empty_roles_fall_back_to_lead(self):
        assert required_roles_for_shift(2, ()) == ["Lead Guide"]


class TestMatchShiftTemplate:
    TEMPLATES = [{"name": "Opening"}, {"name": "Tree Tops Zipline Tour (AM)"}, {"name": "tree tops zipline tour"}]

    def test_first_case_insensitive_match(self):
        assert match_shift_template("Tree Tops Zipline Tour", self.TEMPLATES) is self.TEMPLATES[1]

    def test_no_match(self):
        assert match_shift_template("Forest Flight Zipline Tour", self.TEMPLATES) is None

    def test_blank_tour_type(self):
        assert match_shift_template("", self.TEMPLATES) is None
