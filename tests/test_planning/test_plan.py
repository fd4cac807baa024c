"""Tests for GenerationPlan (bridgegen.planning.plan)."""

from __future__ import annotations

import dataclasses

import pytest

from bridgegen.config import ProjectConfig
from bridgegen.planning import GenerationPlan
from bridgegen.planning.naming import derive_all
from bridgegen.planning.routes import build_route_table


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


class TestGenerationPlan:
    def test_from_config(self, default_config: ProjectConfig):
        plan = GenerationPlan.from_config(default_config)
        assert plan.config is default_config
        assert plan.domains == derive_all(["user", "project"])
        assert plan.routes == build_route_table(plan.domains)

    def test_routes_for(self, plan: GenerationPlan):
        user, project = plan.domains
        assert [r.operation_id for r in plan.routes_for(project)] == [
            "listProjects", "createProject", "getProject",
        ]
        assert all(r.domain == user for r in plan.routes_for(user))

    def test_immutable(self, plan: GenerationPlan):
        with pytest.raises(dataclasses.FrozenInstanceError):
            plan.routes = ()

    def test_no_domains(self):
        plan = GenerationPlan.from_config(ProjectConfig(domains=[]))
        assert plan.domains == ()
        assert plan.routes == ()
