"""Tests for the core package generator (bridgegen.generators.core_gen).

Covers:
- Expected file set for the default domains
- package.json / tsconfig.json contents
- Domain models, errors, and repository ports
- Use-case modules named by operationId
"""

from __future__ import annotations

import json

import pytest

from bridgegen.config import ProjectConfig
from bridgegen.generators.artifacts import GeneratedArtifactSet
from bridgegen.generators.core_gen import CoreGenerator, generate_core, use_case_module
from bridgegen.planning import GenerationPlan


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


class TestFileSet:
    def test_package_directory(self, core_set: GeneratedArtifactSet):
        assert core_set.package == "core"

    def test_expected_paths(self, core_set: GeneratedArtifactSet):
        expected = [
            "package.json",
            "tsconfig.json",
            "src/index.ts",
            "src/domain/models/User.ts",
            "src/domain/models/Project.ts",
            "src/domain/errors/DomainError.ts",
            "src/ports/index.ts",
            "src/ports/pagination.ts",
            "src/ports/IServices.ts",
            "src/ports/IUserRepository.ts",
            "src/ports/IProjectRepository.ts",
            "src/use-cases/index.ts",
            "src/use-cases/user/index.ts",
            "src/use-cases/user/ListUsers.ts",
            "src/use-cases/user/CreateUser.ts",
            "src/use-cases/user/GetUser.ts",
            "src/use-cases/project/index.ts",
            "src/use-cases/project/ListProjects.ts",
            "src/use-cases/project/CreateProject.ts",
            "src/use-cases/project/GetProject.ts",
        ]
        assert core_set.paths() == expected

    def test_use_case_per_route(self, plan: GenerationPlan, core_set: GeneratedArtifactSet):
        for route in plan.routes:
            path = f"src/use-cases/{route.domain.token}/{use_case_module(route)}.ts"
            assert path in core_set

    def test_no_domains(self):
        artifacts = generate_core(GenerationPlan.from_config(ProjectConfig(domains=[])))
        assert not any(p.startswith("src/domain/models/") for p in artifacts.paths())
        assert "src/domain/errors/DomainError.ts" in artifacts

    def test_deterministic(self, plan: GenerationPlan):
        first = CoreGenerator().generate(plan)
        second = CoreGenerator().generate(plan)
        assert list(first) == list(second)


class TestPackageJson:
    def test_name_and_dependencies(self, core_set: GeneratedArtifactSet):
        data = json.loads(core_set.get("package.json"))
        assert data["name"] == "@corebridge/core"
        assert data["version"] == "0.1.0"
        assert "zod" in data["dependencies"]

    def test_tsconfig(self, core_set: GeneratedArtifactSet):
        data = json.loads(core_set.get("tsconfig.json"))
        assert data["compilerOptions"]["strict"] is True
        assert data["compilerOptions"]["outDir"] == "./dist"


class TestDomainSources:
    def test_index_exports(self, core_set: GeneratedArtifactSet):
        index = core_set.get("src/index.ts")
        assert "export * from './domain/models/User.js';" in index
        assert "export * from './domain/models/Project.js';" in index
        assert "export * from './use-cases/index.js';" in index

    def test_model(self, core_set: GeneratedArtifactSet):
        model = core_set.get("src/domain/models/User.ts")
        assert "export const UserSchema = z.object({" in model
        assert "  id: z.string().uuid()," in model
        assert "  createdAt: z.date()," in model
        assert "export const CreateUserInputSchema = z.object({\n  name: z.string().min(1),\n});" in model
        assert "export interface UserResponse {" in model
        assert "    createdAt: entity.createdAt.toISOString()," in model

    def test_domain_errors(self, core_set: GeneratedArtifactSet):
        errors = core_set.get("src/domain/errors/DomainError.ts")
        for name, code, status in [
            ("ValidationError", "VALIDATION_ERROR", 400),
            ("NotFoundError", "NOT_FOUND", 404),
            ("ConflictError", "RESOURCE_EXISTS", 409),
            ("UnauthorizedError", "UNAUTHORIZED", 401),
            ("ForbiddenError", "FORBIDDEN", 403),
        ]:
            block = errors.split(f"export class {name} extends DomainError {{", 1)[1]
            assert f"readonly code = '{code}';" in block.split("}", 1)[0]
            assert f"readonly statusCode = {status};" in block

    def test_repository_port(self, core_set: GeneratedArtifactSet):
        port = core_set.get("src/ports/IProjectRepository.ts")
        assert "export interface IProjectRepository {" in port
        assert "findById(id: string): Promise<Project | null>;" in port
        assert "findAll(pagination: PaginationInput): Promise<PaginatedResult<Project>>;" in port

    def test_ports_index(self, core_set: GeneratedArtifactSet):
        index = core_set.get("src/ports/index.ts")
        assert "export * from './IUserRepository.js';" in index
        assert "export * from './IServices.js';" in index


class TestUseCases:
    def test_domain_index(self, core_set: GeneratedArtifactSet):
        assert core_set.get("src/use-cases/user/index.ts") == (
            "export * from './ListUsers.js';\n"
            "export * from './CreateUser.js';\n"
            "export * from './GetUser.js';\n"
        )

    def test_list_use_case(self, core_set: GeneratedArtifactSet):
        source = core_set.get("src/use-cases/user/ListUsers.ts")
        assert "export async function listUsers(" in source
        assert "export interface ListUsersDeps {" in source
        assert "Math.min(input.limit ?? 20, 100)" in source

    def test_create_use_case(self, core_set: GeneratedArtifactSet):
        source = core_set.get("src/use-cases/project/CreateProject.ts")
        assert "export async function createProject(" in source
        assert "export interface CreateProjectDeps {" in source
        assert "projectRepository: IProjectRepository;" in source
        assert "throw new ValidationError('Invalid input', fields);" in source

    def test_get_use_case(self, core_set: GeneratedArtifactSet):
        source = core_set.get("src/use-cases/user/GetUser.ts")
        assert "export async function getUser(" in source
        assert "  userId: string," in source
        assert "throw new NotFoundError('User', userId);" in source
