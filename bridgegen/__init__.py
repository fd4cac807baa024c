"""bridgegen -- coordinated TypeScript package generator for CoreBridge.

Generates three families of packages from one project description:
``core`` (domain, ports, use cases), ``contracts`` (OpenAPI, JSON Schema,
DTOs) and one ``adapter-<id>`` package per platform.

Quick usage::

    import asyncio
    from bridgegen import GenerationOrchestrator, ProjectConfig

    config = ProjectConfig(domains=["user", "project"], adapters=["web", "mobile"])
    result = asyncio.run(GenerationOrchestrator(config).run())
"""

__version__ = "0.1.0"

from bridgegen.config import ContractFormat, ProjectConfig
from bridgegen.errors import BridgegenError, ConfigError, GenerationError
from bridgegen.orchestrator import GenerationOrchestrator, GenerationResult
from bridgegen.planning import GenerationPlan

__all__ = [
    "BridgegenError",
    "ConfigError",
    "ContractFormat",
    "GenerationError",
    "GenerationOrchestrator",
    "GenerationPlan",
    "GenerationResult",
    "ProjectConfig",
    "__version__",
]
