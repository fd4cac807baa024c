"""Package generators -- render core, contracts and adapter packages.

Every generator takes a :class:`~bridgegen.planning.GenerationPlan` and
returns a :class:`GeneratedArtifactSet`; none of them writes to disk.

Quick usage::

    from bridgegen.generators import generate_adapter, generate_contracts, generate_core
    from bridgegen.planning import GenerationPlan

    plan = GenerationPlan.from_config(config)
    core = generate_core(plan)
    mobile = generate_adapter(plan, "mobile")
"""

from bridgegen.generators.adapter_gen import AdapterGenerator, generate_adapter
from bridgegen.generators.artifacts import Artifact, GeneratedArtifactSet
from bridgegen.generators.contracts_gen import ContractsGenerator, generate_contracts
from bridgegen.generators.core_gen import CoreGenerator, generate_core
from bridgegen.generators.templates import TemplateRenderer

__all__ = [
    "AdapterGenerator",
    "Artifact",
    "ContractsGenerator",
    "CoreGenerator",
    "GeneratedArtifactSet",
    "TemplateRenderer",
    "generate_adapter",
    "generate_contracts",
    "generate_core",
]
