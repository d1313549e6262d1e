from .instructions import SERVER_INSTRUCTIONS
from .prompts import PROMPTS, PromptDefinition, get_prompt
from .resources import RESOURCES, ResourceDefinition, get_resource, read_resource

__all__ = [
    "SERVER_INSTRUCTIONS",
    "PROMPTS",
    "PromptDefinition",
    "get_prompt",
    "RESOURCES",
    "ResourceDefinition",
    "get_resource",
    "read_resource",
]
